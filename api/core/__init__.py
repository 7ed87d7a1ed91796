"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses (DB wiring,
settings, logging, error translation). Resource-specific SQL and rules live
in the resource packages (`projects/`, `comments/`).
"""
