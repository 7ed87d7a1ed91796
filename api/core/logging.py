"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only installs the
root handler and level once at startup.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    resolved = logging.getLevelName((level or "").strip().upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
