"""
Response shapes shared by every resource.
"""

from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse}}
STORE_ERROR_RESPONSE = {500: {"model": ErrorResponse}}
