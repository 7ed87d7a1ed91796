"""
Pydantic schemas for comment endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    project_id: int
    text: str = Field(..., min_length=1)
    name: str | None = None


class Comment(CommentCreate):
    id: int
