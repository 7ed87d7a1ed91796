"""
Pydantic schemas for project endpoints.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Any

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1)
    date: Date
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    # Stored as jsonb and returned untouched.
    links: Any = None
    subjects: Any = None
    images: Any = None
    documents: Any = None


class ProjectSummary(BaseModel):
    id: int
    title: str
    date: Date
    description: str | None = None
    tags: list[str] | None = None


class Project(ProjectSummary):
    links: Any = None
    subjects: Any = None
    images: Any = None
    documents: Any = None
