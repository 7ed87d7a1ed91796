"""
Comment persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends

from core.db import Database, get_database
from core.errors import StoreError


class CommentRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_by_project(self, project_id: int) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            """
            SELECT *
            FROM comments
            WHERE project_id = $1
            ORDER BY id
            """,
            project_id,
        )

    async def create_comment(self, *, project_id: int, text: str, name: str | None = None) -> dict[str, Any]:
        # No existence check on project_id; a foreign key, if present, rejects it.
        row = await self.db.fetch_one(
            """
            INSERT INTO comments (project_id, text, name)
            VALUES ($1, $2, $3)
            RETURNING *
            """,
            project_id,
            text,
            name,
        )
        if row is None:
            raise StoreError("Failed to insert comment.")
        return row

    async def delete_comment(self, comment_id: int) -> int:
        return await self.db.execute(
            "DELETE FROM comments WHERE id = $1",
            comment_id,
        )


def get_comment_repository(db: Database = Depends(get_database)) -> CommentRepository:
    return CommentRepository(db)
