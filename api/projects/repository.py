"""
Project persistence (raw SQL).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends

from core.db import Database, affected_rows, get_database
from core.errors import StoreError

logger = logging.getLogger(__name__)

# list endpoints return this fixed column set; get/create return the full row.
SUMMARY_COLUMNS = "id, title, date, description, tags"


class ProjectRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_projects(self) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            f"""
            SELECT {SUMMARY_COLUMNS}
            FROM projects
            ORDER BY id
            """
        )

    async def list_projects_by_tag(self, tag: str) -> list[dict[str, Any]]:
        """
        Projects whose `tags` array contains `tag` (exact element match).
        """
        return await self.db.fetch_all(
            f"""
            SELECT {SUMMARY_COLUMNS}
            FROM projects
            WHERE $1 = ANY(tags)
            ORDER BY id
            """,
            tag,
        )

    async def get_project(self, project_id: int) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            """
            SELECT *
            FROM projects
            WHERE id = $1
            """,
            project_id,
        )

    async def create_project(
        self,
        *,
        date: Any,
        title: str,
        links: Any = None,
        subjects: Any = None,
        images: Any = None,
        documents: Any = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        row = await self.db.fetch_one(
            """
            INSERT INTO projects (date, title, links, subjects, images, documents, description, tags)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING *
            """,
            date,
            title,
            links,
            subjects,
            images,
            documents,
            description,
            tags,
        )
        if row is None:
            raise StoreError("Failed to insert project.")
        return row

    async def delete_with_comments(self, project_id: int) -> tuple[int, int]:
        """
        Delete a project and every comment that references it, atomically.

        Both statements run on one connection inside one transaction; any
        failure rolls both back. Returns (projects_deleted, comments_deleted).
        """
        try:
            async with self.db.transaction() as conn:
                comments_status = await conn.execute(
                    "DELETE FROM comments WHERE project_id = $1",
                    project_id,
                )
                projects_status = await conn.execute(
                    "DELETE FROM projects WHERE id = $1",
                    project_id,
                )
        except StoreError:
            logger.warning("delete_project_rolled_back project_id=%s", project_id)
            raise

        return affected_rows(projects_status), affected_rows(comments_status)


def get_project_repository(db: Database = Depends(get_database)) -> ProjectRepository:
    return ProjectRepository(db)
