"""
Project business logic.

Repository rows are returned as-is; this layer only decides 404 vs success.
"""

from __future__ import annotations

import logging

from core.errors import NotFoundError

from . import schemas
from .repository import ProjectRepository

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Projeto não encontrado"
PROJECT_DELETED = "Projeto deletado"


async def list_projects(repository: ProjectRepository) -> list[dict]:
    return await repository.list_projects()


async def list_projects_by_class(repository: ProjectRepository, tag: str) -> list[dict]:
    return await repository.list_projects_by_tag(tag)


async def get_project(repository: ProjectRepository, project_id: int) -> dict:
    row = await repository.get_project(project_id)
    if row is None:
        raise NotFoundError(PROJECT_NOT_FOUND)
    return row


async def create_project(repository: ProjectRepository, payload: schemas.ProjectCreate) -> dict:
    row = await repository.create_project(
        date=payload.date,
        title=payload.title,
        links=payload.links,
        subjects=payload.subjects,
        images=payload.images,
        documents=payload.documents,
        description=payload.description,
        tags=payload.tags,
    )
    logger.info("project_created project_id=%s", row.get("id"))
    return row


async def delete_project(repository: ProjectRepository, project_id: int) -> dict:
    # Comments go even when the project row is already gone.
    projects_deleted, comments_deleted = await repository.delete_with_comments(project_id)
    if projects_deleted == 0:
        raise NotFoundError(PROJECT_NOT_FOUND)

    logger.info(
        "project_deleted project_id=%s comments_deleted=%s",
        project_id,
        comments_deleted,
    )
    return {"message": PROJECT_DELETED}
