"""
Comment business logic.
"""

from __future__ import annotations

import logging

from core.errors import NotFoundError

from . import schemas
from .repository import CommentRepository

logger = logging.getLogger(__name__)

COMMENT_NOT_FOUND = "Comentário não encontrado"
COMMENT_DELETED = "Comentário deletado"


async def list_comments(repository: CommentRepository, project_id: int) -> list[dict]:
    return await repository.list_by_project(project_id)


async def create_comment(repository: CommentRepository, payload: schemas.CommentCreate) -> dict:
    row = await repository.create_comment(
        project_id=payload.project_id,
        text=payload.text,
        name=payload.name,
    )
    logger.info("comment_created comment_id=%s project_id=%s", row.get("id"), payload.project_id)
    return row


async def delete_comment(repository: CommentRepository, comment_id: int) -> dict:
    deleted = await repository.delete_comment(comment_id)
    if deleted == 0:
        raise NotFoundError(COMMENT_NOT_FOUND)
    logger.info("comment_deleted comment_id=%s", comment_id)
    return {"message": COMMENT_DELETED}
