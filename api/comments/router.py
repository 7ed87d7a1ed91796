"""
Comment API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.schemas import NOT_FOUND_RESPONSE, STORE_ERROR_RESPONSE, MessageResponse

from . import schemas, service
from .repository import CommentRepository, get_comment_repository

router = APIRouter(responses=STORE_ERROR_RESPONSE)


@router.get("/comments/{project_id}", responses={200: {"model": list[schemas.Comment]}})
async def list_comments(
    project_id: int,
    repository: CommentRepository = Depends(get_comment_repository),
) -> list[dict]:
    return await service.list_comments(repository, project_id)


@router.post(
    "/comments",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": schemas.Comment}},
)
async def create_comment(
    payload: schemas.CommentCreate,
    repository: CommentRepository = Depends(get_comment_repository),
) -> dict:
    return await service.create_comment(repository, payload)


@router.delete(
    "/comments/{comment_id}",
    responses={200: {"model": MessageResponse}, **NOT_FOUND_RESPONSE},
)
async def delete_comment(
    comment_id: int,
    repository: CommentRepository = Depends(get_comment_repository),
) -> dict:
    return await service.delete_comment(repository, comment_id)
