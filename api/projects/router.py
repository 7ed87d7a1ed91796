"""
Project API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.schemas import NOT_FOUND_RESPONSE, STORE_ERROR_RESPONSE, MessageResponse

from . import schemas, service
from .repository import ProjectRepository, get_project_repository

router = APIRouter(responses=STORE_ERROR_RESPONSE)


@router.get("/projects", responses={200: {"model": list[schemas.ProjectSummary]}})
async def list_projects(
    repository: ProjectRepository = Depends(get_project_repository),
) -> list[dict]:
    return await service.list_projects(repository)


@router.get("/projects/class/{tag}", responses={200: {"model": list[schemas.ProjectSummary]}})
async def list_projects_by_class(
    tag: str,
    repository: ProjectRepository = Depends(get_project_repository),
) -> list[dict]:
    """
    Projects whose tags contain `tag`.
    """
    return await service.list_projects_by_class(repository, tag)


@router.get(
    "/projects/id/{project_id}",
    responses={200: {"model": schemas.Project}, **NOT_FOUND_RESPONSE},
)
async def get_project(
    project_id: int,
    repository: ProjectRepository = Depends(get_project_repository),
) -> dict:
    return await service.get_project(repository, project_id)


@router.post(
    "/projects",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": schemas.Project}},
)
async def create_project(
    payload: schemas.ProjectCreate,
    repository: ProjectRepository = Depends(get_project_repository),
) -> dict:
    return await service.create_project(repository, payload)


@router.delete(
    "/projects/{project_id}",
    responses={200: {"model": MessageResponse}, **NOT_FOUND_RESPONSE},
)
async def delete_project(
    project_id: int,
    repository: ProjectRepository = Depends(get_project_repository),
) -> dict:
    """
    Delete a project together with all of its comments.
    """
    return await service.delete_project(repository, project_id)
