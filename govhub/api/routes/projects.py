"""Read-only project endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from govhub.api.auth import verify_api_key
from govhub.api.dependencies import get_project_directory
from govhub.api.models import ErrorResponse, ProjectItem, ProjectListResponse
from govhub.projects.directory import ProjectDirectory

router = APIRouter()


@router.get(
    "/projects",
    response_model=ProjectListResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid API key"}},
    summary="List projects",
)
async def list_projects(
    api_key: str = Depends(verify_api_key),
    directory: ProjectDirectory = Depends(get_project_directory),
) -> ProjectListResponse:
    projects = await directory.list_all()
    return ProjectListResponse(
        projects=[ProjectItem.model_validate(p.to_dict()) for p in projects],
        total=len(projects),
    )


@router.get(
    "/projects/{project_id}",
    response_model=ProjectItem,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        404: {"model": ErrorResponse, "description": "Project not found"},
    },
    summary="Get project",
)
async def get_project(
    project_id: str,
    api_key: str = Depends(verify_api_key),
    directory: ProjectDirectory = Depends(get_project_directory),
) -> ProjectItem:
    project = await directory.get_by_id(project_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id!r} not found",
        )
    return ProjectItem.model_validate(project.to_dict())
