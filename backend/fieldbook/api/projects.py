"""Project management endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from fieldbook.api.dependencies import get_project_service
from fieldbook.schemas.project import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdate,
)
from fieldbook.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("", response_model=List[ProjectDetailResponse], status_code=status.HTTP_200_OK)
def get_projects(service: ProjectService = Depends(get_project_service)):
    """
    Get all projects, newest first

    Each project carries photo and document counts and the next inspection label
    """
    return service.list_projects()


@router.get("/{project_id}", response_model=ProjectDetailResponse, status_code=status.HTTP_200_OK)
def get_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    """Get a single project with its derived fields"""
    return service.get_project(project_id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Create a project; status defaults to active"""
    return service.create_project(project)


@router.patch("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    service: ProjectService = Depends(get_project_service),
):
    """Update any subset of project fields"""
    return service.update_project(project_id, project_update)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    """
    Delete a project

    Photos, documents, test results, reminders and calendar events of the
    project are deleted with it
    """
    service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
