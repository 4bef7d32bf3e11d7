"""Project schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from fieldbook.models.project import ProjectStatus, ProjectType
from fieldbook.schemas.common import CreateSchema, PartialUpdate


class ProjectCreate(CreateSchema):
    """Project creation schema"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    location: Optional[str] = Field(None, max_length=255, description="Site location")
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE, description="Project status")
    type: ProjectType = Field(..., description="Project type")


class ProjectUpdate(PartialUpdate):
    """Project update schema - all fields optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    location: Optional[str] = Field(None, max_length=255, description="Site location")
    status: Optional[ProjectStatus] = Field(None, description="Project status")
    type: Optional[ProjectType] = Field(None, description="Project type")

    non_nullable: ClassVar = frozenset({"name", "status", "type"})


class ProjectResponse(BaseModel):
    """Project response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    status: str
    type: str
    created_at: datetime
    updated_at: datetime


class ProjectDetailResponse(ProjectResponse):
    """Project with derived counts and next inspection label"""
    photo_count: int = Field(default=0, description="Number of photos in project")
    document_count: int = Field(default=0, description="Number of documents in project")
    next_inspection: Optional[str] = Field(
        None, description="Overdue, Today, Tomorrow or 'N days'; null without pending reminders"
    )


class ProjectStats(BaseModel):
    """Whole-system counters"""
    active_projects: int
    photos_count: int
    pending_inspections: int
    documents_count: int
