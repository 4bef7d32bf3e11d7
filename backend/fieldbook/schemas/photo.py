"""Photo and document schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fieldbook.models.document import DocumentType
from fieldbook.schemas.common import CreateSchema, PartialUpdate, to_naive_utc


def check_coordinates(latitude: Optional[float], longitude: Optional[float]) -> None:
    """Latitude and longitude are both present or both absent"""
    if (latitude is None) != (longitude is None):
        raise ValueError("latitude and longitude must be provided together")


class PhotoCreate(CreateSchema):
    """Photo record creation schema"""
    project_id: str = Field(..., min_length=1, description="Owning project id")
    filename: str = Field(..., min_length=1, max_length=500, description="Blob locator")
    description: Optional[str] = Field(None, description="Photo description")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    taken_at: Optional[datetime] = Field(None, description="Capture time; defaults to now")

    @field_validator("taken_at")
    @classmethod
    def normalize_taken_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    @model_validator(mode="after")
    def validate_coordinates(self):
        check_coordinates(self.latitude, self.longitude)
        return self


class PhotoUpdate(PartialUpdate):
    """Photo update schema"""
    description: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    taken_at: Optional[datetime] = None

    non_nullable: ClassVar = frozenset({"taken_at"})

    @field_validator("taken_at")
    @classmethod
    def normalize_taken_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class PhotoResponse(BaseModel):
    """Photo response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    filename: str
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    taken_at: datetime
    created_at: datetime


class DocumentCreate(CreateSchema):
    """Document record creation schema"""
    project_id: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1, max_length=500, description="Blob locator")
    original_name: str = Field(..., min_length=1, max_length=255)
    type: DocumentType = Field(default=DocumentType.OTHER)
    size: int = Field(..., ge=0, description="Size in bytes")


class DocumentUpdate(PartialUpdate):
    """Document update schema"""
    original_name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[DocumentType] = None

    non_nullable: ClassVar = frozenset({"original_name", "type"})


class DocumentResponse(BaseModel):
    """Document response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    filename: str
    original_name: str
    type: str
    size: int
    uploaded_at: datetime
