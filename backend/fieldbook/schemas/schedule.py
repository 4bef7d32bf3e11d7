"""Reminder and calendar event schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from fieldbook.models.schedule import CalendarEventType, ReminderType
from fieldbook.schemas.common import CreateSchema, PartialUpdate, to_naive_utc


class ReminderCreate(CreateSchema):
    project_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    type: ReminderType
    scheduled_for: datetime
    completed: bool = False

    @field_validator("scheduled_for")
    @classmethod
    def normalize_scheduled_for(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class ReminderUpdate(PartialUpdate):
    """Reminder update; ``completed`` may only be set to true"""
    project_id: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[ReminderType] = None
    scheduled_for: Optional[datetime] = None
    completed: Optional[bool] = None

    non_nullable: ClassVar = frozenset(
        {"project_id", "title", "type", "scheduled_for", "completed"}
    )

    @field_validator("scheduled_for")
    @classmethod
    def normalize_scheduled_for(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    title: str
    type: str
    scheduled_for: datetime
    completed: bool
    created_at: datetime


class ReminderDetailResponse(ReminderResponse):
    project_name: str


class CalendarEventCreate(CreateSchema):
    project_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    date: datetime
    type: CalendarEventType

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class CalendarEventUpdate(PartialUpdate):
    project_id: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    date: Optional[datetime] = None
    type: Optional[CalendarEventType] = None

    non_nullable: ClassVar = frozenset({"project_id", "title", "date", "type"})

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class CalendarEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    title: str
    description: Optional[str] = None
    date: datetime
    type: str
    created_at: datetime


class CalendarEventDetailResponse(CalendarEventResponse):
    project_name: str
