"""Project model"""

import enum
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from fieldbook.models.base import BaseModel


class ProjectStatus(str, enum.Enum):
    """Project lifecycle status"""
    ACTIVE = "active"
    REVIEW = "review"
    COMPLETE = "complete"


class ProjectType(str, enum.Enum):
    """Kind of construction work"""
    BUILDING = "building"
    INFRASTRUCTURE = "infrastructure"
    RESIDENTIAL = "residential"


class Project(BaseModel):
    """
    Project model representing a construction project or job site.
    Every other project record (photos, documents, test results, reminders,
    calendar events) belongs to exactly one project and is removed with it.
    """

    __tablename__ = "projects"
    __created_fields__ = ("created_at", "updated_at")
    __updated_field__ = "updated_at"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    status = Column(String(50), default=ProjectStatus.ACTIVE.value, nullable=False, index=True)
    type = Column(String(50), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    photos = relationship("Photo", back_populates="project", cascade="all, delete-orphan")
    documents = relationship("Document", back_populates="project", cascade="all, delete-orphan")
    test_results = relationship("TestResult", back_populates="project", cascade="all, delete-orphan")
    reminders = relationship("Reminder", back_populates="project", cascade="all, delete-orphan")
    calendar_events = relationship(
        "CalendarEvent", back_populates="project", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, status={self.status})>"
