"""Reminder and calendar event models"""

import enum
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from fieldbook.models.base import BaseModel


class ReminderType(str, enum.Enum):
    """Inspection reminder kinds"""
    FORM_599 = "599"
    SW3P = "sw3p"
    MATERIAL_TEST = "material_test"


class CalendarEventType(str, enum.Enum):
    """Calendar event kinds"""
    INSPECTION = "inspection"
    VISIT = "visit"
    DEADLINE = "deadline"


class Reminder(BaseModel):
    """
    Scheduled inspection reminder.
    ``completed`` only moves from False to True through the public API.
    """

    __tablename__ = "reminders"
    __created_fields__ = ("created_at",)

    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)
    scheduled_for = Column(DateTime, nullable=False, index=True)
    completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, nullable=False)

    project = relationship("Project", back_populates="reminders")

    def __repr__(self):
        return f"<Reminder(id={self.id}, scheduled_for={self.scheduled_for}, completed={self.completed})>"


class CalendarEvent(BaseModel):
    """Dated project event shown on the calendar"""

    __tablename__ = "calendar_events"
    __created_fields__ = ("created_at",)

    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(String(50), nullable=False)
    created_at = Column(DateTime, nullable=False)

    project = relationship("Project", back_populates="calendar_events")
