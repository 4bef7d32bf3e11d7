"""Database models package"""

from fieldbook.models.base import BaseModel
from fieldbook.models.project import Project, ProjectStatus, ProjectType
from fieldbook.models.photo import Photo
from fieldbook.models.document import Document, DocumentType
from fieldbook.models.material_test import (
    MaterialTest,
    MaterialCategory,
    TestResult,
    TestResultStatus,
)
from fieldbook.models.schedule import (
    Reminder,
    ReminderType,
    CalendarEvent,
    CalendarEventType,
)

# Export all models
__all__ = [
    "BaseModel",
    "Project",
    "ProjectStatus",
    "ProjectType",
    "Photo",
    "Document",
    "DocumentType",
    "MaterialTest",
    "MaterialCategory",
    "TestResult",
    "TestResultStatus",
    "Reminder",
    "ReminderType",
    "CalendarEvent",
    "CalendarEventType",
]
