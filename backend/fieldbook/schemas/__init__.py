"""API schemas package"""

from .common import validate_payload
from .project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectDetailResponse,
    ProjectStats,
)
from .photo import (
    PhotoCreate,
    PhotoUpdate,
    PhotoResponse,
    DocumentCreate,
    DocumentUpdate,
    DocumentResponse,
)
from .material_test import (
    MaterialTestCreate,
    MaterialTestUpdate,
    MaterialTestResponse,
    TestResultCreate,
    TestResultUpdate,
    TestResultResponse,
    TestResultDetailResponse,
)
from .schedule import (
    ReminderCreate,
    ReminderUpdate,
    ReminderResponse,
    ReminderDetailResponse,
    CalendarEventCreate,
    CalendarEventUpdate,
    CalendarEventResponse,
    CalendarEventDetailResponse,
)

__all__ = [
    "validate_payload",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectDetailResponse",
    "ProjectStats",
    "PhotoCreate",
    "PhotoUpdate",
    "PhotoResponse",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "MaterialTestCreate",
    "MaterialTestUpdate",
    "MaterialTestResponse",
    "TestResultCreate",
    "TestResultUpdate",
    "TestResultResponse",
    "TestResultDetailResponse",
    "ReminderCreate",
    "ReminderUpdate",
    "ReminderResponse",
    "ReminderDetailResponse",
    "CalendarEventCreate",
    "CalendarEventUpdate",
    "CalendarEventResponse",
    "CalendarEventDetailResponse",
]
