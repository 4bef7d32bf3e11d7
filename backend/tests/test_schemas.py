"""Tests for payload validation"""

from datetime import datetime, timedelta, timezone

import pytest

from fieldbook.schemas import (
    CalendarEventCreate,
    DocumentCreate,
    PhotoCreate,
    ProjectCreate,
    ProjectUpdate,
    ReminderCreate,
    ReminderUpdate,
    validate_payload,
)
from fieldbook.schemas.common import field_errors
from fieldbook.services.exceptions import ValidationError


class TestValidatePayload:
    """Test conversion of schema failures into field errors"""

    def test_valid_payload(self):
        project = validate_payload(ProjectCreate, {"name": "Depot", "type": "building"})
        assert project.status == "active"

    def test_reports_each_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(ProjectCreate, {"name": "", "type": "bunker"})

        fields = {error["field"] for error in exc_info.value.errors}
        assert fields == {"name", "type"}

    def test_whitespace_name_is_empty(self):
        with pytest.raises(ValidationError):
            validate_payload(ProjectCreate, {"name": "   ", "type": "building"})

    def test_missing_required_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(ProjectCreate, {"name": "Depot"})
        assert exc_info.value.errors[0]["field"] == "type"

    def test_coordinates_must_pair(self):
        with pytest.raises(ValidationError):
            validate_payload(PhotoCreate, {"project_id": "p", "filename": "f", "longitude": 10})

    def test_document_size_not_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                DocumentCreate,
                {"project_id": "p", "filename": "f", "original_name": "a.pdf", "size": -1},
            )
        assert exc_info.value.errors[0]["field"] == "size"


class TestFieldErrors:
    """Test flattening of error locations"""

    def test_default_drops_body(self):
        errors = field_errors([{"loc": ("body", "photos", 0, "name"), "msg": "Field required"}])
        assert errors == [{"field": "photos.0.name", "message": "Field required"}]

    def test_custom_skip_and_root(self):
        errors = field_errors(
            [{"loc": ("query", "month"), "msg": "too big"}, {"loc": ("body",), "msg": "bad"}],
            skip=("body", "query"),
        )
        assert errors == [
            {"field": "month", "message": "too big"},
            {"field": "__root__", "message": "bad"},
        ]


class TestPartialUpdates:
    """Test omitted versus null fields"""

    def test_only_sent_fields_change(self):
        update = ProjectUpdate(location="Uptown")
        assert update.changes() == {"location": "Uptown"}

    def test_optional_field_may_be_cleared(self):
        assert ProjectUpdate(description=None).changes() == {"description": None}

    def test_required_field_cannot_be_null(self):
        with pytest.raises(ValidationError):
            validate_payload(ProjectUpdate, {"name": None})

    def test_enum_values_are_plain_strings(self):
        assert ProjectUpdate(status="complete").changes() == {"status": "complete"}

    def test_reminder_completed_cannot_be_null(self):
        with pytest.raises(ValidationError):
            validate_payload(ReminderUpdate, {"completed": None})


class TestTimestamps:
    """Test normalization of incoming timestamps to naive UTC"""

    def test_offset_converted(self):
        reminder = ReminderCreate(
            project_id="p",
            title="599",
            type="599",
            scheduled_for=datetime(2024, 11, 4, 8, 0, tzinfo=timezone(timedelta(hours=-6))),
        )
        assert reminder.scheduled_for == datetime(2024, 11, 4, 14, 0)
        assert reminder.completed is False

    def test_iso_string_parsed(self):
        event = CalendarEventCreate(
            project_id="p", title="Pour", date="2024-11-20T09:00:00Z", type="deadline"
        )
        assert event.date == datetime(2024, 11, 20, 9, 0)
        assert event.date.tzinfo is None

    def test_unknown_reminder_type(self):
        with pytest.raises(ValidationError):
            validate_payload(
                ReminderCreate,
                {"project_id": "p", "title": "x", "type": "weekly", "scheduled_for": "2024-11-20T09:00:00"},
            )
