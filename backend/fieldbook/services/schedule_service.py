"""Inspection reminders and calendar events"""

import logging
from datetime import timezone, tzinfo
from typing import Any, Dict, List, Optional

from fieldbook.models import CalendarEvent, Project, Reminder
from fieldbook.schemas.schedule import (
    CalendarEventCreate,
    CalendarEventUpdate,
    ReminderCreate,
    ReminderUpdate,
)
from fieldbook.services import derivations, queries
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ScheduleService:
    """
    Service for reminders and calendar events.

    A reminder is Scheduled until completed; completion is terminal through
    the public operations and repeating it is a successful no-op.
    """

    def __init__(self, store: EntityStore, tz: tzinfo = timezone.utc):
        self.store = store
        self.tz = tz

    def _project_names(self) -> Dict[str, Project]:
        return {project.id: project for project in self.store.list(Project)}

    # Reminders

    def list_active_reminders(self) -> List[Dict[str, Any]]:
        """Incomplete reminders, soonest first, with ``project_name``"""
        with self.store.transaction():
            reminders = queries.active(self.store.list(Reminder))
            projects = self._project_names()
        return derivations.with_project_name(reminders, projects)

    def list_project_reminders(self, project_id: str) -> List[Reminder]:
        """All reminders of one project, completed ones included"""
        reminders = self.store.list(Reminder, Reminder.project_id == project_id)
        return sorted(reminders, key=derivations.reminder_order)

    def get_reminder(self, reminder_id: str) -> Reminder:
        return self.store.get(Reminder, reminder_id)

    def create_reminder(self, data: ReminderCreate) -> Reminder:
        with self.store.transaction():
            self.store.require_reference(Project, data.project_id, "project_id")
            reminder = self.store.create(Reminder, data.fields())

        logger.info(f"Scheduled reminder {reminder.id} for {reminder.scheduled_for}")
        return reminder

    def update_reminder(self, reminder_id: str, data: ReminderUpdate) -> Reminder:
        """
        Partial update. ``completed`` may be set to true here but never
        back to false.
        """
        changes = data.changes()
        with self.store.transaction():
            reminder = self.store.get(Reminder, reminder_id)
            if changes.get("completed") is False:
                if reminder.completed:
                    raise ValidationError(
                        "A completed reminder cannot be reopened",
                        errors=[{"field": "completed", "message": "cannot change from true to false"}],
                    )
                changes.pop("completed")
            if "project_id" in changes:
                self.store.require_reference(Project, changes["project_id"], "project_id")
            reminder = self.store.update(Reminder, reminder_id, changes)

        logger.info(f"Updated reminder {reminder_id}: {sorted(changes)}")
        return reminder

    def complete_reminder(self, reminder_id: str) -> Reminder:
        """
        Mark a reminder completed. Completing an already completed reminder
        succeeds without changes.

        Raises:
            NotFoundError: if the reminder does not exist
        """
        with self.store.transaction():
            reminder = self.store.get(Reminder, reminder_id)
            if reminder.completed:
                return reminder
            reminder = self.store.update(Reminder, reminder_id, {"completed": True})

        logger.info(f"Completed reminder {reminder_id}")
        return reminder

    def reopen_reminder(self, reminder_id: str) -> Reminder:
        """Return a completed reminder to the scheduled state (not exposed over HTTP)"""
        reminder = self.store.update(Reminder, reminder_id, {"completed": False})
        logger.info(f"Reopened reminder {reminder_id}")
        return reminder

    def delete_reminder(self, reminder_id: str) -> bool:
        deleted = self.store.delete(Reminder, reminder_id)
        if deleted:
            logger.info(f"Deleted reminder {reminder_id}")
        return deleted

    # Calendar events

    def list_calendar_events(
        self, month: Optional[int] = None, year: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Events in date order with ``project_name``; restricted to one month
        (1-12) of one year when both are given.
        """
        if month is not None and not 1 <= month <= 12:
            raise ValidationError(
                "Invalid month filter",
                errors=[{"field": "month", "message": "month must be between 1 and 12"}],
            )

        with self.store.transaction():
            events = self.store.list(
                CalendarEvent, order_by=(CalendarEvent.date, CalendarEvent.created_at, CalendarEvent.id)
            )
            projects = self._project_names()

        events = queries.by_month(events, month, year, self.tz)
        return derivations.with_project_name(events, projects)

    def get_calendar_event(self, event_id: str) -> CalendarEvent:
        return self.store.get(CalendarEvent, event_id)

    def create_calendar_event(self, data: CalendarEventCreate) -> CalendarEvent:
        with self.store.transaction():
            self.store.require_reference(Project, data.project_id, "project_id")
            event = self.store.create(CalendarEvent, data.fields())

        logger.info(f"Created {event.type} event {event.id} on {event.date}")
        return event

    def update_calendar_event(self, event_id: str, data: CalendarEventUpdate) -> CalendarEvent:
        changes = data.changes()
        with self.store.transaction():
            self.store.get(CalendarEvent, event_id)
            if "project_id" in changes:
                self.store.require_reference(Project, changes["project_id"], "project_id")
            event = self.store.update(CalendarEvent, event_id, changes)

        logger.info(f"Updated calendar event {event_id}: {sorted(changes)}")
        return event

    def delete_calendar_event(self, event_id: str) -> bool:
        deleted = self.store.delete(CalendarEvent, event_id)
        if deleted:
            logger.info(f"Deleted calendar event {event_id}")
        return deleted
