"""Reminder and calendar endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from fieldbook.api.dependencies import get_schedule_service
from fieldbook.schemas.schedule import (
    CalendarEventCreate,
    CalendarEventDetailResponse,
    CalendarEventResponse,
    CalendarEventUpdate,
    ReminderCreate,
    ReminderDetailResponse,
    ReminderResponse,
    ReminderUpdate,
)
from fieldbook.services.exceptions import NotFoundError
from fieldbook.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api", tags=["Schedule"])


@router.get("/reminders", response_model=List[ReminderDetailResponse], status_code=status.HTTP_200_OK)
def get_active_reminders(service: ScheduleService = Depends(get_schedule_service)):
    """Get incomplete reminders, soonest first"""
    return service.list_active_reminders()


@router.get(
    "/projects/{project_id}/reminders",
    response_model=List[ReminderResponse],
    status_code=status.HTTP_200_OK,
)
def get_project_reminders(project_id: str, service: ScheduleService = Depends(get_schedule_service)):
    """Get every reminder of a project, completed ones included"""
    return service.list_project_reminders(project_id)


@router.get("/reminders/{reminder_id}", response_model=ReminderResponse, status_code=status.HTTP_200_OK)
def get_reminder(reminder_id: str, service: ScheduleService = Depends(get_schedule_service)):
    return service.get_reminder(reminder_id)


@router.post("/reminders", response_model=ReminderResponse, status_code=status.HTTP_201_CREATED)
def create_reminder(
    reminder: ReminderCreate,
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.create_reminder(reminder)


@router.patch("/reminders/{reminder_id}/complete", status_code=status.HTTP_204_NO_CONTENT)
def complete_reminder(reminder_id: str, service: ScheduleService = Depends(get_schedule_service)):
    """Mark a reminder completed; repeating the call is harmless"""
    service.complete_reminder(reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/reminders/{reminder_id}", response_model=ReminderResponse, status_code=status.HTTP_200_OK)
def update_reminder(
    reminder_id: str,
    reminder_update: ReminderUpdate,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Update a reminder; a completed reminder cannot be marked incomplete"""
    return service.update_reminder(reminder_id, reminder_update)


@router.delete("/reminders/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reminder(reminder_id: str, service: ScheduleService = Depends(get_schedule_service)):
    if not service.delete_reminder(reminder_id):
        raise NotFoundError("Reminder", reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/calendar/events",
    response_model=List[CalendarEventDetailResponse],
    status_code=status.HTTP_200_OK,
)
def get_calendar_events(
    month: Optional[int] = Query(None, ge=1, le=12, description="Month 1-12"),
    year: Optional[int] = Query(None, ge=1, le=9999, description="Four digit year"),
    service: ScheduleService = Depends(get_schedule_service),
):
    """
    Get calendar events, filtered to one month when month and year are both given

    Months are numbered 1-12 (January is 1), not 0-11.
    """
    return service.list_calendar_events(month, year)


@router.get(
    "/calendar/events/{event_id}",
    response_model=CalendarEventResponse,
    status_code=status.HTTP_200_OK,
)
def get_calendar_event(event_id: str, service: ScheduleService = Depends(get_schedule_service)):
    return service.get_calendar_event(event_id)


@router.post("/calendar/events", response_model=CalendarEventResponse, status_code=status.HTTP_201_CREATED)
def create_calendar_event(
    event: CalendarEventCreate,
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.create_calendar_event(event)


@router.patch(
    "/calendar/events/{event_id}",
    response_model=CalendarEventResponse,
    status_code=status.HTTP_200_OK,
)
def update_calendar_event(
    event_id: str,
    event_update: CalendarEventUpdate,
    service: ScheduleService = Depends(get_schedule_service),
):
    return service.update_calendar_event(event_id, event_update)


@router.delete("/calendar/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_calendar_event(event_id: str, service: ScheduleService = Depends(get_schedule_service)):
    if not service.delete_calendar_event(event_id):
        raise NotFoundError("Calendar event", event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
