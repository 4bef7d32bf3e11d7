"""Filters and orderings over record collections"""

from datetime import timezone, tzinfo
from typing import Iterable, List, Optional

from fieldbook.models import CalendarEvent, MaterialTest, Reminder
from fieldbook.services.clock import to_local
from fieldbook.services.derivations import reminder_order


def by_category(tests: Iterable[MaterialTest], category: str) -> List[MaterialTest]:
    return [test for test in tests if test.category == category]


def by_month(
    events: Iterable[CalendarEvent],
    month: Optional[int] = None,
    year: Optional[int] = None,
    tz: tzinfo = timezone.utc,
) -> List[CalendarEvent]:
    """
    Events whose date falls in the given month (1-12) and year, evaluated
    in the reporting timezone. Unfiltered unless both are given.
    """
    events = list(events)
    if month is None or year is None:
        return events

    selected = []
    for event in events:
        local_date = to_local(event.date, tz)
        if local_date.month == month and local_date.year == year:
            selected.append(event)
    return selected


def active(reminders: Iterable[Reminder]) -> List[Reminder]:
    """Incomplete reminders, soonest first"""
    return sorted(
        (reminder for reminder in reminders if not reminder.completed),
        key=reminder_order,
    )
