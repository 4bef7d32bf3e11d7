"""Read-time derived fields computed from stored records"""

import math
from collections import Counter
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from fieldbook.models import Document, MaterialTest, Photo, Project, Reminder
from fieldbook.services.clock import to_local

UNKNOWN_PROJECT = "Unknown Project"
UNKNOWN_TEST = "Unknown Test"

SECONDS_PER_DAY = 24 * 60 * 60


def count_by_project(records: Iterable[Any]) -> Counter:
    """Number of records per project id"""
    return Counter(record.project_id for record in records)


def reminder_order(reminder: Reminder) -> tuple:
    """Ascending schedule; ties resolved by creation time, then id"""
    return (reminder.scheduled_for, reminder.created_at, reminder.id)


def next_pending_reminder(reminders: Iterable[Reminder]) -> Optional[Reminder]:
    pending = [reminder for reminder in reminders if not reminder.completed]
    if not pending:
        return None
    return min(pending, key=reminder_order)


def inspection_label(scheduled_for: datetime, now: datetime, tz: tzinfo = timezone.utc) -> str:
    """
    Render how far away an inspection is.

    Anything before ``now`` is "Overdue". Otherwise calendar days in the
    reporting timezone decide "Today" and "Tomorrow"; later dates show the
    ceiling of the remaining time in days.
    """
    if scheduled_for < now:
        return "Overdue"

    day_offset = (to_local(scheduled_for, tz).date() - to_local(now, tz).date()).days
    if day_offset == 0:
        return "Today"
    if day_offset == 1:
        return "Tomorrow"

    days = math.ceil((scheduled_for - now).total_seconds() / SECONDS_PER_DAY)
    return f"{max(days, 2)} days"


def next_inspection(
    reminders: Iterable[Reminder], now: datetime, tz: tzinfo = timezone.utc
) -> Optional[str]:
    """Label of the earliest incomplete reminder, or None when there is none"""
    reminder = next_pending_reminder(reminders)
    if reminder is None:
        return None
    return inspection_label(reminder.scheduled_for, now, tz)


def project_summaries(
    projects: Sequence[Project],
    photos: Iterable[Photo],
    documents: Iterable[Document],
    reminders: Iterable[Reminder],
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> List[Dict[str, Any]]:
    """Projects with photo_count, document_count and next_inspection"""
    photo_counts = count_by_project(photos)
    document_counts = count_by_project(documents)

    reminders_by_project: Dict[str, List[Reminder]] = {}
    for reminder in reminders:
        reminders_by_project.setdefault(reminder.project_id, []).append(reminder)

    summaries = []
    for project in projects:
        summary = project.to_dict()
        summary["photo_count"] = photo_counts.get(project.id, 0)
        summary["document_count"] = document_counts.get(project.id, 0)
        summary["next_inspection"] = next_inspection(
            reminders_by_project.get(project.id, []), now, tz
        )
        summaries.append(summary)
    return summaries


def with_project_name(
    records: Iterable[Any], projects: Mapping[str, Project]
) -> List[Dict[str, Any]]:
    """Attach project_name; dangling references read as a placeholder"""
    joined = []
    for record in records:
        row = record.to_dict()
        project = projects.get(record.project_id)
        row["project_name"] = project.name if project else UNKNOWN_PROJECT
        joined.append(row)
    return joined


def with_test_names(
    results: Iterable[Any],
    projects: Mapping[str, Project],
    tests: Mapping[str, MaterialTest],
) -> List[Dict[str, Any]]:
    """Attach project_name and test_name to test results"""
    joined = with_project_name(results, projects)
    for row in joined:
        test = tests.get(row["material_test_id"])
        row["test_name"] = test.name if test else UNKNOWN_TEST
    return joined
