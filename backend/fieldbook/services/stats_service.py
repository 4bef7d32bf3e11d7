"""Whole-system counters for the dashboard"""

from fieldbook.models import Document, Photo, Project, ProjectStatus, Reminder
from fieldbook.schemas.project import ProjectStats
from fieldbook.services.entity_store import EntityStore


class StatsService:
    """Counters recomputed from the store on every call"""

    def __init__(self, store: EntityStore):
        self.store = store

    def get_stats(self) -> ProjectStats:
        with self.store.transaction():
            return ProjectStats(
                active_projects=self.store.count(
                    Project, Project.status == ProjectStatus.ACTIVE.value
                ),
                photos_count=self.store.count(Photo),
                pending_inspections=self.store.count(Reminder, Reminder.completed.is_(False)),
                documents_count=self.store.count(Document),
            )
