"""Project lifecycle: creation, updates and cascading deletion"""

import logging
from datetime import timezone, tzinfo
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from fieldbook.models import Document, Photo, Project, Reminder
from fieldbook.schemas.project import ProjectCreate, ProjectUpdate
from fieldbook.services import derivations
from fieldbook.services.blob_store import BlobStore
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.exceptions import (
    BlobStoreError,
    CascadeFailureError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Dependent collections removed together with their project
CASCADE_RELATIONS = ("photos", "documents", "test_results", "reminders", "calendar_events")


class ProjectService:
    """Service for project records and their derived summary fields"""

    def __init__(
        self,
        store: EntityStore,
        blob_store: Optional[BlobStore] = None,
        tz: tzinfo = timezone.utc,
    ):
        self.store = store
        self.blob_store = blob_store
        self.tz = tz

    def list_projects(self) -> List[Dict[str, Any]]:
        """
        All projects, newest first, each with ``photo_count``,
        ``document_count`` and ``next_inspection``.
        """
        with self.store.transaction():
            projects = self.store.list(
                Project, order_by=(Project.created_at.desc(), Project.id)
            )
            photos = self.store.list(Photo)
            documents = self.store.list(Document)
            reminders = self.store.list(Reminder, Reminder.completed.is_(False))

        return derivations.project_summaries(
            projects, photos, documents, reminders, self.store.clock.now(), self.tz
        )

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """Single project with its derived fields"""
        with self.store.transaction():
            project = self.store.get(Project, project_id)
            photos = self.store.list(Photo, Photo.project_id == project_id)
            documents = self.store.list(Document, Document.project_id == project_id)
            reminders = self.store.list(
                Reminder,
                Reminder.project_id == project_id,
                Reminder.completed.is_(False),
            )

        return derivations.project_summaries(
            [project], photos, documents, reminders, self.store.clock.now(), self.tz
        )[0]

    def create_project(self, data: ProjectCreate) -> Project:
        project = self.store.create(Project, data.fields())
        logger.info(f"Created project {project.id} ({project.name})")
        return project

    def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        project = self.store.update(Project, project_id, data.changes())
        logger.info(f"Updated project {project_id}: {sorted(data.changes())}")
        return project

    def delete_project(self, project_id: str) -> Dict[str, int]:
        """
        Delete a project together with every record that references it.

        The project and all dependents go in one transaction: either all are
        removed or, on failure, none are. Stored photo and document bytes
        are released after the records are gone.

        Returns:
            Number of removed dependents per collection

        Raises:
            NotFoundError: if the project does not exist
            CascadeFailureError: if the deletion was rolled back
        """
        try:
            with self.store.transaction() as session:
                project = session.get(Project, project_id)
                if project is None:
                    raise NotFoundError("Project", project_id)

                removed = {
                    relation: len(getattr(project, relation))
                    for relation in CASCADE_RELATIONS
                }
                locators = [photo.filename for photo in project.photos]
                locators += [document.filename for document in project.documents]

                session.delete(project)
                session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Rolled back deletion of project {project_id}: {e}")
            raise CascadeFailureError(
                f"Project {project_id} could not be deleted; no records were removed"
            ) from e

        logger.info(f"Deleted project {project_id} with dependents {removed}")
        self._release_blobs(locators)
        return removed

    def _release_blobs(self, locators: List[str]) -> None:
        if self.blob_store is None:
            return
        for locator in locators:
            try:
                self.blob_store.delete(locator)
            except BlobStoreError as e:
                logger.warning(f"Orphaned blob {locator} after project delete: {e}")
