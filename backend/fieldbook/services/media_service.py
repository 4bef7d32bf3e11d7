"""Photo and document records with their stored file bytes"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fieldbook.models import Document, Photo, Project
from fieldbook.schemas.common import validate_payload
from fieldbook.schemas.photo import (
    DocumentCreate,
    DocumentUpdate,
    PhotoCreate,
    PhotoUpdate,
    check_coordinates,
)
from fieldbook.services.blob_store import BlobStore
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.exceptions import BlobStoreError, ValidationError
from fieldbook.services.exif_service import ExifService

logger = logging.getLogger(__name__)


class MediaService:
    """
    Service for photos and documents.

    Uploads store the bytes first and create the record second; a record
    never points at a blob that was not fully written, and a blob whose
    record could not be created is removed again.
    """

    DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB

    def __init__(
        self,
        store: EntityStore,
        blob_store: BlobStore,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ):
        self.store = store
        self.blob_store = blob_store
        self.max_upload_bytes = max_upload_bytes

    # Photos

    def list_photos(self, project_id: str) -> List[Photo]:
        """Photos of a project, most recently taken first"""
        return self.store.list(
            Photo,
            Photo.project_id == project_id,
            order_by=(Photo.taken_at.desc(), Photo.created_at.desc()),
        )

    def get_photo(self, photo_id: str) -> Photo:
        return self.store.get(Photo, photo_id)

    def create_photo(self, data: PhotoCreate) -> Photo:
        """Create the photo record for an already stored blob"""
        with self.store.transaction():
            self.store.require_reference(Project, data.project_id, "project_id")
            photo = self.store.create(Photo, data.fields())

        logger.info(f"Created photo {photo.id} for project {photo.project_id}")
        return photo

    def upload_photo(
        self,
        project_id: str,
        content: bytes,
        filename: str,
        content_type: Optional[str] = None,
        description: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        taken_at: Optional[datetime] = None,
    ) -> Photo:
        """
        Store an uploaded photo and create its record.

        Capture time and position missing from the request are taken from
        the image EXIF when available.
        """
        self._check_upload(content, content_type, field="photo", images_only=True)

        fields = {
            "project_id": project_id,
            "filename": filename or "photo",
            "description": description,
            "latitude": latitude,
            "longitude": longitude,
            "taken_at": taken_at,
        }
        exif = ExifService.extract_photo_metadata(content)
        if latitude is None and longitude is None and "latitude" in exif:
            fields["latitude"] = exif["latitude"]
            fields["longitude"] = exif["longitude"]
        if taken_at is None and "taken_at" in exif:
            fields["taken_at"] = exif["taken_at"]

        payload = validate_payload(PhotoCreate, fields)
        self.store.require_reference(Project, project_id, "project_id")

        locator = self.blob_store.store(content, filename)
        try:
            return self.create_photo(payload.model_copy(update={"filename": locator}))
        except Exception:
            self._discard_blob(locator)
            raise

    def update_photo(self, photo_id: str, data: PhotoUpdate) -> Photo:
        changes = data.changes()
        with self.store.transaction():
            photo = self.store.get(Photo, photo_id)
            latitude = changes.get("latitude", photo.latitude)
            longitude = changes.get("longitude", photo.longitude)
            try:
                check_coordinates(latitude, longitude)
            except ValueError as e:
                raise ValidationError(
                    "Invalid photo update",
                    errors=[{"field": "latitude", "message": str(e)}],
                )
            photo = self.store.update(Photo, photo_id, changes)

        logger.info(f"Updated photo {photo_id}: {sorted(changes)}")
        return photo

    def delete_photo(self, photo_id: str) -> bool:
        with self.store.transaction():
            photo = self.store.find(Photo, photo_id)
            if photo is None:
                return False
            self.store.delete(Photo, photo_id)

        logger.info(f"Deleted photo {photo_id}")
        self._discard_blob(photo.filename)
        return True

    def read_photo(self, photo_id: str) -> Tuple[Photo, bytes]:
        """Photo record and its stored bytes"""
        photo = self.get_photo(photo_id)
        return photo, self.blob_store.retrieve(photo.filename)

    # Documents

    def list_documents(self, project_id: str) -> List[Document]:
        """Documents of a project, most recently uploaded first"""
        return self.store.list(
            Document,
            Document.project_id == project_id,
            order_by=(Document.uploaded_at.desc(), Document.id),
        )

    def get_document(self, document_id: str) -> Document:
        return self.store.get(Document, document_id)

    def create_document(self, data: DocumentCreate) -> Document:
        """Create the document record for an already stored blob"""
        with self.store.transaction():
            self.store.require_reference(Project, data.project_id, "project_id")
            document = self.store.create(Document, data.fields())

        logger.info(f"Created document {document.id} for project {document.project_id}")
        return document

    def upload_document(
        self,
        project_id: str,
        content: bytes,
        filename: str,
        content_type: Optional[str] = None,
        document_type: Optional[str] = None,
    ) -> Document:
        """Store an uploaded document and create its record"""
        self._check_upload(content, content_type, field="document")

        fields = {
            "project_id": project_id,
            "filename": filename or "document",
            "original_name": filename or "document",
            "size": len(content),
        }
        if document_type:
            fields["type"] = document_type

        payload = validate_payload(DocumentCreate, fields)
        self.store.require_reference(Project, project_id, "project_id")

        locator = self.blob_store.store(content, filename)
        try:
            return self.create_document(payload.model_copy(update={"filename": locator}))
        except Exception:
            self._discard_blob(locator)
            raise

    def update_document(self, document_id: str, data: DocumentUpdate) -> Document:
        document = self.store.update(Document, document_id, data.changes())
        logger.info(f"Updated document {document_id}: {sorted(data.changes())}")
        return document

    def delete_document(self, document_id: str) -> bool:
        with self.store.transaction():
            document = self.store.find(Document, document_id)
            if document is None:
                return False
            self.store.delete(Document, document_id)

        logger.info(f"Deleted document {document_id}")
        self._discard_blob(document.filename)
        return True

    def read_document(self, document_id: str) -> Tuple[Document, bytes]:
        """Document record and its stored bytes"""
        document = self.get_document(document_id)
        return document, self.blob_store.retrieve(document.filename)

    # Helpers

    def _check_upload(
        self,
        content: bytes,
        content_type: Optional[str],
        field: str,
        images_only: bool = False,
    ) -> None:
        """
        Raises:
            ValidationError: empty, oversized or (for photos) non-image upload
        """
        errors = []
        if not content:
            errors.append({"field": field, "message": "No file content provided"})
        elif len(content) > self.max_upload_bytes:
            errors.append({
                "field": field,
                "message": f"File size {len(content)} bytes exceeds maximum of {self.max_upload_bytes} bytes",
            })
        if images_only and content_type and not content_type.startswith("image/"):
            errors.append({"field": field, "message": f"Content type {content_type} is not an image"})

        if errors:
            raise ValidationError(f"Invalid {field} upload", errors=errors)

    def _discard_blob(self, locator: str) -> None:
        try:
            self.blob_store.delete(locator)
        except BlobStoreError as e:
            logger.warning(f"Failed to remove blob {locator}: {e}")
