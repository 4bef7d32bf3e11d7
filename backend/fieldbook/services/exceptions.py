"""Exceptions raised by the records core"""

from typing import Dict, List, Optional


class FieldbookError(Exception):
    """Base exception for records core errors"""

    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FieldbookError):
    """Input failed field constraints; nothing was written"""

    code = "validation_error"

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(FieldbookError):
    """The targeted id does not exist"""

    code = "not_found"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class IntegrityViolationError(FieldbookError):
    """A write would leave a dangling reference"""

    code = "integrity_violation"

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.value = value


class CascadeFailureError(FieldbookError):
    """A project delete was rolled back before completing"""

    code = "cascade_failure"


class BlobStoreError(FieldbookError):
    """Blob storage backend failure"""

    code = "blob_store_error"


class BlobNotFoundError(BlobStoreError):
    """No blob is stored under the locator"""

    code = "blob_not_found"

    def __init__(self, locator: str):
        super().__init__(f"Blob {locator} not found")
        self.locator = locator
