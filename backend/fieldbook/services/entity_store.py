"""Entity store: keyed persistence for every record type"""

import logging
import re
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from fieldbook.models.base import BaseModel
from fieldbook.services.clock import Clock
from fieldbook.services.exceptions import IntegrityViolationError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def entity_label(model: Type[BaseModel]) -> str:
    """Human readable entity name, e.g. CalendarEvent -> Calendar event"""
    words = re.findall(r"[A-Z][a-z0-9]*", model.__name__)
    return " ".join([words[0]] + [word.lower() for word in words[1:]])


class EntityStore:
    """
    Single source of truth for all records.

    Every call is serialized through one re-entrant lock and runs inside a
    session transaction. Calls made while a transaction is open on the same
    thread join it, so a multi-step operation commits or rolls back as a
    whole and no other writer sees it half done.

    The lock is store-wide, so unrelated reads and writes are serialized as
    well: single-writer semantics, which also keeps the one shared in-memory
    SQLite connection to a single thread at a time.
    """

    def __init__(self, session_factory: sessionmaker, clock: Clock):
        self._session_factory = session_factory
        self.clock = clock
        self._lock = threading.RLock()
        self._local = threading.local()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Open a transaction, or join the one already open on this thread"""
        current = getattr(self._local, "session", None)
        if current is not None:
            yield current
            return

        with self._lock:
            session = self._session_factory()
            self._local.session = session
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                self._local.session = None
                session.close()

    def create(self, model: Type[ModelT], fields: Dict[str, Any]) -> ModelT:
        """
        Persist a new record.

        The id is always generated here. Creation timestamps declared by the
        model are filled with the current time unless supplied.
        """
        values = {key: value for key, value in fields.items() if key != "id"}
        now = self.clock.now()
        for field in model.__created_fields__:
            if values.get(field) is None:
                values[field] = now

        with self.transaction() as session:
            entity = model(**values)
            session.add(entity)
            session.flush()

        logger.debug(f"Created {entity!r}")
        return entity

    def find(self, model: Type[ModelT], entity_id: str) -> Optional[ModelT]:
        """Record by id, or None"""
        with self.transaction() as session:
            return session.get(model, entity_id)

    def get(self, model: Type[ModelT], entity_id: str) -> ModelT:
        """Record by id; NotFoundError when absent"""
        entity = self.find(model, entity_id)
        if entity is None:
            raise NotFoundError(entity_label(model), entity_id)
        return entity

    def exists(self, model: Type[BaseModel], entity_id: Optional[str]) -> bool:
        if entity_id is None:
            return False
        return self.find(model, entity_id) is not None

    def update(self, model: Type[ModelT], entity_id: str, changes: Dict[str, Any]) -> ModelT:
        """
        Apply a partial update. Omitted fields keep their value; the model's
        update timestamp always moves forward.
        """
        with self.transaction() as session:
            entity = session.get(model, entity_id)
            if entity is None:
                raise NotFoundError(entity_label(model), entity_id)

            for field, value in changes.items():
                if field == "id":
                    continue
                setattr(entity, field, value)

            if model.__updated_field__:
                self._touch(entity, model.__updated_field__)

            session.flush()

        return entity

    def delete(self, model: Type[BaseModel], entity_id: str) -> bool:
        """Remove a record; False when it did not exist"""
        with self.transaction() as session:
            entity = session.get(model, entity_id)
            if entity is None:
                return False
            session.delete(entity)
            session.flush()

        logger.debug(f"Deleted {model.__name__} {entity_id}")
        return True

    def list(self, model: Type[ModelT], *criteria, order_by=()) -> List[ModelT]:
        """Records matching all criteria, in the requested order"""
        statement = select(model).where(*criteria)
        if order_by:
            statement = statement.order_by(*order_by)

        with self.transaction() as session:
            return list(session.scalars(statement).all())

    def count(self, model: Type[BaseModel], *criteria) -> int:
        statement = select(func.count(model.id)).where(*criteria)
        with self.transaction() as session:
            return session.scalar(statement) or 0

    def _touch(self, entity: BaseModel, field: str) -> None:
        """Set the update timestamp, strictly after its previous value"""
        now = self.clock.now()
        previous: Optional[datetime] = getattr(entity, field)
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        setattr(entity, field, now)

    def require_reference(self, model: Type[BaseModel], entity_id: Optional[str], field: str) -> None:
        """
        Raises:
            IntegrityViolationError: if ``entity_id`` names no existing record
        """
        if not self.exists(model, entity_id):
            label = entity_label(model)
            logger.warning(f"Rejected write: {field}={entity_id} references no {label}")
            raise IntegrityViolationError(
                f"{field} references {label.lower()} {entity_id}, which does not exist",
                field=field,
                value=entity_id,
            )
