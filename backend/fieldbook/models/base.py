"""Base model with common fields for all database models"""

import uuid
from sqlalchemy import Column, String
from fieldbook.database import Base


def generate_id() -> str:
    """Opaque unique identifier for a new record"""
    return str(uuid.uuid4())


class BaseModel(Base):
    """
    Abstract base model with an opaque string id.

    Subclasses declare which timestamp columns the entity store fills on
    create (``__created_fields__``) and which column it refreshes on every
    update (``__updated_field__``).
    """

    __abstract__ = True

    __created_fields__: tuple = ()
    __updated_field__ = None

    id = Column(
        String(36),
        primary_key=True,
        default=generate_id,
        unique=True,
        nullable=False,
    )

    def to_dict(self) -> dict:
        """Column values keyed by attribute name"""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
