"""Shared schema helpers and the payload validator"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, model_validator

from fieldbook.services.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive UTC; offset-aware input is converted"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def field_errors(
    raw_errors: Iterable[Dict[str, Any]], skip: Iterable[str] = ("body",)
) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into field/message pairs, dropping ``skip`` loc parts"""
    skip = set(skip)
    errors = []
    for error in raw_errors:
        location = [str(part) for part in error.get("loc", ()) if part not in skip]
        errors.append({
            "field": ".".join(location) or "__root__",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


def validate_payload(schema: Type[SchemaT], data: Dict[str, Any]) -> SchemaT:
    """
    Validate raw input against a schema.

    Raises:
        ValidationError: with one entry per failing field
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {schema.__name__} payload",
            errors=field_errors(e.errors()),
        ) from e


class CreateSchema(BaseModel):
    """Base for create payloads"""

    model_config = ConfigDict(use_enum_values=True, validate_default=True, str_strip_whitespace=True)

    def fields(self) -> Dict[str, Any]:
        return self.model_dump()


class PartialUpdate(BaseModel):
    """
    Base for partial updates. Omitted fields mean "no change"; an explicit
    null is refused for fields listed in ``non_nullable``.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True, str_strip_whitespace=True)

    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        nulled = sorted(
            name for name in self.model_fields_set & self.non_nullable
            if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller actually sent"""
        return self.model_dump(exclude_unset=True)
