"""Clock abstraction injected into the records core"""

from datetime import datetime, timezone, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current time as a naive UTC datetime"""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_timezone(name: str) -> tzinfo:
    """tzinfo for an IANA name; "UTC" needs no tz database"""
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Convert a stored naive UTC timestamp into the reporting timezone"""
    return value.replace(tzinfo=timezone.utc).astimezone(tz)
