from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from wellness.core.config import settings
from wellness.core.errors import UnknownTimezoneError


def local_zone(name: Optional[str] = None) -> tzinfo:
    zone = name or settings.TIMEZONE
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownTimezoneError(zone) from exc


def resolve_now(now: Optional[datetime] = None, zone: Optional[str] = None) -> datetime:
    """
    Reference instant for a computation. Defaults to the current time;
    naive values are read as wall-clock time in the configured zone.
    """
    tz = local_zone(zone)
    if now is None:
        return datetime.now(tz=tz)
    if now.tzinfo is None or now.utcoffset() is None:
        return now.replace(tzinfo=tz)
    return now


def as_utc(value: datetime) -> datetime:
    """Stored timestamps come back naive from SQLite; they are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
