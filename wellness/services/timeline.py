"""
Activity record and the calendar-window helpers shared by the dashboard views.

Every window is resolved in the timezone carried by the reference instant
`now`: "today", "start of day" and "hour of day" all mean wall-clock values in
that zone. Activity timestamps may be in any zone; comparisons are by instant.

Public API
----------
Activity                          immutable activity record
require_aware(value, field)       -> datetime   (InvalidInputError if naive)
start_of_day(instant)             -> datetime
day_window(instant)               -> (start, end)   half-open
within(activities, start, end)    -> list[Activity]
since(activities, start)          -> list[Activity]
chronological(activities)         -> list[Activity]   stable by timestamp
local_clock(timestamp, tz)        -> "h:mm AM/PM"
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from wellness.core.errors import InvalidInputError

ONE_DAY = timedelta(days=1)


class ActivityType:
    MOOD       = "mood"
    GAME       = "game"
    THERAPY    = "therapy"
    MEDITATION = "meditation"
    BREATHING  = "breathing"


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Activity:
    """
    One logged user action. Never mutated; a correction is a new record.

    `type` is an open set of strings: unknown values are generic activities.
    """
    id: str
    type: str
    timestamp: datetime
    completed: bool = True
    name: str = ""
    mood_score: Optional[int] = None
    duration: Optional[float] = None
    description: Optional[str] = None
    mood_note: Optional[str] = None
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidInputError("Activity id must be a non-empty string.", "id", self.id)
        if not isinstance(self.type, str):
            raise InvalidInputError("Activity type must be a string.", "type", self.type)
        require_aware(self.timestamp, "timestamp")
        if self.mood_score is not None:
            if isinstance(self.mood_score, bool) or not isinstance(self.mood_score, int):
                raise InvalidInputError("mood_score must be an integer.", "mood_score", self.mood_score)
            if not 0 <= self.mood_score <= 100:
                raise InvalidInputError("mood_score must be within 0-100.", "mood_score", self.mood_score)
        if self.duration is not None and self.duration < 0:
            raise InvalidInputError("duration cannot be negative.", "duration", self.duration)

    @property
    def has_mood_score(self) -> bool:
        return self.type == ActivityType.MOOD and self.mood_score is not None


# ---------------------------------------------------------------------------
# Instants
# ---------------------------------------------------------------------------

def require_aware(value: object, field: str = "now") -> datetime:
    if not isinstance(value, datetime):
        raise InvalidInputError(f"{field} must be a datetime.", field, value)
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInputError(f"{field} must be timezone-aware.", field, value)
    return value


def start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def day_window(instant: datetime) -> tuple[datetime, datetime]:
    start = start_of_day(instant)
    return start, start + ONE_DAY


def local_clock(timestamp: datetime, tz: Optional[tzinfo]) -> str:
    """Format like "9:05 AM" in the given zone."""
    local = timestamp.astimezone(tz)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"


# ---------------------------------------------------------------------------
# Window filters (input order preserved)
# ---------------------------------------------------------------------------

def within(activities: Iterable[Activity], start: datetime, end: datetime) -> list[Activity]:
    """Activities with start <= timestamp < end."""
    return [a for a in activities if start <= a.timestamp < end]


def since(activities: Iterable[Activity], start: datetime) -> list[Activity]:
    return [a for a in activities if a.timestamp >= start]


def chronological(activities: Sequence[Activity]) -> list[Activity]:
    return sorted(activities, key=lambda a: a.timestamp)
