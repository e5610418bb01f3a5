"""
Heatmap builder — trailing window of calendar days tagged with an intensity level.

Day i (i = window_days-1 … 0) covers [start_of_day(now - i days), +1 day).
Level thresholds on the day's activity count n:
  n == 0      → none
  1 <= n <= 2 → low
  3 <= n <= 4 → medium
  n >= 5      → high
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from wellness.core.errors import InvalidInputError
from wellness.services.timeline import (
    Activity,
    day_window,
    local_clock,
    require_aware,
    within,
)

DEFAULT_WINDOW_DAYS = 28

# Thresholds
LOW_MAX_ACTIVITIES    = 2
MEDIUM_MAX_ACTIVITIES = 4


class ActivityLevel(str, enum.Enum):
    none = "none"
    low = "low"
    medium = "medium"
    high = "high"


@dataclass(frozen=True)
class ActivitySummary:
    type: str
    name: str
    completed: bool
    time: str


@dataclass(frozen=True)
class DayActivity:
    date: datetime                        # start of the local day
    level: ActivityLevel
    activities: tuple[ActivitySummary, ...]

    @property
    def count(self) -> int:
        return len(self.activities)


def level_for(count: int) -> ActivityLevel:
    if count == 0:
        return ActivityLevel.none
    if count <= LOW_MAX_ACTIVITIES:
        return ActivityLevel.low
    if count <= MEDIUM_MAX_ACTIVITIES:
        return ActivityLevel.medium
    return ActivityLevel.high


def build_day_activity_series(
    activities: Sequence[Activity],
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> list[DayActivity]:
    """Return exactly `window_days` days, oldest first, ending on now's day."""
    require_aware(now)
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 1:
        raise InvalidInputError("window_days must be a positive integer.", "window_days", window_days)

    tz = now.tzinfo
    series: list[DayActivity] = []
    for offset in range(window_days - 1, -1, -1):
        start, end = day_window(now - timedelta(days=offset))
        bucket = within(activities, start, end)
        series.append(DayActivity(
            date=start,
            level=level_for(len(bucket)),
            activities=tuple(
                ActivitySummary(
                    type=a.type,
                    name=a.name,
                    completed=a.completed,
                    time=local_clock(a.timestamp, tz),
                )
                for a in bucket
            ),
        ))
    return series
