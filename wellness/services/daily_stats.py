"""
Daily stats — same-day summary of a user's activity log.

  mood_score         rounded mean of today's scored mood entries (None if none)
  completion_rate    fixed at 100
  mindfulness_count  therapy sessions across the whole history, not just today
  total_activities   activities logged today
  last_updated       the reference instant
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from wellness.services.timeline import (
    Activity,
    ActivityType,
    day_window,
    require_aware,
    within,
)

DEFAULT_COMPLETION_RATE = 100


@dataclass(frozen=True)
class DailyStats:
    mood_score: Optional[int]
    completion_rate: int
    mindfulness_count: int
    total_activities: int
    last_updated: datetime


def _rounded_mean(scores: list[int]) -> Optional[int]:
    if not scores:
        return None
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_daily_stats(activities: Sequence[Activity], now: datetime) -> DailyStats:
    require_aware(now)
    start, end = day_window(now)
    todays = within(activities, start, end)

    mood_scores = [a.mood_score for a in todays if a.has_mood_score]
    # Whole history, not today. See DESIGN.md open questions.
    therapy_sessions = sum(1 for a in activities if a.type == ActivityType.THERAPY)

    return DailyStats(
        mood_score=_rounded_mean(mood_scores),
        completion_rate=DEFAULT_COMPLETION_RATE,
        mindfulness_count=therapy_sessions,
        total_activities=len(todays),
        last_updated=now,
    )
