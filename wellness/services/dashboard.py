"""
Dashboard snapshot: all three derived views computed from one activity list.

Callers recompute explicitly on load, after an append, and when the client's
refresh timer fires. Nothing here caches or subscribes.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from wellness.services.daily_stats import DailyStats, compute_daily_stats
from wellness.services.heatmap import DEFAULT_WINDOW_DAYS, DayActivity, build_day_activity_series
from wellness.services.insight_engine import Insight, generate_insights
from wellness.services.timeline import Activity


@dataclass(frozen=True)
class Dashboard:
    generated_at: datetime
    stats: DailyStats
    heatmap: list[DayActivity]
    insights: list[Insight]


def build_dashboard(
    activities: Sequence[Activity],
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> Dashboard:
    snapshot = tuple(activities)
    return Dashboard(
        generated_at=now,
        stats=compute_daily_stats(snapshot, now),
        heatmap=build_day_activity_series(snapshot, now, window_days),
        insights=generate_insights(snapshot, now),
    )
