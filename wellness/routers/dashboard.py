"""
Dashboard router — derived views over a user's activity log.

GET /users/{user_id}/dashboard   — stats + heatmap + insights from one snapshot
GET /users/{user_id}/stats       — today's summary
GET /users/{user_id}/heatmap     — trailing window of daily intensity levels
GET /users/{user_id}/insights    — up to 3 prioritized insights (last 7 days)
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from wellness.core.config import settings
from wellness.db.base import get_db
from wellness.schemas.dashboard import (
    ActivitySummaryResponse,
    DailyStatsResponse,
    DashboardResponse,
    DayActivityResponse,
    HeatmapResponse,
    InsightListResponse,
    InsightResponse,
)
from wellness.services.clock import resolve_now
from wellness.services.daily_stats import DailyStats, compute_daily_stats
from wellness.services.dashboard import Dashboard, build_dashboard
from wellness.services.heatmap import DayActivity, build_day_activity_series
from wellness.services.insight_engine import Insight, generate_insights
from wellness.services.repository import load_activities

router = APIRouter(prefix="/users/{user_id}", tags=["dashboard"])

UserId = Annotated[str, Path(min_length=1, max_length=128, description="Owner of the activity log.")]
ReferenceNow = Annotated[Optional[datetime], Query(
    description=(
        "Reference instant. Defaults to the current time. Calendar days and "
        "hours are evaluated in this value's timezone (the server's configured "
        "zone for naive values)."
    ),
    examples=["2026-10-18T21:00:00+02:00"],
)]


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def stats_to_response(s: DailyStats) -> DailyStatsResponse:
    return DailyStatsResponse(
        mood_score=s.mood_score,
        completion_rate=s.completion_rate,
        mindfulness_count=s.mindfulness_count,
        total_activities=s.total_activities,
        last_updated=s.last_updated.isoformat(),
    )


def _day_to_response(d: DayActivity) -> DayActivityResponse:
    return DayActivityResponse(
        date=d.date.isoformat(),
        level=d.level.value,
        activities=[
            ActivitySummaryResponse(type=a.type, name=a.name, completed=a.completed, time=a.time)
            for a in d.activities
        ],
    )


def heatmap_to_response(days: list[DayActivity]) -> HeatmapResponse:
    return HeatmapResponse(
        window_days=len(days),
        days=[_day_to_response(d) for d in days],
    )


def insight_to_response(i: Insight) -> InsightResponse:
    return InsightResponse(
        title=i.title,
        description=i.description,
        icon=i.icon.value,
        priority=i.priority.value,
    )


def dashboard_to_response(d: Dashboard) -> DashboardResponse:
    return DashboardResponse(
        generated_at=d.generated_at.isoformat(),
        refresh_after_seconds=settings.STATS_REFRESH_SECONDS,
        stats=stats_to_response(d.stats),
        heatmap=heatmap_to_response(d.heatmap),
        insights=[insight_to_response(i) for i in d.insights],
    )


# ---------------------------------------------------------------------------
# GET /users/{user_id}/dashboard
# ---------------------------------------------------------------------------

@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="All dashboard views from one snapshot of the activity log",
    responses={
        200: {"description": "Stats, heatmap and insights."},
        503: {"description": "Activity store unavailable."},
    },
)
def get_dashboard(
    user_id: UserId,
    now: ReferenceNow = None,
    window_days: Optional[int] = Query(
        default=None, ge=1, le=366,
        description="Heatmap length in days. Defaults to HEATMAP_WINDOW_DAYS (28).",
    ),
    db: Session = Depends(get_db),
):
    """
    Load the user's activities once and derive:

    | View | Window |
    |---|---|
    | `stats`    | today (mindfulness count: whole history) |
    | `heatmap`  | trailing `window_days` calendar days, oldest first |
    | `insights` | last 7 days, at most 3 |

    `refresh_after_seconds` tells the client when to ask again.
    """
    activities = load_activities(db, user_id)
    dashboard = build_dashboard(
        activities,
        resolve_now(now),
        window_days or settings.HEATMAP_WINDOW_DAYS,
    )
    return dashboard_to_response(dashboard)


# ---------------------------------------------------------------------------
# Single views
# ---------------------------------------------------------------------------

@router.get("/stats", response_model=DailyStatsResponse, summary="Today's summary")
def get_stats(
    user_id: UserId,
    now: ReferenceNow = None,
    db: Session = Depends(get_db),
):
    return stats_to_response(compute_daily_stats(load_activities(db, user_id), resolve_now(now)))


@router.get("/heatmap", response_model=HeatmapResponse, summary="Daily activity intensity")
def get_heatmap(
    user_id: UserId,
    now: ReferenceNow = None,
    window_days: Optional[int] = Query(default=None, ge=1, le=366),
    db: Session = Depends(get_db),
):
    """Levels: 0 → none, 1–2 → low, 3–4 → medium, 5+ → high."""
    days = build_day_activity_series(
        load_activities(db, user_id),
        resolve_now(now),
        window_days or settings.HEATMAP_WINDOW_DAYS,
    )
    return heatmap_to_response(days)


@router.get("/insights", response_model=InsightListResponse, summary="Prioritized insights")
def get_insights(
    user_id: UserId,
    now: ReferenceNow = None,
    db: Session = Depends(get_db),
):
    insights = generate_insights(load_activities(db, user_id), resolve_now(now))
    return InsightListResponse(items=[insight_to_response(i) for i in insights])
