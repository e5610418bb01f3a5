"""
Activities router — read and append a user's activity log.

GET  /users/{user_id}/activities   — whole log, oldest first
POST /users/{user_id}/activities   — append any activity
POST /users/{user_id}/mood         — append a mood check-in
POST /users/{user_id}/games        — append a played game

Every append answers with the stored activity and the dashboard recomputed
from the log as it stands after the write.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wellness.core.config import settings
from wellness.db.base import get_db
from wellness.routers.dashboard import ReferenceNow, UserId, dashboard_to_response
from wellness.schemas.activity import (
    ActivityAppendResponse,
    ActivityCreate,
    ActivityListResponse,
    ActivityResponse,
    GameCreate,
    MoodCreate,
)
from wellness.services.clock import resolve_now
from wellness.services.dashboard import build_dashboard
from wellness.services.repository import append_activity, load_activities, log_game, log_mood
from wellness.services.timeline import Activity

router = APIRouter(prefix="/users/{user_id}", tags=["activities"])

_APPEND_RESPONSES = {
    201: {"description": "Activity stored; dashboard recomputed."},
    422: {"description": "Validation error (mood_score out of range, negative duration, …)"},
    503: {"description": "Activity store unavailable."},
}


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _activity_to_response(a: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=a.id,
        user_id=a.user_id,
        type=a.type,
        name=a.name,
        description=a.description,
        timestamp=a.timestamp.isoformat(),
        duration=a.duration,
        completed=a.completed,
        mood_score=a.mood_score,
        mood_note=a.mood_note,
    )


def _after_append(
    db: Session,
    user_id: str,
    activity: Activity,
    now: Optional[datetime] = None,
) -> ActivityAppendResponse:
    dashboard = build_dashboard(
        load_activities(db, user_id),
        resolve_now(now),
        settings.HEATMAP_WINDOW_DAYS,
    )
    return ActivityAppendResponse(
        activity=_activity_to_response(activity),
        dashboard=dashboard_to_response(dashboard),
    )


# ---------------------------------------------------------------------------
# GET /users/{user_id}/activities
# ---------------------------------------------------------------------------

@router.get(
    "/activities",
    response_model=ActivityListResponse,
    summary="List a user's activities (oldest first)",
)
def list_activities(user_id: UserId, db: Session = Depends(get_db)):
    items = load_activities(db, user_id)
    return ActivityListResponse(
        total=len(items),
        items=[_activity_to_response(a) for a in items],
    )


# ---------------------------------------------------------------------------
# POST endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/activities",
    response_model=ActivityAppendResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append an activity",
    responses=_APPEND_RESPONSES,
)
def create_activity(
    user_id: UserId,
    payload: ActivityCreate,
    now: ReferenceNow = None,
    db: Session = Depends(get_db),
):
    """
    Append one activity. `type` is free-form; types the dashboard does not
    know are counted as generic activities. `id` is assigned by the server,
    and `timestamp` defaults to now. The returned dashboard is evaluated at
    `now` (defaults to the current time).
    """
    activity = append_activity(db, user_id, payload)
    return _after_append(db, user_id, activity, now)


@router.post(
    "/mood",
    response_model=ActivityAppendResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a mood check-in",
    responses=_APPEND_RESPONSES,
)
def create_mood(
    user_id: UserId,
    payload: MoodCreate,
    now: ReferenceNow = None,
    db: Session = Depends(get_db),
):
    activity = log_mood(db, user_id, payload.mood_score, payload.note, payload.timestamp)
    return _after_append(db, user_id, activity, now)


@router.post(
    "/games",
    response_model=ActivityAppendResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a played anxiety-relief game",
    responses=_APPEND_RESPONSES,
)
def create_game(
    user_id: UserId,
    payload: GameCreate,
    now: ReferenceNow = None,
    db: Session = Depends(get_db),
):
    activity = log_game(db, user_id, payload.name, payload.description, payload.timestamp)
    return _after_append(db, user_id, activity, now)
