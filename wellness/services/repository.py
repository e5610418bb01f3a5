"""
Activity repository — the persistence collaborator feeding the dashboard core.

Public API
----------
load_activities(db, user_id)                          -> list[Activity]  (chronological)
append_activity(db, user_id, payload)                 -> Activity
log_mood(db, user_id, mood_score, note, timestamp)    -> Activity
log_game(db, user_id, name, description, timestamp)   -> Activity

Storage failures are raised as ActivityStoreError; nothing is defaulted.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wellness.core.errors import ActivityStoreError
from wellness.models.activity import ActivityLog
from wellness.schemas.activity import ActivityCreate
from wellness.services.clock import as_utc, resolve_now
from wellness.services.timeline import Activity, ActivityType

logger = logging.getLogger(__name__)

MOOD_ENTRY_NAME = "Manual Mood Entry"


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------

def to_activity(row: ActivityLog) -> Activity:
    return Activity(
        id=row.id,
        type=row.type,
        timestamp=as_utc(row.timestamp),
        completed=bool(row.completed),
        name=row.name or "",
        mood_score=row.mood_score,
        duration=row.duration,
        description=row.description,
        mood_note=row.mood_note,
        user_id=row.user_id,
    )


# ---------------------------------------------------------------------------
# Public — read
# ---------------------------------------------------------------------------

def load_activities(db: Session, user_id: str) -> list[Activity]:
    """Return the user's whole log, oldest first."""
    try:
        rows = (
            db.query(ActivityLog)
            .filter(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.timestamp.asc(), ActivityLog.created_at.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.error("Loading activities for %s failed: %s", user_id, exc)
        raise ActivityStoreError("load", user_id) from exc
    return [to_activity(r) for r in rows]


# ---------------------------------------------------------------------------
# Public — write
# ---------------------------------------------------------------------------

def append_activity(db: Session, user_id: str, payload: ActivityCreate) -> Activity:
    """
    Persist one activity and commit. Assigns the id, and the timestamp when
    the payload has none.
    """
    row = ActivityLog(
        id=uuid.uuid4().hex,
        user_id=user_id,
        type=payload.type,
        name=payload.name,
        description=payload.description,
        timestamp=as_utc(resolve_now(payload.timestamp)),
        duration=payload.duration,
        completed=payload.completed,
        mood_score=payload.mood_score,
        mood_note=payload.mood_note,
    )
    # Validate before touching the session.
    activity = to_activity(row)
    try:
        db.add(row)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Appending %s activity for %s failed: %s", payload.type, user_id, exc)
        raise ActivityStoreError("append", user_id) from exc

    logger.info("Logged %s activity %s for %s", activity.type, activity.id, user_id)
    return activity


def log_mood(
    db: Session,
    user_id: str,
    mood_score: int,
    note: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> Activity:
    return append_activity(db, user_id, ActivityCreate(
        type=ActivityType.MOOD,
        name=MOOD_ENTRY_NAME,
        description=note,
        timestamp=timestamp,
        completed=True,
        mood_score=mood_score,
        mood_note=note,
    ))


def log_game(
    db: Session,
    user_id: str,
    name: str,
    description: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> Activity:
    return append_activity(db, user_id, ActivityCreate(
        type=ActivityType.GAME,
        name=name,
        description=description,
        timestamp=timestamp,
        completed=True,
    ))
