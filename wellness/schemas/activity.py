"""
Activity request / response schemas.

POST /users/{user_id}/activities  → ActivityCreate → ActivityAppendResponse
POST /users/{user_id}/mood        → MoodCreate     → ActivityAppendResponse
POST /users/{user_id}/games       → GameCreate     → ActivityAppendResponse
GET  /users/{user_id}/activities  → ActivityListResponse
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from wellness.schemas.dashboard import DashboardResponse


class ActivityCreate(BaseModel):
    """A single activity to append to the user's log."""

    type: Annotated[str, Field(
        min_length=1,
        max_length=32,
        description='Open set: "mood", "game", "therapy", "meditation", "breathing", …',
        examples=["meditation"],
    )]
    name: Annotated[str, Field(max_length=256, examples=["Evening body scan"])] = ""
    description: Optional[str] = Field(default=None, max_length=2_000)
    timestamp: Optional[datetime] = Field(
        default=None,
        description=(
            "When the activity happened. Defaults to now. "
            "Naive values are read in the server's configured timezone."
        ),
        examples=["2026-10-18T08:30:00+02:00"],
    )
    duration: Optional[float] = Field(default=None, ge=0, description="Seconds.")
    completed: bool = True
    mood_score: Optional[int] = Field(default=None, ge=0, le=100)
    mood_note: Optional[str] = Field(default=None, max_length=2_000)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.strip().lower()
        return v


class MoodCreate(BaseModel):
    mood_score: Annotated[int, Field(ge=0, le=100, examples=[72])]
    note: Optional[str] = Field(default=None, max_length=2_000)
    timestamp: Optional[datetime] = None


class GameCreate(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=256, examples=["Breathing Game"])]
    description: Optional[str] = Field(default=None, max_length=2_000)
    timestamp: Optional[datetime] = None


class ActivityResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    type: str
    name: str
    description: Optional[str] = None
    timestamp: str
    duration: Optional[float] = None
    completed: bool
    mood_score: Optional[int] = None
    mood_note: Optional[str] = None


class ActivityListResponse(BaseModel):
    total: int
    items: list[ActivityResponse] = Field(description="Chronological, oldest first.")


class ActivityAppendResponse(BaseModel):
    """The stored activity plus the dashboard recomputed after the append."""
    activity: ActivityResponse
    dashboard: DashboardResponse
