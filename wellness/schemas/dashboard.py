"""
Dashboard response schemas.

GET /users/{user_id}/dashboard → DashboardResponse
GET /users/{user_id}/stats     → DailyStatsResponse
GET /users/{user_id}/heatmap   → HeatmapResponse
GET /users/{user_id}/insights  → InsightListResponse
"""
from typing import Optional
from pydantic import BaseModel, Field


class DailyStatsResponse(BaseModel):
    mood_score: Optional[int] = Field(
        default=None,
        description="Rounded average of today's mood scores (0–100). Null when none logged.",
    )
    completion_rate: int = Field(description="Percentage. Currently always 100.")
    mindfulness_count: int = Field(description="Therapy sessions across the whole history.")
    total_activities: int = Field(description="Activities logged today.")
    last_updated: str


class ActivitySummaryResponse(BaseModel):
    type: str
    name: str
    completed: bool
    time: str = Field(examples=["9:05 AM"])


class DayActivityResponse(BaseModel):
    date: str = Field(description="Start of the local calendar day (ISO datetime).")
    level: str = Field(description='"none" | "low" | "medium" | "high"')
    activities: list[ActivitySummaryResponse]


class HeatmapResponse(BaseModel):
    window_days: int
    days: list[DayActivityResponse] = Field(description="Oldest first.")


class InsightResponse(BaseModel):
    title: str
    description: str
    icon: str = Field(description="Closed set of icon tags, e.g. \"trophy\".")
    priority: str = Field(description='"high" | "medium" | "low"')


class InsightListResponse(BaseModel):
    items: list[InsightResponse] = Field(description="At most 3, highest priority first.")


class DashboardResponse(BaseModel):
    generated_at: str
    refresh_after_seconds: int = Field(
        description="Clients should re-request the dashboard after this delay."
    )
    stats: DailyStatsResponse
    heatmap: HeatmapResponse
    insights: list[InsightResponse]
