"""
Insight Engine — templated observations about the last 7 days of activity.

Rules (evaluated in this order; each adds at most one insight)
--------------------------------------------------------------
  1. MOOD TREND
     Needs   : >= 2 scored mood entries in the window
     Trigger : latest > average                → "Mood Improvement"      (high)
               latest < average - 20           → "Mood Change Detected"  (high)

  2. MINDFULNESS CADENCE
     Needs   : >= 1 game / meditation / breathing activity
     Trigger : count / 7 >= 1                  → "Consistent Practice"   (medium)
               otherwise                       → "Mindfulness Opportunity" (low)

  3. COMPLETION RATE
     Needs   : >= 1 activity in the window
     Trigger : rate >= 80                      → "High Achievement"      (high)
               rate < 50                       → "Activity Reminder"     (medium)

  4. TIME OF DAY
     Trigger : morning (hour < 12) > evening (hour >= 18) → "Morning Person"  (medium)
               evening > morning                           → "Evening Routine" (medium)

Output: stable sort by priority rank (high, medium, low), ties keep rule
order, truncated to MAX_INSIGHTS. Pure: no clock reads, no I/O.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Optional, Sequence

from wellness.services.timeline import (
    Activity,
    ActivityType,
    chronological,
    require_aware,
    since,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Priority(str, enum.Enum):
    high = "high"
    medium = "medium"
    low = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.high: 0, Priority.medium: 1, Priority.low: 2}


class InsightIcon(str, enum.Enum):
    """Which glyph the presentation layer should draw next to an insight."""
    brain = "brain"
    heart = "heart"
    trophy = "trophy"
    sparkles = "sparkles"
    calendar = "calendar"
    sun = "sun"
    moon = "moon"


# Window and thresholds
INSIGHT_WINDOW_DAYS        = 7
MAX_INSIGHTS               = 3
_MIN_MOOD_ENTRIES          = 2
_MOOD_DROP_MARGIN          = 20
_MINDFUL_DAILY_TARGET      = 1
_HIGH_COMPLETION_RATE      = 80
_LOW_COMPLETION_RATE       = 50
_MORNING_BEFORE_HOUR       = 12
_EVENING_FROM_HOUR         = 18

MINDFULNESS_TYPES = frozenset({
    ActivityType.GAME,
    ActivityType.MEDITATION,
    ActivityType.BREATHING,
})


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Insight:
    title: str
    description: str
    icon: InsightIcon
    priority: Priority


def priority_sort_key(insight: Insight) -> int:
    return insight.priority.rank


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

MOOD_IMPROVEMENT = Insight(
    title="Mood Improvement",
    description="Your recent mood scores are above your weekly average. Keep up the good work!",
    icon=InsightIcon.brain,
    priority=Priority.high,
)
MOOD_CHANGE = Insight(
    title="Mood Change Detected",
    description=(
        "I've noticed a dip in your mood. "
        "Would you like to try some mood-lifting activities?"
    ),
    icon=InsightIcon.heart,
    priority=Priority.high,
)
CONSISTENT_PRACTICE = Insight(
    title="Consistent Practice",
    description=(
        "You've been regularly engaging in mindfulness activities. "
        "This can help reduce stress and improve focus."
    ),
    icon=InsightIcon.trophy,
    priority=Priority.medium,
)
MINDFULNESS_OPPORTUNITY = Insight(
    title="Mindfulness Opportunity",
    description="Try incorporating more mindfulness activities into your daily routine.",
    icon=InsightIcon.sparkles,
    priority=Priority.low,
)
ACTIVITY_REMINDER = Insight(
    title="Activity Reminder",
    description="You might benefit from setting smaller, more achievable daily goals.",
    icon=InsightIcon.calendar,
    priority=Priority.medium,
)
MORNING_PERSON = Insight(
    title="Morning Person",
    description=(
        "You're most active in the mornings. "
        "Consider scheduling important tasks during your peak hours."
    ),
    icon=InsightIcon.sun,
    priority=Priority.medium,
)
EVENING_ROUTINE = Insight(
    title="Evening Routine",
    description=(
        "You tend to be more active in the evenings. "
        "Make sure to wind down before bedtime."
    ),
    icon=InsightIcon.moon,
    priority=Priority.medium,
)


def high_achievement(rate: float) -> Insight:
    percent = int(Decimal(str(rate)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return Insight(
        title="High Achievement",
        description=(
            f"You've completed {percent}% of your activities this week. "
            "Excellent commitment!"
        ),
        icon=InsightIcon.trophy,
        priority=Priority.high,
    )


# ---------------------------------------------------------------------------
# Individual rule evaluators
# ---------------------------------------------------------------------------

def _rule_mood_trend(recent: Sequence[Activity], now: datetime) -> Optional[Insight]:
    """Rule 1: compare the latest mood score with the weekly mean."""
    moods = [a for a in chronological(recent) if a.has_mood_score]
    if len(moods) < _MIN_MOOD_ENTRIES:
        return None
    average = sum(a.mood_score for a in moods) / len(moods)
    latest = moods[-1].mood_score
    if latest > average:
        return MOOD_IMPROVEMENT
    if latest < average - _MOOD_DROP_MARGIN:
        return MOOD_CHANGE
    return None


def _rule_mindfulness(recent: Sequence[Activity], now: datetime) -> Optional[Insight]:
    """Rule 2: mindfulness sessions per day over the window."""
    mindful = [a for a in recent if a.type in MINDFULNESS_TYPES]
    if not mindful:
        return None
    daily_average = len(mindful) / INSIGHT_WINDOW_DAYS
    if daily_average >= _MINDFUL_DAILY_TARGET:
        return CONSISTENT_PRACTICE
    return MINDFULNESS_OPPORTUNITY


def _rule_completion_rate(recent: Sequence[Activity], now: datetime) -> Optional[Insight]:
    """Rule 3: share of completed activities. An empty week says nothing."""
    if not recent:
        return None
    completed = sum(1 for a in recent if a.completed)
    rate = completed / len(recent) * 100
    if rate >= _HIGH_COMPLETION_RATE:
        return high_achievement(rate)
    if rate < _LOW_COMPLETION_RATE:
        return ACTIVITY_REMINDER
    return None


def _rule_time_of_day(recent: Sequence[Activity], now: datetime) -> Optional[Insight]:
    """Rule 4: mornings vs evenings, in now's timezone."""
    tz = now.tzinfo
    hours = [a.timestamp.astimezone(tz).hour for a in recent]
    morning = sum(1 for h in hours if h < _MORNING_BEFORE_HOUR)
    evening = sum(1 for h in hours if h >= _EVENING_FROM_HOUR)
    if morning > evening:
        return MORNING_PERSON
    if evening > morning:
        return EVENING_ROUTINE
    return None


RULES: tuple[Callable[[Sequence[Activity], datetime], Optional[Insight]], ...] = (
    _rule_mood_trend,
    _rule_mindfulness,
    _rule_completion_rate,
    _rule_time_of_day,
)


# ---------------------------------------------------------------------------
# Public — main entry point
# ---------------------------------------------------------------------------

def recent_window(activities: Sequence[Activity], now: datetime) -> list[Activity]:
    """Activities at or after now - 7 days (no upper bound)."""
    return since(activities, now - timedelta(days=INSIGHT_WINDOW_DAYS))


def generate_insights(activities: Sequence[Activity], now: datetime) -> list[Insight]:
    """
    Evaluate every rule against the last 7 days and return at most
    MAX_INSIGHTS findings, highest priority first.
    """
    require_aware(now)
    recent = recent_window(activities, now)

    found: list[Insight] = []
    for rule in RULES:
        insight = rule(recent, now)
        if insight is not None:
            found.append(insight)

    # sorted() is stable: equal priorities keep rule order.
    return sorted(found, key=priority_sort_key)[:MAX_INSIGHTS]
