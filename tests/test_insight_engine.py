"""
Tests for the Insight Engine.

Covered scenarios:
  A) mood trend           — improvement, dip, flat, too few entries
  B) mindfulness cadence  — daily practice vs occasional
  C) completion rate      — >= 80, < 50, middle band, empty week
  D) time of day          — morning, evening, tie, local hour
  E) ordering             — priority rank, stable ties, top 3
  F) window               — 7-day cut-off
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from wellness.core.errors import InvalidInputError
from wellness.services.insight_engine import (
    INSIGHT_WINDOW_DAYS,
    MAX_INSIGHTS,
    Insight,
    InsightIcon,
    Priority,
    generate_insights,
    priority_sort_key,
    recent_window,
)
from wellness.services.timeline import Activity

UTC = timezone.utc
NOW = datetime(2026, 10, 18, 20, 0, tzinfo=UTC)

# Hours that count as neither morning nor evening.
NEUTRAL_HOUR = 15


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _at(days_ago: int, hour: int = NEUTRAL_HOUR, minute: int = 0) -> datetime:
    return (NOW - timedelta(days=days_ago)).replace(hour=hour, minute=minute)


def _act(id_, ts, type_="journaling", **kw):
    return Activity(id=id_, type=type_, timestamp=ts, **kw)


def _mood(id_, ts, score):
    return _act(id_, ts, type_="mood", mood_score=score)


def _titles(insights: list[Insight]) -> list[str]:
    return [i.title for i in insights]


def _find(insights: list[Insight], title: str) -> Insight:
    return next(i for i in insights if i.title == title)


# ---------------------------------------------------------------------------
# A) Mood trend
# ---------------------------------------------------------------------------

class TestMoodTrend:
    def test_latest_above_average_is_improvement(self):
        acts = [_mood("m1", _at(3), 50), _mood("m2", _at(2), 50), _mood("m3", _at(1), 90)]
        insight = _find(generate_insights(acts, NOW), "Mood Improvement")
        assert insight.priority is Priority.high
        assert insight.icon is InsightIcon.brain

    def test_latest_far_below_average_is_change(self):
        acts = [_mood("m1", _at(3), 80), _mood("m2", _at(2), 80), _mood("m3", _at(1), 30)]
        insight = _find(generate_insights(acts, NOW), "Mood Change Detected")
        assert insight.priority is Priority.high
        assert insight.icon is InsightIcon.heart

    def test_small_dip_says_nothing(self):
        acts = [_mood("m1", _at(3), 60), _mood("m2", _at(2), 60), _mood("m3", _at(1), 50)]
        titles = _titles(generate_insights(acts, NOW))
        assert "Mood Improvement" not in titles
        assert "Mood Change Detected" not in titles

    def test_dip_of_exactly_twenty_says_nothing(self):
        # average 70, latest 50: 50 < 70 - 20 is false
        acts = [_mood("m1", _at(3), 80), _mood("m2", _at(2), 80), _mood("m3", _at(1), 50)]
        assert "Mood Change Detected" not in _titles(generate_insights(acts, NOW))

    def test_single_entry_says_nothing(self):
        acts = [_mood("m1", _at(1), 90)]
        assert "Mood Improvement" not in _titles(generate_insights(acts, NOW))

    def test_unscored_moods_do_not_count(self):
        acts = [_mood("m1", _at(2), 40), _act("m2", _at(1), type_="mood")]
        titles = _titles(generate_insights(acts, NOW))
        assert "Mood Improvement" not in titles
        assert "Mood Change Detected" not in titles

    def test_latest_is_chronological_not_input_order(self):
        acts = [_mood("m3", _at(1), 90), _mood("m1", _at(3), 50), _mood("m2", _at(2), 50)]
        assert "Mood Improvement" in _titles(generate_insights(acts, NOW))

    def test_old_moods_outside_window_ignored(self):
        acts = [_mood("old", _at(10), 10), _mood("m1", _at(2), 60), _mood("m2", _at(1), 60)]
        assert "Mood Improvement" not in _titles(generate_insights(acts, NOW))


# ---------------------------------------------------------------------------
# B) Mindfulness cadence
# ---------------------------------------------------------------------------

class TestMindfulness:
    def test_daily_practice_is_consistent(self):
        acts = [_act(f"b{i}", _at(i % 7), type_="breathing") for i in range(7)]
        insight = _find(generate_insights(acts, NOW), "Consistent Practice")
        assert insight.priority is Priority.medium
        assert insight.icon is InsightIcon.trophy

    def test_occasional_practice_is_opportunity(self):
        acts = [
            _act("g", _at(1), type_="game"),
            _act("m", _at(2), type_="meditation"),
        ]
        insight = _find(generate_insights(acts, NOW), "Mindfulness Opportunity")
        assert insight.priority is Priority.low
        assert insight.icon is InsightIcon.sparkles

    def test_no_practice_says_nothing(self):
        acts = [_act("t", _at(1), type_="therapy"), _act("j", _at(2))]
        titles = _titles(generate_insights(acts, NOW))
        assert "Consistent Practice" not in titles
        assert "Mindfulness Opportunity" not in titles


# ---------------------------------------------------------------------------
# C) Completion rate
# ---------------------------------------------------------------------------

class TestCompletionRate:
    def _week(self, completed: int, total: int) -> list[Activity]:
        return [
            _act(f"a{i}", _at(i % 6), completed=i < completed)
            for i in range(total)
        ]

    def test_eighty_percent_is_high_achievement(self):
        insights = generate_insights(self._week(8, 10), NOW)
        insight = _find(insights, "High Achievement")
        assert insight.priority is Priority.high
        assert "80%" in insight.description
        assert "Activity Reminder" not in _titles(insights)

    def test_rate_is_rounded_in_description(self):
        # 7 of 8 = 87.5 → 88
        insight = _find(generate_insights(self._week(7, 8), NOW), "High Achievement")
        assert "88%" in insight.description

    def test_forty_percent_is_reminder(self):
        insights = generate_insights(self._week(4, 10), NOW)
        insight = _find(insights, "Activity Reminder")
        assert insight.priority is Priority.medium
        assert insight.icon is InsightIcon.calendar
        assert "High Achievement" not in _titles(insights)

    def test_middle_band_says_nothing(self):
        titles = _titles(generate_insights(self._week(6, 10), NOW))
        assert "High Achievement" not in titles
        assert "Activity Reminder" not in titles

    def test_empty_week_says_nothing(self):
        old = [_act("old", _at(30), completed=False)]
        assert generate_insights(old, NOW) == []


# ---------------------------------------------------------------------------
# D) Time of day
# ---------------------------------------------------------------------------

class TestTimeOfDay:
    def test_morning_person(self):
        acts = [_act("a", _at(1, hour=7)), _act("b", _at(2, hour=11)), _act("c", _at(3, hour=19))]
        insight = _find(generate_insights(acts, NOW), "Morning Person")
        assert insight.priority is Priority.medium
        assert insight.icon is InsightIcon.sun

    def test_evening_routine(self):
        acts = [_act("a", _at(1, hour=18)), _act("b", _at(2, hour=22)), _act("c", _at(3, hour=8))]
        insight = _find(generate_insights(acts, NOW), "Evening Routine")
        assert insight.icon is InsightIcon.moon

    def test_tie_says_nothing(self):
        acts = [_act("a", _at(1, hour=8)), _act("b", _at(2, hour=20))]
        titles = _titles(generate_insights(acts, NOW))
        assert "Morning Person" not in titles
        assert "Evening Routine" not in titles

    def test_afternoon_counts_for_neither(self):
        acts = [_act("a", _at(1, hour=12)), _act("b", _at(2, hour=17, minute=59))]
        titles = _titles(generate_insights(acts, NOW))
        assert "Morning Person" not in titles
        assert "Evening Routine" not in titles

    def test_hours_read_in_now_timezone(self):
        # 13:00 UTC is 09:00 in New York (EDT).
        acts = [_act("a", datetime(2026, 10, 16, 13, 0, tzinfo=UTC))]
        assert "Morning Person" not in _titles(generate_insights(acts, NOW))
        ny_now = NOW.astimezone(ZoneInfo("America/New_York"))
        assert "Morning Person" in _titles(generate_insights(acts, ny_now))


# ---------------------------------------------------------------------------
# E) Ordering and truncation
# ---------------------------------------------------------------------------

class TestOrdering:
    def test_priority_rank(self):
        assert [p.rank for p in (Priority.high, Priority.medium, Priority.low)] == [0, 1, 2]

    def test_high_before_medium_in_rule_order(self):
        acts = [_mood("m1", _at(3, hour=9), 50), _mood("m2", _at(2, hour=9), 50),
                _mood("m3", _at(1, hour=9), 90)]
        assert _titles(generate_insights(acts, NOW)) == [
            "Mood Improvement",
            "High Achievement",
            "Morning Person",
        ]

    def test_truncated_to_three(self):
        acts = [_mood("m1", _at(2, hour=9), 50), _mood("m2", _at(1, hour=9), 90)]
        acts += [_act(f"med{i}", _at(i, hour=8), type_="meditation") for i in range(7)]
        insights = generate_insights(acts, NOW)
        assert len(insights) == MAX_INSIGHTS == 3
        # Morning Person (rule 4) loses the medium tie to Consistent Practice (rule 2).
        assert _titles(insights) == [
            "Mood Improvement",
            "High Achievement",
            "Consistent Practice",
        ]

    def test_low_priority_sorted_last(self):
        acts = [
            _act("g", _at(1, hour=9), type_="game", completed=False),
            _act("j", _at(2, hour=9), completed=False),
        ]
        assert _titles(generate_insights(acts, NOW)) == [
            "Activity Reminder",
            "Morning Person",
            "Mindfulness Opportunity",
        ]

    def test_sort_key_is_stable(self):
        low = Insight("l", "", InsightIcon.sun, Priority.low)
        med_a = Insight("a", "", InsightIcon.sun, Priority.medium)
        med_b = Insight("b", "", InsightIcon.sun, Priority.medium)
        assert sorted([low, med_a, med_b], key=priority_sort_key) == [med_a, med_b, low]


# ---------------------------------------------------------------------------
# F) Window and general contract
# ---------------------------------------------------------------------------

class TestWindow:
    def test_window_is_seven_days(self):
        assert INSIGHT_WINDOW_DAYS == 7

    def test_cut_off_is_inclusive(self):
        edge = _act("edge", NOW - timedelta(days=7))
        before = _act("before", NOW - timedelta(days=7, seconds=1))
        assert [a.id for a in recent_window([before, edge], NOW)] == ["edge"]

    def test_future_entries_are_recent(self):
        ahead = _act("ahead", NOW + timedelta(hours=1))
        assert recent_window([ahead], NOW) == [ahead]

    def test_empty_log(self):
        assert generate_insights([], NOW) == []

    def test_deterministic(self):
        acts = [_mood("m1", _at(2, hour=9), 50), _mood("m2", _at(1, hour=21), 90),
                _act("g", _at(3), type_="game", completed=False)]
        assert generate_insights(acts, NOW) == generate_insights(acts, NOW)

    def test_naive_now_rejected(self):
        with pytest.raises(InvalidInputError):
            generate_insights([], datetime(2026, 10, 18, 20, 0))
