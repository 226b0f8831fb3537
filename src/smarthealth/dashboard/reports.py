"""Weekly and monthly reports, normalised for display."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from smarthealth.api.health import DEFAULT_WATER_GOAL_ML
from smarthealth.metrics import SleepRating, format_day_label, sleep_quality_rating


@dataclass
class Report:
    period: str
    water_avg_ml: int = 0
    water_goal_ml: int = DEFAULT_WATER_GOAL_ML
    water_compliance: int = 0
    exercise_minutes: int = 0
    exercise_sessions: int = 0
    exercise_streak: int = 0
    sleep_avg_hours: float = 0.0
    sleep_rating: SleepRating | None = None
    water_trend: list[float] | None = None
    exercise_trend: list[float] | None = None
    sleep_trend: list[float] | None = None
    insights: list[Any] = field(default_factory=list)
    month_over_month: dict[str, Any] = field(default_factory=dict)


def week_start(today: date) -> date:
    """Monday of the week containing ``today``."""
    return today - timedelta(days=today.weekday())


def month_key(today: date) -> str:
    return f"{today.year}-{today.month:02d}"


def _trend(section: dict[str, Any], key: str) -> list[float] | None:
    daily = section.get("daily_data")
    if not isinstance(daily, list):
        return None
    return [float(d.get(key) or 0) for d in daily if isinstance(d, dict)]


def build_report(payload: dict[str, Any], period: str, streak_key: str = "current_streak") -> Report:
    """Normalise a report payload; an empty payload yields the zeroed report."""
    water = payload.get("water") or {}
    exercise = payload.get("exercise") or {}
    sleep = payload.get("sleep") or {}
    avg_hours = round(float(sleep.get("avg_hours") or 0), 1)
    insights = payload.get("insights")
    month_over_month = payload.get("month_over_month")
    return Report(
        period=period,
        water_avg_ml=round(float(water.get("avg_ml") or 0)),
        water_compliance=round(float(water.get("compliance_percent") or 0)),
        exercise_minutes=int(exercise.get("total_minutes") or 0),
        exercise_sessions=int(exercise.get("total_sessions") or 0),
        exercise_streak=int(exercise.get(streak_key) or 0),
        sleep_avg_hours=avg_hours,
        sleep_rating=sleep_quality_rating(avg_hours),
        water_trend=_trend(water, "total_ml"),
        exercise_trend=_trend(exercise, "total_minutes"),
        sleep_trend=_trend(sleep, "duration_hours"),
        insights=insights if isinstance(insights, list) else [],
        month_over_month=month_over_month if isinstance(month_over_month, dict) else {},
    )


async def load_reports(api, today: date) -> tuple[Report, Report]:
    """Return ``(weekly, monthly)``; the monthly streak is the longest streak."""
    start = week_start(today)
    weekly, monthly = await asyncio.gather(
        api.get_weekly_report(start.isoformat()),
        api.get_monthly_report(month_key(today)),
    )
    return (
        build_report(weekly, f"{format_day_label(start)} - {format_day_label(today)}"),
        build_report(monthly, f"{today.month}/{today.year}", streak_key="longest_streak"),
    )
