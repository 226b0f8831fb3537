"""Activity metrics: calorie estimates, streaks, and daily chart series.

Pure functions over literal inputs; callers pass ``today`` explicitly.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from typing import Any, TypeVar

T = TypeVar("T")

# kcal per minute, by exercise type
CALORIES_PER_MINUTE: dict[str, float] = {
    "running": 10,
    "walking": 5,
    "gym": 8,
    "yoga": 4,
    "swimming": 9,
    "cycling": 7,
    "other": 6,
}


def estimate_exercise_calories(duration_min: float, exercise_type: str) -> int:
    """Client-side estimate pending the server's authoritative value.

    Unknown types use the ``other`` rate.
    """
    if duration_min <= 0:
        return 0
    rate = CALORIES_PER_MINUTE.get(exercise_type, CALORIES_PER_MINUTE["other"])
    return round(duration_min * rate)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def compute_streak(days: Iterable[date | datetime | None], today: date) -> int:
    """Consecutive calendar days, counting back from ``today``, with at least one entry.

    Zero when ``today`` has no entry; entries after ``today`` are ignored.
    """
    logged = {_as_date(d) for d in days if d is not None}
    streak = 0
    current = today
    while current in logged:
        streak += 1
        current -= timedelta(days=1)
    return streak


def last_n_days(today: date, days: int = 7) -> list[date]:
    """``days`` calendar dates ending at ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def daily_series(
    records: Iterable[T],
    when: Callable[[T], date | datetime | None],
    value: Callable[[T], float | None],
    today: date,
    days: int = 7,
) -> list[tuple[date, float]]:
    """Sum ``value`` per calendar day over the last ``days`` days, oldest first.

    Days without records are 0, records outside the window are dropped.
    """
    window = last_n_days(today, days)
    totals: dict[date, float] = dict.fromkeys(window, 0.0)
    for record in records:
        stamp = when(record)
        if stamp is None:
            continue
        day = _as_date(stamp)
        if day in totals:
            totals[day] += value(record) or 0
    return [(day, totals[day]) for day in window]


def format_day_label(day: date) -> str:
    """``dd/mm`` label for chart axes."""
    return day.strftime("%d/%m")


def series_labels(series: list[tuple[date, Any]]) -> list[str]:
    return [format_day_label(day) for day, _ in series]
