"""Exercise sessions over the last 30 days."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from typing import Any

from loguru import logger

from smarthealth.api.health import EMPTY_EXERCISE_STATS, EMPTY_STREAK
from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import CALORIES_PER_MINUTE, daily_series, estimate_exercise_calories
from smarthealth.models import Exercise

from .base import TrackedList, local_id
from .validation import parse_int_in_range, require_choice

HISTORY_DAYS = 30
MAX_DURATION_MIN = 600
EXERCISE_TYPES = tuple(CALORIES_PER_MINUTE)


class ExerciseTracker(TrackedList[Exercise]):
    def __init__(self, api, prompter=None, **kwargs):
        super().__init__(api, prompter, **kwargs)
        self.stats: dict[str, int] = dict(EMPTY_EXERCISE_STATS)
        self.streak: dict[str, int] = dict(EMPTY_STREAK)

    async def load(self, today: date | None = None) -> None:
        today = today or self.today()
        date_from = (today - timedelta(days=HISTORY_DAYS)).isoformat()
        date_to = today.isoformat()
        exercises, streak, stats = await asyncio.gather(
            self.api.get_exercises(date_from, date_to),
            self.api.get_exercise_streak(),
            self.api.get_exercise_stats(date_from, date_to),
        )
        self.items = [Exercise.from_dict(e) for e in exercises if isinstance(e, dict)]
        self.streak = {**EMPTY_STREAK, **streak}
        self.stats = {key: int(stats.get(key) or 0) for key in EMPTY_EXERCISE_STATS}

    def weekly_minutes(self, today: date | None = None) -> list[tuple[date, float]]:
        """Minutes exercised per day for the last week, oldest first."""
        return daily_series(
            self.items,
            when=lambda e: e.exercised_at,
            value=lambda e: e.duration_min,
            today=today or self.today(),
        )

    async def log(self, exercise_type: str, duration_min: Any, notes: str = "") -> Exercise | None:
        try:
            kind = require_choice(exercise_type, EXERCISE_TYPES, f"Unknown exercise type: {exercise_type}")
            minutes = parse_int_in_range(
                duration_min, 1, MAX_DURATION_MIN, f"Please enter a valid duration (1-{MAX_DURATION_MIN} minutes)"
            )
        except ValidationError as e:
            return self._reject(e)

        payload: dict[str, Any] = {"type": kind, "duration_min": minutes}
        if notes:
            payload["notes"] = notes

        def build(echo: dict[str, Any]) -> Exercise:
            return Exercise(
                id=echo.get("id") or local_id(),
                type=kind,
                duration_min=minutes,
                calories=int(echo.get("calories") or estimate_exercise_calories(minutes, kind)),
                exercised_at=Exercise.from_dict(echo).exercised_at or self.clock(),
                notes=notes,
            )

        exercise = await self._submit(
            lambda: self.api.log_exercise(payload),
            build,
            "Could not save the exercise. Please try again.",
        )
        if exercise is None:
            return None

        self.stats["total_sessions"] += 1
        self.stats["total_minutes"] += minutes
        self.stats["total_calories"] += exercise.calories
        streak = await self.api.get_exercise_streak()
        self.streak = {**EMPTY_STREAK, **streak}
        logger.debug(f"Exercise logged; streak now {self.streak['current_streak']}")
        return exercise

    async def delete(self, exercise_id: Any) -> bool:
        removed = await self._delete(exercise_id, "Delete this session?", self.api.delete_exercise)
        if removed is None:
            return False
        self.stats["total_sessions"] = max(0, self.stats["total_sessions"] - 1)
        self.stats["total_minutes"] = max(0, self.stats["total_minutes"] - removed.duration_min)
        self.stats["total_calories"] = max(0, self.stats["total_calories"] - removed.calories)
        return True
