"""Home screen summary: one snapshot assembled from ten concurrent reads."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from loguru import logger

from smarthealth.api.health import DEFAULT_CALORIE_GOAL, DEFAULT_WATER_GOAL_ML
from smarthealth.metrics import BMICategory, bmi_category, progress_percent
from smarthealth.models import HealthStat, Profile, Vital, VitalType

LOW_WATER_PERCENT = 50
GOOD_WATER_PERCENT = 80
GOOD_EXERCISE_MINUTES = 30
GOOD_SLEEP_HOURS = 7


@dataclass
class Summary:
    profile: Profile
    latest_stat: HealthStat | None = None
    bmi: float | None = None
    bmi_category: BMICategory | None = None
    water_ml: int = 0
    water_goal_ml: int = DEFAULT_WATER_GOAL_ML
    exercise_streak: int = 0
    exercise_minutes_today: int = 0
    sleep_last_night: float = 0.0
    sleep_average: float = 0.0
    calories: int = 0
    calorie_goal: int = DEFAULT_CALORIE_GOAL
    vitals: dict[str, Vital | None] = field(default_factory=dict)
    reminders_done: int = 0
    reminders_total: int = 0

    @property
    def water_progress(self) -> float:
        return progress_percent(self.water_ml, self.water_goal_ml)

    @property
    def nutrition_progress(self) -> float:
        return progress_percent(self.calories, self.calorie_goal)

    @property
    def insights(self) -> list[str]:
        """Tips for today, in display order."""
        tips = []
        if self.water_progress < LOW_WATER_PERCENT:
            tips.append(f"You have only had {round(self.water_progress)}% of your water. Drink some more!")
        if self.exercise_minutes_today == 0:
            tips.append("You have not exercised today. Try to move for 30 minutes!")
        if 0 < self.sleep_last_night < GOOD_SLEEP_HOURS:
            tips.append("You did not sleep enough last night. Aim for 7-8 hours tonight.")
        if (
            self.water_progress >= GOOD_WATER_PERCENT
            and self.exercise_minutes_today >= GOOD_EXERCISE_MINUTES
            and self.sleep_last_night >= GOOD_SLEEP_HOURS
        ):
            tips.append("Great job! You are taking good care of your health!")
        return tips


def _goal_defaults(config) -> tuple[int, int]:
    if config is None:
        return DEFAULT_WATER_GOAL_ML, DEFAULT_CALORIE_GOAL
    return (
        int(config.get("goals.water_ml", DEFAULT_WATER_GOAL_ML)),
        int(config.get("goals.calories", DEFAULT_CALORIE_GOAL)),
    )


async def count_reminders_done(api, reminder_ids: list[Any], day: date) -> int:
    """Reminders with at least one completion recorded on ``day``."""
    day_str = day.isoformat()
    histories = await asyncio.gather(*(api.get_reminder_history(rid, day_str, day_str) for rid in reminder_ids))
    return sum(1 for history in histories if history)


async def load_summary(api, today: date, config=None) -> Summary:
    """Load every summary widget concurrently.

    Only the profile read can raise; every other read falls back to empty data.
    Goals the server omits come from ``goals.*`` in ``config`` when given.
    """
    water_goal, calorie_goal = _goal_defaults(config)
    today_str = today.isoformat()
    yesterday_str = (today - timedelta(days=1)).isoformat()

    (
        profile,
        stats,
        water,
        streak,
        exercise_stats,
        sleep_avg,
        sleep_logs,
        nutrition,
        latest_vitals,
        reminders,
    ) = await asyncio.gather(
        api.get_profile(),
        api.get_health_stats(),
        api.get_water_intake(today_str),
        api.get_exercise_streak(),
        api.get_exercise_stats(today_str, today_str),
        api.get_sleep_average(),
        api.get_sleep_logs(yesterday_str, today_str),
        api.get_nutrition_summary(today_str),
        api.get_latest_vitals(),
        api.get_reminders(),
    )

    latest_stat = HealthStat.from_dict(stats[0]) if stats and isinstance(stats[0], dict) else None
    bmi = latest_stat.bmi if latest_stat else None
    reminder_ids = [r.get("id") for r in reminders if isinstance(r, dict)]
    done = await count_reminders_done(api, reminder_ids, today)

    last_night = 0.0
    if sleep_logs and isinstance(sleep_logs[0], dict):
        last_night = float(sleep_logs[0].get("duration_hours") or 0)

    summary = Summary(
        profile=Profile.from_dict(profile if isinstance(profile, dict) else {}),
        latest_stat=latest_stat,
        bmi=round(bmi, 1) if bmi else None,
        bmi_category=bmi_category(bmi),
        water_ml=int(water.get("total_ml") or 0),
        water_goal_ml=int(water.get("goal_ml") or water_goal),
        exercise_streak=int(streak.get("current_streak") or 0),
        exercise_minutes_today=int(exercise_stats.get("total_minutes") or 0),
        sleep_last_night=last_night,
        sleep_average=float(sleep_avg.get("avg_duration_hours") or 0),
        calories=int(nutrition.get("calories") or nutrition.get("total_calories") or 0),
        calorie_goal=int(nutrition.get("goal_calories") or calorie_goal),
        vitals={
            str(t): Vital.from_dict(latest_vitals[t], t) if isinstance(latest_vitals.get(t), dict) else None
            for t in VitalType
        },
        reminders_done=done,
        reminders_total=len(reminder_ids),
    )
    logger.debug(f"Summary loaded: {summary.reminders_done}/{summary.reminders_total} reminders done")
    return summary
