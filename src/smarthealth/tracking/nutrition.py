"""Today's meals against the daily calorie goal."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any

from loguru import logger

from smarthealth.api.health import DEFAULT_CALORIE_GOAL, EMPTY_NUTRITION_SUMMARY
from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import progress_percent
from smarthealth.models import MealLog, MealType

from .base import TrackedList, local_id
from .validation import parse_int_in_range, require_choice, require_text

MAX_MEAL_CALORIES = 5000
QUICK_ADD_GRAMS = 100
SUGGESTION_QUERY = "phở"
SUGGESTION_LIMIT = 8


def food_calories(food: dict[str, Any]) -> int:
    """Calories for a 100 g serving of a food-catalogue entry."""
    return int(food.get("calories_per_100g") or food.get("calories") or 0)


class NutritionTracker(TrackedList[MealLog]):
    def __init__(self, api, prompter=None, **kwargs):
        super().__init__(api, prompter, **kwargs)
        self.summary: dict[str, Any] = dict(EMPTY_NUTRITION_SUMMARY)
        self.calorie_goal = DEFAULT_CALORIE_GOAL
        self.suggestions: list[dict[str, Any]] = []

    async def load(self, day: date | None = None, with_suggestions: bool = True) -> None:
        day_str = (day or self.today()).isoformat()
        meals, summary = await asyncio.gather(
            self.api.get_meal_logs(day_str),
            self.api.get_nutrition_summary(day_str),
        )
        self.items = [MealLog.from_dict(m) for m in meals if isinstance(m, dict)]
        self.summary = {**EMPTY_NUTRITION_SUMMARY, **summary}
        if not self.summary.get("calories"):
            # the running total always covers the listed meals
            self.summary["calories"] = sum(m.calories for m in self.items)
        self.calorie_goal = int(summary.get("goal_calories") or DEFAULT_CALORIE_GOAL)
        if with_suggestions:
            foods = await self.api.search_foods(SUGGESTION_QUERY, SUGGESTION_LIMIT)
            self.suggestions = [f for f in foods if isinstance(f, dict)]

    @property
    def total_calories(self) -> int:
        """Server summary total, or the sum of listed meals when the summary is empty."""
        return int(self.summary.get("calories") or sum(m.calories for m in self.items))

    @property
    def remaining(self) -> int:
        """Calories left for the day; negative once the goal is exceeded."""
        return self.calorie_goal - self.total_calories

    @property
    def progress(self) -> float:
        return progress_percent(self.total_calories, self.calorie_goal)

    def meals_by_type(self, meal_type: str) -> list[MealLog]:
        return [m for m in self.items if m.meal_type == meal_type]

    def _add_calories(self, amount: int) -> None:
        self.summary["calories"] = max(0, int(self.summary.get("calories") or 0) + amount)

    async def add_meal(self, meal_type: str, food_name: Any, calories: Any) -> MealLog | None:
        try:
            kind = require_choice(meal_type, list(MealType), f"Unknown meal type: {meal_type}")
            name = require_text(food_name, "Please enter a food name")
            cals = parse_int_in_range(
                calories, 1, MAX_MEAL_CALORIES, f"Please enter valid calories (1-{MAX_MEAL_CALORIES})"
            )
        except ValidationError as e:
            return self._reject(e)

        def build(echo: dict[str, Any]) -> MealLog:
            return MealLog(
                id=echo.get("id") or local_id(),
                meal_type=kind,
                food_name=name,
                calories=cals,
                logged_at=self.clock(),
            )

        meal = await self._submit(
            lambda: self.api.log_meal({"meal_type": kind, "food_name": name, "calories": cals}),
            build,
            "Could not add the meal. Please try again.",
        )
        if meal is not None:
            self._add_calories(cals)
        return meal

    async def quick_add(self, food: dict[str, Any], meal_type: str = MealType.BREAKFAST) -> MealLog | None:
        """Log a 100 g serving of a catalogue food."""
        try:
            kind = require_choice(meal_type, list(MealType), f"Unknown meal type: {meal_type}")
        except ValidationError as e:
            return self._reject(e)
        cals = food_calories(food)

        def build(echo: dict[str, Any]) -> MealLog:
            return MealLog(
                id=echo.get("id") or local_id(),
                meal_type=kind,
                food_name=food.get("name") or "",
                food_id=food.get("id"),
                calories=cals,
                logged_at=self.clock(),
            )

        meal = await self._submit(
            lambda: self.api.log_meal({"food_id": food.get("id"), "meal_type": kind, "grams": QUICK_ADD_GRAMS}),
            build,
            "Could not add the meal. Please try again.",
        )
        if meal is not None:
            self._add_calories(cals)
            logger.debug(f"Quick-added {meal.food_name} ({cals} kcal)")
        return meal

    async def delete(self, meal_id: Any) -> bool:
        removed = await self._delete(meal_id, "Delete this meal?", self.api.delete_meal_log)
        if removed is None:
            return False
        self._add_calories(-removed.calories)
        return True
