"""Health goals: create, track progress, complete."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import Any

from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import goal_progress_percent, goal_status_for
from smarthealth.models import Goal, GoalStatus

from .base import TrackedList, local_id
from .validation import parse_positive_number, require_choice


@dataclass(frozen=True)
class GoalType:
    id: str
    label: str
    unit: str
    default_target: float


GOAL_TYPES: dict[str, GoalType] = {
    t.id: t
    for t in (
        GoalType("weight_loss", "Weight loss", "kg", 5),
        GoalType("weight_gain", "Weight gain", "kg", 3),
        GoalType("exercise_days", "Exercise", "days/week", 5),
        GoalType("water_intake", "Water", "ml/day", 2000),
        GoalType("sleep_hours", "Sleep", "hours/night", 8),
        GoalType("steps", "Steps", "steps/day", 10000),
    )
}


@dataclass(frozen=True)
class GoalPreset:
    type: str
    target: float
    description: str


PRESETS: tuple[GoalPreset, ...] = (
    GoalPreset("weight_loss", 5, "Lose 5kg in 3 months"),
    GoalPreset("exercise_days", 5, "Exercise 5 days a week"),
    GoalPreset("water_intake", 2000, "Drink 2L of water every day"),
    GoalPreset("sleep_hours", 8, "Sleep a full 8 hours"),
)


def goal_type_info(type_id: str) -> GoalType:
    """Type metadata; unknown ids fall back to the first type."""
    return GOAL_TYPES.get(type_id) or next(iter(GOAL_TYPES.values()))


class GoalTracker(TrackedList[Goal]):
    async def load(self) -> None:
        active, completed = await asyncio.gather(
            self.api.get_goals(GoalStatus.ACTIVE),
            self.api.get_goals(GoalStatus.COMPLETED),
        )
        self.items = [Goal.from_dict(g) for g in [*active, *completed] if isinstance(g, dict)]

    @property
    def active(self) -> list[Goal]:
        return [g for g in self.items if g.status == GoalStatus.ACTIVE]

    @property
    def completed(self) -> list[Goal]:
        return [g for g in self.items if g.status == GoalStatus.COMPLETED]

    @staticmethod
    def progress(goal: Goal) -> float:
        return goal_progress_percent(goal.current_value, goal.target_value)

    async def _create(self, type_id: str, target: float, description: str) -> Goal | None:
        info = goal_type_info(type_id)
        payload: dict[str, Any] = {"type": info.id, "target_value": target, "unit": info.unit}
        if description:
            payload["description"] = description

        def build(echo: dict[str, Any]) -> Goal:
            return Goal(
                id=echo.get("id") or local_id(),
                type=info.id,
                target_value=target,
                current_value=0,
                unit=info.unit,
                description=description or f"{info.label} - {target:g} {info.unit}",
                status=GoalStatus.ACTIVE,
            )

        return await self._submit(
            lambda: self.api.create_goal(payload),
            build,
            "Could not create the goal. Please try again.",
        )

    async def create(self, goal_type: str, target_value: Any, description: str = "") -> Goal | None:
        try:
            type_id = require_choice(goal_type, GOAL_TYPES, f"Unknown goal type: {goal_type}")
            target = parse_positive_number(target_value, "Please enter a valid target")
        except ValidationError as e:
            return self._reject(e)
        return await self._create(type_id, target, (description or "").strip())

    async def create_preset(self, preset: GoalPreset) -> Goal | None:
        return await self._create(preset.type, preset.target, preset.description)

    async def update_progress(self, goal_id: Any, current_value: Any) -> Goal | None:
        """Record the current value; the goal completes once it reaches its target."""
        goal = self.find(goal_id)
        if goal is None:
            return None
        try:
            value = float(str(current_value).strip())
        except (TypeError, ValueError, OverflowError):
            return self._reject(ValidationError("Please enter a number"))
        if not math.isfinite(value) or value < 0:
            return self._reject(ValidationError("Please enter a number"))

        status = goal_status_for(value, goal.target_value)
        ok, _ = await self._run(
            lambda: self.api.update_goal(goal_id, {"current_value": value, "status": status}),
            "Could not update the goal. Please try again.",
        )
        if not ok:
            return None
        goal.current_value = value
        goal.status = status
        return goal

    async def delete(self, goal_id: Any) -> bool:
        removed = await self._delete(goal_id, "Delete this goal?", self.api.delete_goal)
        return removed is not None
