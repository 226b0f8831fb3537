"""Water intake for today plus the weekly chart."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Any

from smarthealth.api.health import DEFAULT_WATER_GOAL_ML
from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import progress_percent
from smarthealth.models import WaterIntakeEntry, parse_date

from .base import TrackedList, local_id
from .validation import parse_int_in_range

MAX_AMOUNT_ML = 5000
QUICK_AMOUNTS_ML = (150, 250, 350, 500)


@dataclass
class WeeklyPoint:
    day: date | None
    total_ml: int


class WaterTracker(TrackedList[WaterIntakeEntry]):
    """Today's entries, running total, and the last seven daily totals."""

    def __init__(self, api, prompter=None, **kwargs):
        super().__init__(api, prompter, **kwargs)
        self.total_ml = 0
        self.goal_ml = DEFAULT_WATER_GOAL_ML
        self.weekly: list[WeeklyPoint] = []

    @property
    def progress(self) -> float:
        return progress_percent(self.total_ml, self.goal_ml)

    async def load(self, day: date | None = None) -> None:
        day = day or self.today()
        today_data, weekly = await asyncio.gather(
            self.api.get_water_intake(day.isoformat()),
            self.api.get_water_intake_weekly(),
        )
        self.items = [WaterIntakeEntry.from_dict(e) for e in today_data.get("entries") or []]
        self.total_ml = int(today_data.get("total_ml") or 0)
        self.goal_ml = int(today_data.get("goal_ml") or DEFAULT_WATER_GOAL_ML)
        self.weekly = [
            WeeklyPoint(day=parse_date(p.get("date") or p.get("logged_date")), total_ml=int(p.get("total_ml") or 0))
            for p in weekly
            if isinstance(p, dict)
        ]

    async def add(self, amount_ml: Any) -> WaterIntakeEntry | None:
        try:
            amount = parse_int_in_range(
                amount_ml, 1, MAX_AMOUNT_ML, f"Please enter a valid amount in ml (1-{MAX_AMOUNT_ML})"
            )
        except ValidationError as e:
            return self._reject(e)

        def build(echo: dict[str, Any]) -> WaterIntakeEntry:
            entry = WaterIntakeEntry.from_dict(echo)
            entry.id = echo.get("id") or local_id()
            entry.amount_ml = amount
            entry.logged_at = entry.logged_at or self.clock()
            return entry

        entry = await self._submit(
            lambda: self.api.add_water_intake(amount),
            build,
            "Could not add water. Please try again.",
        )
        if entry is not None:
            self.total_ml += amount
            if self.weekly:
                self.weekly[-1].total_ml += amount
        return entry

    async def delete(self, entry_id: Any) -> bool:
        entry = self.find(entry_id)
        if entry is None:
            return False
        removed = await self._delete(entry_id, f"Delete {entry.amount_ml}ml?", self.api.delete_water_intake)
        if removed is None:
            return False
        self.total_ml = max(0, self.total_ml - removed.amount_ml)
        return True
