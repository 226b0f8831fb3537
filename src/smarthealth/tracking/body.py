"""Height and weight measurements with the derived BMI."""

from __future__ import annotations

from typing import Any

from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import BMICategory, bmi_category, calculate_bmi
from smarthealth.models import HealthStat

from .base import TrackedList
from .validation import parse_positive_number

MAX_HEIGHT_CM = 300
MAX_WEIGHT_KG = 500
RECENT_BMI_COUNT = 5


class HealthStatTracker(TrackedList[HealthStat]):
    """Measurements newest first; the first one is the current BMI."""

    async def load(self) -> None:
        stats = await self.api.get_health_stats()
        self.items = [HealthStat.from_dict(s) for s in stats if isinstance(s, dict)]

    @property
    def latest(self) -> HealthStat | None:
        return self.items[0] if self.items else None

    @property
    def bmi(self) -> float | None:
        stat = self.latest
        if stat is None:
            return None
        if stat.bmi is not None:
            return stat.bmi
        return calculate_bmi(stat.weight or 0, stat.height or 0) or None

    @property
    def category(self) -> BMICategory | None:
        return bmi_category(self.bmi)

    def recent_bmi(self, count: int = RECENT_BMI_COUNT) -> list[float]:
        """BMI of the last ``count`` measurements, newest first, skipping blanks."""
        return [s.bmi for s in self.items[:count] if s.bmi is not None]

    async def record(self, height: Any, weight: Any) -> HealthStat | None:
        """Save a height (cm) and weight (kg) measurement."""
        try:
            height_cm = parse_positive_number(height, "Please enter a valid height (cm)")
            weight_kg = parse_positive_number(weight, "Please enter a valid weight (kg)")
            if height_cm > MAX_HEIGHT_CM:
                raise ValidationError("Please enter a valid height (cm)")
            if weight_kg > MAX_WEIGHT_KG:
                raise ValidationError("Please enter a valid weight (kg)")
        except ValidationError as e:
            return self._reject(e)

        def build(echo: dict[str, Any]) -> HealthStat:
            stat = HealthStat.from_dict(echo)
            stat.height = height_cm
            stat.weight = weight_kg
            if stat.bmi is None:
                stat.bmi = calculate_bmi(weight_kg, height_cm)
            stat.recorded_at = stat.recorded_at or self.clock()
            return stat

        return await self._submit(
            lambda: self.api.save_health_stat(height_cm, weight_kg),
            build,
            "Could not save. Please try again.",
        )
