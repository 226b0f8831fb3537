"""Vital-sign readings: latest per type, a week of history, and blood sugar."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from typing import Any

from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import (
    BloodPressureStatus,
    BloodSugarStatus,
    SugarContext,
    VitalStatus,
    blood_pressure_status,
    blood_sugar_status,
    last_n_days,
    vital_status,
)
from smarthealth.models import Vital, VitalType, parse_date

from .base import TrackedList
from .validation import parse_positive_number, require_choice

HISTORY_DAYS = 7
CHARTED_TYPES = (VitalType.HEART_RATE, VitalType.SPO2)
BLOOD_SUGAR = "blood_sugar"
SUGAR_HISTORY_SIZE = 10


def reading_series(readings: list[dict[str, Any]], today: date, days: int = HISTORY_DAYS) -> list[tuple[date, float]]:
    """One value per day, oldest first; the last reading of a day wins, missing days are 0."""
    window = last_n_days(today, days)
    values: dict[date, float] = dict.fromkeys(window, 0.0)
    for reading in readings:
        if not isinstance(reading, dict):
            continue
        day = parse_date(reading.get("recorded_at"))
        if day in values:
            values[day] = float(reading.get("value") or 0)
    return [(day, values[day]) for day in window]


class VitalsTracker(TrackedList[Vital]):
    """Readings recorded in this session are kept newest first in ``items``."""

    def __init__(self, api, prompter=None, **kwargs):
        super().__init__(api, prompter, **kwargs)
        self.latest: dict[str, Vital] = {}
        self.history: dict[str, list[tuple[date, float]]] = {}

    async def load(self, today: date | None = None) -> None:
        today = today or self.today()
        date_from = (today - timedelta(days=HISTORY_DAYS)).isoformat()
        date_to = today.isoformat()
        latest, *histories = await asyncio.gather(
            self.api.get_latest_vitals(),
            *(self.api.get_vitals(t, date_from, date_to) for t in CHARTED_TYPES),
        )
        self.latest = {
            vital_type: Vital.from_dict(reading, vital_type)
            for vital_type, reading in latest.items()
            if isinstance(reading, dict)
        }
        self.history = {}
        for vital_type, readings in zip(CHARTED_TYPES, histories):
            series = reading_series(readings, today)
            if any(value > 0 for _, value in series):
                self.history[vital_type] = series

    def status(self, vital_type: str) -> VitalStatus | BloodPressureStatus | BloodSugarStatus | None:
        reading = self.latest.get(vital_type)
        if reading is None:
            return None
        if vital_type == BLOOD_SUGAR:
            return blood_sugar_status(reading.value, reading.context or SugarContext.FASTING)
        if vital_type == VitalType.BLOOD_PRESSURE:
            if reading.value2 is None:
                return None
            return blood_pressure_status(reading.value, reading.value2)
        return vital_status(vital_type, reading.value)

    async def record(self, vital_type: str, value: Any, value2: Any = None) -> Vital | None:
        try:
            kind = require_choice(vital_type, list(VitalType), f"Unknown vital type: {vital_type}")
            if kind == VitalType.BLOOD_PRESSURE:
                systolic = parse_positive_number(value, "Please enter a valid blood pressure")
                diastolic = parse_positive_number(value2, "Please enter a valid blood pressure")
                payload: dict[str, Any] = {"type": kind, "value": systolic, "value2": diastolic}
            else:
                reading = parse_positive_number(value, "Please enter a valid value")
                payload = {"type": kind, "value": reading}
        except ValidationError as e:
            return self._reject(e)

        def build(echo: dict[str, Any]) -> Vital:
            vital = Vital.from_dict({**payload, **echo}, kind)
            vital.recorded_at = vital.recorded_at or self.clock()
            return vital

        vital = await self._submit(
            lambda: self.api.log_vital(payload),
            build,
            "Could not save. Please try again.",
        )
        if vital is not None:
            self.latest[kind] = vital
            self.prompter.alert("Saved", "Vital signs recorded")
        return vital

    @property
    def sugar_history(self) -> list[Vital]:
        """Blood-sugar readings from this session, newest first."""
        return [v for v in self.items if v.type == BLOOD_SUGAR][:SUGAR_HISTORY_SIZE]

    async def record_blood_sugar(self, value: Any, context: str = SugarContext.FASTING) -> Vital | None:
        """Record a glucose reading in mg/dL taken in the given meal context."""
        try:
            sugar_context = require_choice(context, list(SugarContext), f"Unknown measurement time: {context}")
            reading = parse_positive_number(value, "Please enter a valid blood sugar")
        except ValidationError as e:
            return self._reject(e)
        payload: dict[str, Any] = {"type": BLOOD_SUGAR, "value": reading, "context": sugar_context}

        def build(echo: dict[str, Any]) -> Vital:
            vital = Vital.from_dict({**payload, **echo}, BLOOD_SUGAR)
            vital.recorded_at = vital.recorded_at or self.clock()
            return vital

        vital = await self._submit(
            lambda: self.api.log_vital(payload),
            build,
            "Could not save. Please try again.",
        )
        if vital is not None:
            self.latest[BLOOD_SUGAR] = vital
            self.prompter.alert("Saved", "Blood sugar recorded")
        return vital
