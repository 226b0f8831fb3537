"""Sleep logs and the server-side nightly average."""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta
from typing import Any

from smarthealth.api.health import EMPTY_SLEEP_AVERAGE
from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import SleepAdvice, daily_series, sleep_advice, sleep_duration_hours
from smarthealth.models import SleepLog, SleepQuality

from .base import TrackedList, local_id
from .validation import parse_int_in_range, require_choice

HISTORY_DAYS = 30


def sleep_window(
    sleep_hour: int, sleep_minute: int, wake_hour: int, wake_minute: int, woke_on: datetime
) -> tuple[datetime, datetime, float]:
    """Bedtime and wake time for a night that ended on ``woke_on``'s date.

    The bedtime is derived from the wake time so a nap that starts and ends
    on the same day is not pushed back to the previous evening.
    """
    duration = sleep_duration_hours(sleep_hour, sleep_minute, wake_hour, wake_minute)
    wake_time = woke_on.replace(hour=wake_hour, minute=wake_minute, second=0, microsecond=0)
    return wake_time - timedelta(hours=duration), wake_time, duration


class SleepTracker(TrackedList[SleepLog]):
    def __init__(self, api, prompter=None, **kwargs):
        super().__init__(api, prompter, **kwargs)
        self.average: dict[str, Any] = dict(EMPTY_SLEEP_AVERAGE)

    @property
    def average_hours(self) -> float:
        return float(self.average.get("avg_duration_hours") or 0)

    @property
    def advice(self) -> SleepAdvice:
        return sleep_advice(self.average_hours)

    async def load(self, today: date | None = None) -> None:
        today = today or self.today()
        logs, average = await asyncio.gather(
            self.api.get_sleep_logs((today - timedelta(days=HISTORY_DAYS)).isoformat(), today.isoformat()),
            self.api.get_sleep_average(),
        )
        self.items = [SleepLog.from_dict(s) for s in logs if isinstance(s, dict)]
        self.average = {**EMPTY_SLEEP_AVERAGE, **average}

    def weekly_hours(self, today: date | None = None) -> list[tuple[date, float]]:
        return daily_series(
            self.items,
            when=lambda s: s.wake_time,
            value=lambda s: s.duration_hours,
            today=today or self.today(),
        )

    async def log(
        self,
        sleep_hour: Any,
        sleep_minute: Any,
        wake_hour: Any,
        wake_minute: Any,
        quality: str = SleepQuality.GOOD,
    ) -> SleepLog | None:
        try:
            sh = parse_int_in_range(sleep_hour, 0, 23, "Invalid sleep time")
            sm = parse_int_in_range(sleep_minute, 0, 59, "Invalid sleep time")
            wh = parse_int_in_range(wake_hour, 0, 23, "Invalid sleep time")
            wm = parse_int_in_range(wake_minute, 0, 59, "Invalid sleep time")
            quality = require_choice(quality, list(SleepQuality), f"Unknown sleep quality: {quality}")
            sleep_time, wake_time, duration = sleep_window(sh, sm, wh, wm, self.clock())
            if duration <= 0 or duration > 24:
                raise ValidationError("Invalid sleep time")
        except ValidationError as e:
            return self._reject(e)

        payload = {"sleep_time": sleep_time.isoformat(), "wake_time": wake_time.isoformat(), "quality": quality}

        def build(echo: dict[str, Any]) -> SleepLog:
            return SleepLog(
                id=echo.get("id") or local_id(),
                sleep_time=sleep_time,
                wake_time=wake_time,
                duration_hours=float(echo.get("duration_hours") or round(duration, 1)),
                quality=quality,
            )

        log = await self._submit(
            lambda: self.api.log_sleep(payload),
            build,
            "Could not save sleep. Please try again.",
        )
        if log is not None:
            average = await self.api.get_sleep_average()
            self.average = {**EMPTY_SLEEP_AVERAGE, **average}
        return log

    async def delete(self, log_id: Any) -> bool:
        removed = await self._delete(log_id, "Delete this record?", self.api.delete_sleep_log)
        return removed is not None
