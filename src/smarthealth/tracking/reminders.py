"""Medication, water, and exercise reminders."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from loguru import logger

from smarthealth.core.exceptions import ValidationError
from smarthealth.models import WEEKDAYS, Reminder, ReminderType

from .base import TrackedList, local_id
from .validation import parse_int_in_range, require_choice, require_text

DEFAULT_TIMEZONE = "Asia/Ho_Chi_Minh"
EVERY_DAY = "Every day"
DAY_LABELS = {
    "mon": "Mon",
    "tue": "Tue",
    "wed": "Wed",
    "thu": "Thu",
    "fri": "Fri",
    "sat": "Sat",
    "sun": "Sun",
}


def format_days(days_of_week: str | None) -> str:
    """Human label for a ``mon,tue,...`` list; empty or all seven is every day."""
    if not days_of_week:
        return EVERY_DAY
    days = days_of_week.split(",")
    if len(days) == 7:
        return EVERY_DAY
    return ", ".join(DAY_LABELS.get(d.strip(), d.strip()) for d in days)


def format_time_of_day(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}:00"


class ReminderTracker(TrackedList[Reminder]):
    def __init__(self, api, prompter=None, **kwargs):
        super().__init__(api, prompter, **kwargs)
        self.completed_today: set[Any] = set()

    async def load(self) -> None:
        self.items = [Reminder.from_dict(r) for r in await self.api.get_reminders() if isinstance(r, dict)]

    @property
    def done_count(self) -> int:
        return len(self.completed_today)

    async def create(
        self,
        title: Any,
        hour: Any = 8,
        minute: Any = 0,
        days: Iterable[str] | str = WEEKDAYS,
        reminder_type: str = ReminderType.MEDICATION,
        message: str = "",
        timezone: str = DEFAULT_TIMEZONE,
    ) -> Reminder | None:
        try:
            name = require_text(title, "Please enter a reminder title")
            if isinstance(days, str):
                days = days.split(",")
            selected = {d.strip().lower() for d in days if d and d.strip()}
            if not selected:
                raise ValidationError("Please select at least one day")
            for d in selected:
                require_choice(d, WEEKDAYS, f"Unknown day: {d}")
            kind = require_choice(reminder_type, list(ReminderType), f"Unknown reminder type: {reminder_type}")
            h = parse_int_in_range(hour, 0, 23, "Please enter a valid time")
            m = parse_int_in_range(minute, 0, 59, "Please enter a valid time")
        except ValidationError as e:
            return self._reject(e)

        draft = Reminder(
            type=kind,
            title=name,
            message=(message or "").strip(),
            time_of_day=format_time_of_day(h, m),
            days_of_week=",".join(d for d in WEEKDAYS if d in selected),
            timezone=timezone,
            enabled=True,
        )

        def build(echo: dict[str, Any]) -> Reminder:
            if not echo:
                draft.id = local_id()
                return draft
            reminder = Reminder.from_dict({**draft.to_dict(), **echo})
            reminder.id = reminder.id or local_id()
            return reminder

        return await self._submit(
            lambda: self.api.create_reminder(draft.to_dict()),
            build,
            "Could not create the reminder.",
        )

    async def delete(self, reminder_id: Any) -> bool:
        removed = await self._delete(reminder_id, "Delete this reminder?", self.api.delete_reminder)
        if removed is None:
            return False
        self.completed_today.discard(reminder_id)
        return True

    async def mark_done(self, reminder_id: Any) -> bool:
        """Mark a reminder done for today; failures are logged only."""
        ok, _ = await self._run(
            lambda: self.api.mark_reminder_done(reminder_id, self.clock().isoformat()),
            "Could not mark the reminder as done.",
            alert=False,
        )
        if ok:
            self.completed_today.add(reminder_id)
        else:
            logger.info(f"Reminder {reminder_id} not marked done: {self.last_error}")
        return ok

    async def set_enabled(self, reminder_id: Any, enabled: bool) -> bool:
        reminder = self.find(reminder_id)
        if reminder is None:
            return False
        ok, _ = await self._run(
            lambda: self.api.update_reminder(reminder_id, {"enabled": enabled}),
            "Could not update the reminder.",
        )
        if ok:
            reminder.enabled = enabled
        return ok
