"""Menstrual cycle prediction and phase inference."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from enum import StrEnum

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5


class CyclePhase(StrEnum):
    MENSTRUAL = "menstrual"
    PMS = "PMS"
    FOLLICULAR = "follicular"
    OVULATORY = "ovulatory"


def next_period_date(
    predicted: date | None,
    last_period_start: date | None,
    avg_cycle_length: int | None = DEFAULT_CYCLE_LENGTH,
) -> date | None:
    """Server prediction when available, else last start + average cycle length."""
    if predicted is not None:
        return predicted
    if last_period_start is None:
        return None
    return last_period_start + timedelta(days=avg_cycle_length or DEFAULT_CYCLE_LENGTH)


def days_until(target: date | datetime, now: date | datetime) -> int:
    """Whole days from ``now`` to ``target``, rounded up."""
    if not isinstance(target, datetime):
        target = datetime(target.year, target.month, target.day)
    if not isinstance(now, datetime):
        now = datetime(now.year, now.month, now.day)
    return math.ceil((target - now).total_seconds() / 86400)


def cycle_phase(days_until_period: int, period_length: int = DEFAULT_PERIOD_LENGTH) -> CyclePhase:
    """Phase for a given countdown to the next period.

    ``d <= 0`` within the period length is menstrual, up to a week ahead is
    PMS, one to two weeks ahead is follicular, anything else ovulatory.
    """
    d = days_until_period
    if d <= 0 and d > -period_length:
        return CyclePhase.MENSTRUAL
    if 0 < d <= 7:
        return CyclePhase.PMS
    if 7 < d <= 14:
        return CyclePhase.FOLLICULAR
    return CyclePhase.OVULATORY
