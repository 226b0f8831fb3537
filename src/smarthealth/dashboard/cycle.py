"""Period tracking: predictions, countdown, and current phase."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from smarthealth.core.exceptions import ValidationError
from smarthealth.metrics import CyclePhase, cycle_phase, days_until, next_period_date
from smarthealth.metrics.cycle import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH
from smarthealth.models import FlowLevel, PeriodLog, parse_date

SYMPTOMS = ("cramps", "headache", "bloating", "fatigue", "mood", "acne")


@dataclass
class CycleStatus:
    logs: list[PeriodLog] = field(default_factory=list)
    last_period_start: date | None = None
    cycle_length: int = DEFAULT_CYCLE_LENGTH
    period_length: int = DEFAULT_PERIOD_LENGTH
    next_period: date | None = None
    days_until_period: int | None = None
    phase: CyclePhase | None = None
    predictions: dict[str, Any] = field(default_factory=dict)


def _cycle_defaults(config) -> tuple[int, int]:
    if config is None:
        return DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH
    return (
        int(config.get("cycle.length_days", DEFAULT_CYCLE_LENGTH)),
        int(config.get("cycle.period_length_days", DEFAULT_PERIOD_LENGTH)),
    )


async def load_cycle(api, today: date, config=None) -> CycleStatus:
    """Combine period logs with the server prediction.

    The server's ``next_period`` wins; otherwise the next start is the last
    logged start plus the average cycle length.
    """
    default_cycle, period_length = _cycle_defaults(config)
    logs, predictions = await asyncio.gather(api.get_period_logs(), api.get_period_predictions())

    period_logs = [PeriodLog.from_dict(p) for p in logs if isinstance(p, dict)]
    last_start = period_logs[0].start_date if period_logs else None
    cycle_length = int(predictions.get("avg_cycle_length") or default_cycle)

    status = CycleStatus(
        logs=period_logs,
        last_period_start=last_start,
        cycle_length=cycle_length,
        period_length=period_length,
        predictions=predictions,
    )
    status.next_period = next_period_date(parse_date(predictions.get("next_period")), last_start, cycle_length)
    if status.next_period is not None:
        status.days_until_period = days_until(status.next_period, today)
        status.phase = cycle_phase(status.days_until_period, period_length)
    return status


async def start_period(
    api, today: date, flow_level: str = FlowLevel.MEDIUM, symptoms: list[str] | None = None
) -> dict[str, Any]:
    """Record a period starting ``today``."""
    if flow_level not in list(FlowLevel):
        raise ValidationError(f"Unknown flow level: {flow_level}")
    unknown = [s for s in symptoms or [] if s not in SYMPTOMS]
    if unknown:
        raise ValidationError(f"Unknown symptoms: {', '.join(unknown)}")
    log = PeriodLog(start_date=today, flow_level=flow_level, symptoms=list(symptoms or []))
    return await api.log_period(log.to_dict())
