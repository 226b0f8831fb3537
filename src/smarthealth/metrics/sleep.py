"""Sleep duration and advice."""

from dataclasses import dataclass
from enum import StrEnum


class SleepBand(StrEnum):
    IDEAL = "ideal"
    SLIGHTLY_SHORT = "slightly_short"
    DEPRIVED = "deprived"
    TOO_MUCH = "too_much"


class SleepRating(StrEnum):
    GOOD = "good"
    FAIR = "fair"
    AVERAGE = "average"
    POOR = "poor"


@dataclass(frozen=True)
class SleepAdvice:
    band: SleepBand
    message: str


_ADVICE_MESSAGES = {
    SleepBand.IDEAL: "Ideal amount of sleep!",
    SleepBand.SLIGHTLY_SHORT: "Try to sleep one more hour.",
    SleepBand.DEPRIVED: "Sleep deprived! Aim for 7-8 hours.",
    SleepBand.TOO_MUCH: "A bit too much sleep, 7-9 hours is enough.",
}


def sleep_advice(hours: float) -> SleepAdvice:
    """Advice for an average nightly duration in hours."""
    if 7 <= hours <= 9:
        band = SleepBand.IDEAL
    elif 6 <= hours < 7:
        band = SleepBand.SLIGHTLY_SHORT
    elif hours < 6:
        band = SleepBand.DEPRIVED
    else:
        band = SleepBand.TOO_MUCH
    return SleepAdvice(band=band, message=_ADVICE_MESSAGES[band])


def sleep_duration_hours(sleep_hour: int, sleep_minute: int, wake_hour: int, wake_minute: int) -> float:
    """Hours between a bedtime and a wake time on a 24h clock.

    A wake time at or before the bedtime is taken to be on the next day,
    so 23:00 -> 07:00 is 8.0 and 22:00 -> 22:00 is 24.0.
    """
    sleep_mins = sleep_hour * 60 + sleep_minute
    wake_mins = wake_hour * 60 + wake_minute
    if wake_mins <= sleep_mins:
        wake_mins += 24 * 60
    return (wake_mins - sleep_mins) / 60


def sleep_quality_rating(avg_hours: float | None) -> SleepRating | None:
    """Coarse rating used on reports. None when there is no data."""
    if not avg_hours:
        return None
    if avg_hours >= 7.5:
        return SleepRating.GOOD
    if avg_hours >= 6.5:
        return SleepRating.FAIR
    if avg_hours >= 5:
        return SleepRating.AVERAGE
    return SleepRating.POOR
