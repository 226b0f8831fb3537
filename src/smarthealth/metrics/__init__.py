"""Derived health metrics: status bands, progress, streaks, cycle phase.

Pure math, no I/O.
"""

from .activity import (
    CALORIES_PER_MINUTE,
    compute_streak,
    daily_series,
    estimate_exercise_calories,
    format_day_label,
    last_n_days,
    series_labels,
)
from .body import BMICategory, bmi_category, calculate_bmi
from .cycle import CyclePhase, cycle_phase, days_until, next_period_date
from .progress import (
    compliance_ratio,
    goal_progress_percent,
    goal_status_for,
    is_achievement_unlocked,
    progress_percent,
)
from .sleep import (
    SleepAdvice,
    SleepBand,
    SleepRating,
    sleep_advice,
    sleep_duration_hours,
    sleep_quality_rating,
)
from .vitals import (
    BloodPressureStatus,
    BloodSugarStatus,
    SugarContext,
    VitalStatus,
    blood_pressure_status,
    blood_sugar_status,
    vital_status,
)

__all__ = [
    "CALORIES_PER_MINUTE",
    "BMICategory",
    "BloodPressureStatus",
    "BloodSugarStatus",
    "CyclePhase",
    "SleepAdvice",
    "SleepBand",
    "SleepRating",
    "SugarContext",
    "VitalStatus",
    "blood_pressure_status",
    "blood_sugar_status",
    "bmi_category",
    "calculate_bmi",
    "compliance_ratio",
    "compute_streak",
    "cycle_phase",
    "daily_series",
    "days_until",
    "estimate_exercise_calories",
    "format_day_label",
    "goal_progress_percent",
    "goal_status_for",
    "is_achievement_unlocked",
    "last_n_days",
    "next_period_date",
    "progress_percent",
    "series_labels",
    "sleep_advice",
    "sleep_duration_hours",
    "sleep_quality_rating",
    "vital_status",
]
