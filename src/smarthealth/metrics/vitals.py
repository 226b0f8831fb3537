"""Vital-sign status bands.

Each classifier walks its bands in order and the first match wins.
"""

from enum import StrEnum


class BloodPressureStatus(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    PRE_HYPERTENSION = "pre-hypertension"
    HYPERTENSION = "hypertension"


class BloodSugarStatus(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    PRE_DIABETIC = "pre-diabetic"
    DIABETIC = "diabetic"
    NEEDS_MONITORING = "needs monitoring"
    HIGH = "high"


class SugarContext(StrEnum):
    """When the glucose sample was taken."""

    FASTING = "fasting"
    BEFORE_MEAL = "before_meal"
    AFTER_MEAL = "after_meal"
    RANDOM = "random"


class VitalStatus(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    MILD_FEVER = "mild fever"
    FEVER = "fever"


def blood_pressure_status(systolic: float, diastolic: float) -> BloodPressureStatus:
    """Classify a blood-pressure reading in mmHg."""
    if systolic < 90 or diastolic < 60:
        return BloodPressureStatus.LOW
    if systolic < 120 and diastolic < 80:
        return BloodPressureStatus.NORMAL
    if systolic < 130 and diastolic < 85:
        return BloodPressureStatus.PRE_HYPERTENSION
    return BloodPressureStatus.HYPERTENSION


def blood_sugar_status(value: float, context: str = SugarContext.FASTING) -> BloodSugarStatus:
    """Classify a glucose reading in mg/dL.

    Fasting samples use the fasting bands; every other context (before a meal,
    two hours after, random) is judged against the post-meal bands.
    """
    if context == SugarContext.FASTING:
        if value < 70:
            return BloodSugarStatus.LOW
        if value < 100:
            return BloodSugarStatus.NORMAL
        if value < 126:
            return BloodSugarStatus.PRE_DIABETIC
        return BloodSugarStatus.DIABETIC
    if value < 140:
        return BloodSugarStatus.NORMAL
    if value < 200:
        return BloodSugarStatus.NEEDS_MONITORING
    return BloodSugarStatus.HIGH


def vital_status(vital_type: str, value: float) -> VitalStatus | None:
    """Status for single-value vitals; None for types without bands."""
    if vital_type == "heart_rate":
        if value < 60:
            return VitalStatus.LOW
        if value > 100:
            return VitalStatus.HIGH
        return VitalStatus.NORMAL
    if vital_type == "temperature":
        if value < 36.1:
            return VitalStatus.LOW
        if value > 38:
            return VitalStatus.FEVER
        if value > 37.2:
            return VitalStatus.MILD_FEVER
        return VitalStatus.NORMAL
    if vital_type == "spo2":
        return VitalStatus.LOW if value < 95 else VitalStatus.NORMAL
    return None
