"""Tests for BMI, vital-sign, and sleep bands."""

import pytest

from smarthealth.metrics import (
    BloodPressureStatus,
    BloodSugarStatus,
    BMICategory,
    SleepBand,
    SleepRating,
    VitalStatus,
    blood_pressure_status,
    blood_sugar_status,
    bmi_category,
    calculate_bmi,
    sleep_advice,
    sleep_duration_hours,
    sleep_quality_rating,
    vital_status,
)


class TestBmi:
    def test_calculate(self):
        assert calculate_bmi(70, 175) == 22.9
        assert calculate_bmi(70, 0) == 0.0
        assert calculate_bmi(70, -170) == 0.0

    @pytest.mark.parametrize(
        "bmi, expected",
        [
            (18.4, BMICategory.UNDERWEIGHT),
            (18.5, BMICategory.NORMAL),
            (24.9, BMICategory.NORMAL),
            (25.0, BMICategory.OVERWEIGHT),
            (29.9, BMICategory.OVERWEIGHT),
            (30.0, BMICategory.OBESE),
        ],
    )
    def test_boundaries_inclusive_lower(self, bmi, expected):
        assert bmi_category(bmi) == expected

    def test_no_reading(self):
        assert bmi_category(None) is None
        assert bmi_category(0) is None


class TestBloodPressure:
    @pytest.mark.parametrize(
        "systolic, diastolic, expected",
        [
            (85, 70, BloodPressureStatus.LOW),
            (110, 55, BloodPressureStatus.LOW),
            (115, 75, BloodPressureStatus.NORMAL),
            (125, 82, BloodPressureStatus.PRE_HYPERTENSION),
            (119, 82, BloodPressureStatus.PRE_HYPERTENSION),
            (135, 80, BloodPressureStatus.HYPERTENSION),
            (125, 90, BloodPressureStatus.HYPERTENSION),
        ],
    )
    def test_bands(self, systolic, diastolic, expected):
        assert blood_pressure_status(systolic, diastolic) == expected

    def test_labels(self):
        assert str(BloodPressureStatus.PRE_HYPERTENSION) == "pre-hypertension"


class TestBloodSugar:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (65, BloodSugarStatus.LOW),
            (70, BloodSugarStatus.NORMAL),
            (99, BloodSugarStatus.NORMAL),
            (100, BloodSugarStatus.PRE_DIABETIC),
            (126, BloodSugarStatus.DIABETIC),
        ],
    )
    def test_fasting(self, value, expected):
        assert blood_sugar_status(value, "fasting") == expected

    @pytest.mark.parametrize("context", ["before_meal", "after_meal", "random"])
    def test_other_contexts_use_post_meal_bands(self, context):
        assert blood_sugar_status(65, context) == BloodSugarStatus.NORMAL
        assert blood_sugar_status(150, context) == BloodSugarStatus.NEEDS_MONITORING
        assert blood_sugar_status(200, context) == BloodSugarStatus.HIGH

    def test_default_context_is_fasting(self):
        assert blood_sugar_status(110) == BloodSugarStatus.PRE_DIABETIC


class TestVitalStatus:
    def test_heart_rate(self):
        assert vital_status("heart_rate", 55) == VitalStatus.LOW
        assert vital_status("heart_rate", 72) == VitalStatus.NORMAL
        assert vital_status("heart_rate", 101) == VitalStatus.HIGH

    def test_temperature_fever_above_mild(self):
        assert vital_status("temperature", 36.0) == VitalStatus.LOW
        assert vital_status("temperature", 36.6) == VitalStatus.NORMAL
        assert vital_status("temperature", 37.5) == VitalStatus.MILD_FEVER
        assert vital_status("temperature", 38.5) == VitalStatus.FEVER

    def test_spo2(self):
        assert vital_status("spo2", 94) == VitalStatus.LOW
        assert vital_status("spo2", 98) == VitalStatus.NORMAL

    def test_unknown_type(self):
        assert vital_status("blood_pressure", 120) is None


class TestSleep:
    @pytest.mark.parametrize(
        "hours, band",
        [
            (7, SleepBand.IDEAL),
            (9, SleepBand.IDEAL),
            (6, SleepBand.SLIGHTLY_SHORT),
            (6.9, SleepBand.SLIGHTLY_SHORT),
            (5.9, SleepBand.DEPRIVED),
            (0, SleepBand.DEPRIVED),
            (9.1, SleepBand.TOO_MUCH),
        ],
    )
    def test_advice_bands(self, hours, band):
        advice = sleep_advice(hours)
        assert advice.band == band
        assert advice.message

    def test_duration_wraps_midnight(self):
        assert sleep_duration_hours(23, 0, 7, 0) == 8.0
        assert sleep_duration_hours(22, 30, 6, 15) == 7.75
        assert sleep_duration_hours(13, 0, 14, 30) == 1.5
        assert sleep_duration_hours(22, 0, 22, 0) == 24.0

    def test_quality_rating(self):
        assert sleep_quality_rating(None) is None
        assert sleep_quality_rating(0) is None
        assert sleep_quality_rating(8) == SleepRating.GOOD
        assert sleep_quality_rating(7) == SleepRating.FAIR
        assert sleep_quality_rating(5.5) == SleepRating.AVERAGE
        assert sleep_quality_rating(4) == SleepRating.POOR
