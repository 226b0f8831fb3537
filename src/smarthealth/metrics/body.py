"""Body composition: BMI value and WHO category."""

from enum import StrEnum


class BMICategory(StrEnum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """BMI = kg / m², rounded to one decimal. Returns 0 for a non-positive height."""
    if not height_cm or height_cm <= 0 or not weight_kg or weight_kg <= 0:
        return 0.0
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: float | None) -> BMICategory | None:
    """Classify a BMI value; bands are inclusive below and exclusive above.

    Returns None when there is no reading (None or 0).
    """
    if not bmi:
        return None
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE
