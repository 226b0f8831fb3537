"""
Health record models.

Client-side copies of backend-owned records.  The backend's payload shapes
are not pinned down, so every ``from_dict`` tolerates missing keys and the
alternative field names older server builds return.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

# ── Enumerations ─────────────────────────────────────────────────────


class ReminderType(StrEnum):
    MEDICATION = "medication"
    WATER = "water"
    EXERCISE = "exercise"


class SleepQuality(StrEnum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class MealType(StrEnum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class GoalStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"


class VitalType(StrEnum):
    HEART_RATE = "heart_rate"
    BLOOD_PRESSURE = "blood_pressure"
    SPO2 = "spo2"
    TEMPERATURE = "temperature"


class FlowLevel(StrEnum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


# ── Parsing helpers ──────────────────────────────────────────────────


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed); None if unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value: Any) -> date | None:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def _num(value: Any, default: float = 0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any, default: int = 0) -> int:
    return int(round(_num(value, default)))


def _iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value else None


# ── Records ──────────────────────────────────────────────────────────


@dataclass
class Profile:
    """The signed-in user's profile."""

    id: Any = None
    full_name: str = ""
    age: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    birthdate: date | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Profile:
        data = data or {}
        return cls(
            id=data.get("user_id", data.get("id")),
            full_name=data.get("full_name") or "",
            age=data.get("age"),
            height_cm=data.get("height_cm"),
            weight_kg=data.get("weight_kg"),
            birthdate=parse_date(data.get("birthdate")),
        )


@dataclass
class HealthStat:
    """One height/weight/BMI measurement."""

    height: float | None = None
    weight: float | None = None
    bmi: float | None = None
    recorded_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthStat:
        bmi = data.get("bmi")
        return cls(
            height=data.get("height"),
            weight=data.get("weight"),
            bmi=float(bmi) if bmi not in (None, "") else None,
            recorded_at=parse_datetime(data.get("recorded_at")),
        )


@dataclass
class Reminder:
    """A scheduled medication / water / exercise reminder."""

    id: Any = None
    type: str = ReminderType.MEDICATION
    title: str = ""
    message: str = ""
    time_of_day: str = ""
    days_of_week: str = ""
    timezone: str = ""
    enabled: bool = True

    @property
    def days(self) -> list[str]:
        return [d.strip() for d in self.days_of_week.split(",") if d.strip()]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reminder:
        return cls(
            id=data.get("id"),
            type=data.get("type") or ReminderType.MEDICATION,
            title=data.get("title") or "",
            message=data.get("message") or "",
            time_of_day=data.get("time_of_day") or "",
            days_of_week=data.get("days_of_week") or "",
            timezone=data.get("timezone") or "",
            enabled=bool(data.get("enabled", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload.pop("id")
        return payload


@dataclass
class WaterIntakeEntry:
    id: Any
    amount_ml: int
    logged_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WaterIntakeEntry:
        return cls(
            id=data.get("id"),
            amount_ml=_int(data.get("amount_ml")),
            logged_at=parse_datetime(data.get("logged_at")),
        )


@dataclass
class Exercise:
    id: Any
    type: str
    duration_min: int
    calories: int = 0
    exercised_at: datetime | None = None
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Exercise:
        return cls(
            id=data.get("id"),
            type=data.get("type") or "other",
            duration_min=_int(data.get("duration_min")),
            calories=_int(data.get("calories")),
            exercised_at=parse_datetime(data.get("exercised_at")),
            notes=data.get("notes") or "",
        )


@dataclass
class SleepLog:
    id: Any
    sleep_time: datetime | None = None
    wake_time: datetime | None = None
    duration_hours: float = 0.0
    quality: str = SleepQuality.GOOD

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SleepLog:
        return cls(
            id=data.get("id"),
            sleep_time=parse_datetime(data.get("sleep_time")),
            wake_time=parse_datetime(data.get("wake_time")),
            duration_hours=_num(data.get("duration_hours")),
            quality=data.get("quality") or SleepQuality.GOOD,
        )


@dataclass
class MealLog:
    id: Any
    meal_type: str
    food_name: str = ""
    food_id: Any = None
    calories: int = 0
    logged_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MealLog:
        return cls(
            id=data.get("id"),
            meal_type=data.get("meal_type") or data.get("type") or MealType.SNACK,
            food_name=data.get("food_name") or data.get("name") or "",
            food_id=data.get("food_id"),
            calories=_int(data.get("calories")),
            logged_at=parse_datetime(data.get("logged_at")),
        )


@dataclass
class Goal:
    id: Any
    type: str
    target_value: float
    current_value: float = 0
    unit: str = ""
    description: str = ""
    status: str = GoalStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Goal:
        return cls(
            id=data.get("id"),
            type=data.get("type") or "",
            target_value=_num(data.get("target_value")),
            current_value=_num(data.get("current_value")),
            unit=data.get("unit") or "",
            description=data.get("description") or "",
            status=data.get("status") or GoalStatus.ACTIVE,
        )


@dataclass
class Vital:
    """A vital-sign reading.

    ``value2`` is the diastolic for blood pressure; ``context`` says when a
    blood-sugar sample was taken.
    """

    type: str
    value: float
    value2: float | None = None
    recorded_at: datetime | None = None
    context: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], vital_type: str | None = None) -> Vital:
        value = data.get("value", data.get("systolic"))
        value2 = data.get("value2", data.get("diastolic"))
        return cls(
            type=data.get("type") or vital_type or "",
            value=_num(value),
            value2=_num(value2) if value2 is not None else None,
            recorded_at=parse_datetime(data.get("recorded_at")),
            context=data.get("context"),
        )


@dataclass
class PeriodLog:
    start_date: date | None
    end_date: date | None = None
    cycle_length: int | None = None
    flow_level: str | None = None
    symptoms: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PeriodLog:
        symptoms = data.get("symptoms") or []
        if isinstance(symptoms, str):
            symptoms = [s.strip() for s in symptoms.split(",") if s.strip()]
        cycle_length = data.get("cycle_length")
        return cls(
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(data.get("end_date")),
            cycle_length=_int(cycle_length) if cycle_length else None,
            flow_level=data.get("flow_level"),
            symptoms=list(symptoms),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"start_date": _iso(self.start_date)}
        if self.end_date:
            payload["end_date"] = _iso(self.end_date)
        if self.flow_level:
            payload["flow_level"] = str(self.flow_level)
        if self.symptoms:
            payload["symptoms"] = ",".join(self.symptoms)
        return payload


@dataclass
class Achievement:
    """Server-computed gamification badge."""

    id: Any
    name: str = ""
    description: str = ""
    category: str = "general"
    progress: float = 0
    target_value: float | None = None
    is_unlocked: bool = False
    unlocked_at: datetime | None = None
    points: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Achievement:
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            description=data.get("description") or "",
            category=data.get("category") or "general",
            progress=_num(data.get("progress")),
            target_value=data.get("target_value"),
            is_unlocked=bool(data.get("is_unlocked")),
            unlocked_at=parse_datetime(data.get("unlocked_at")),
            points=_int(data.get("points")),
        )
