"""Symptom checker: pick a body part, pick symptoms, get advice.

The advice comes from the backend; nothing here is a diagnosis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from smarthealth.core.exceptions import ValidationError

DEFAULT_ADVICE = "Your symptoms have been recorded."
DEFAULT_ACTIONS = ("Rest", "Monitor your symptoms", "See a doctor if they get worse")
DISCLAIMER = "This is a suggestion for reference only and does not replace a doctor's diagnosis."
RESULT_TITLE = "Analysis result"


@dataclass
class Symptom:
    id: Any
    name: str


@dataclass
class BodyPart:
    id: str
    name: str
    symptoms: list[Symptom] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BodyPart:
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            symptoms=[
                Symptom(id=s.get("id"), name=s.get("name") or "")
                for s in data.get("symptoms") or []
                if isinstance(s, dict)
            ],
        )


DEFAULT_BODY_PARTS = (
    BodyPart("head", "Head", [Symptom(1, "Headache")]),
    BodyPart("chest", "Chest", [Symptom(2, "Chest pain")]),
    BodyPart("stomach", "Stomach", [Symptom(3, "Stomach ache")]),
    BodyPart("general", "Whole body", [Symptom(4, "Fever")]),
)


@dataclass
class SymptomResult:
    severity: str = "low"
    title: str = RESULT_TITLE
    advice: str = DEFAULT_ADVICE
    actions: list[str] = field(default_factory=lambda: list(DEFAULT_ACTIONS))
    conditions: list[Any] = field(default_factory=list)
    disclaimer: str = DISCLAIMER

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SymptomResult:
        actions = data.get("recommendations") or data.get("actions")
        return cls(
            severity=data.get("severity") or "low",
            title=data.get("title") or RESULT_TITLE,
            advice=data.get("advice") or data.get("message") or DEFAULT_ADVICE,
            actions=list(actions) if actions else list(DEFAULT_ACTIONS),
            conditions=list(data.get("conditions") or []),
            disclaimer=data.get("disclaimer") or DISCLAIMER,
        )


class SymptomChecker:
    def __init__(self, api):
        self.api = api
        self.body_parts: list[BodyPart] = list(DEFAULT_BODY_PARTS)

    async def load_body_parts(self) -> list[BodyPart]:
        parts = await self.api.get_body_parts()
        parts = [BodyPart.from_dict(p) for p in parts if isinstance(p, dict)]
        self.body_parts = parts or list(DEFAULT_BODY_PARTS)
        return self.body_parts

    async def check(self, symptoms: list[str], duration_days: int = 1, severity: str = "moderate") -> SymptomResult:
        """Ask the backend about ``symptoms``; raises ValidationError if none are given."""
        names = [s.strip() for s in symptoms if s and s.strip()]
        if not names:
            raise ValidationError("Please select at least one symptom")
        result = await self.api.check_symptoms(names, duration_days, severity)
        return SymptomResult.from_dict(result if isinstance(result, dict) else {})
