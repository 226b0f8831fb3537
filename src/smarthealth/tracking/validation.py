"""Form input checks run before any request is sent.

Each helper accepts the raw form value (string or number) and returns the
parsed value, raising :class:`ValidationError` with a user-facing message.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from smarthealth.core.exceptions import ValidationError


def require_text(value: Any, message: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(message)
    return text


def parse_int_in_range(value: Any, low: int, high: int, message: str) -> int:
    """Parse an integer in ``[low, high]``; strings like "250" are accepted."""
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(message) from None
    if number < low or number > high:
        raise ValidationError(message)
    return number


def parse_positive_number(value: Any, message: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(message) from None
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(message)
    return number


def require_choice(value: Any, choices: Iterable[str], message: str) -> str:
    allowed = {str(c) for c in choices}
    if str(value) not in allowed:
        raise ValidationError(message)
    return str(value)
