"""Progress ratios for goals, daily targets, reminders, and achievements."""

from __future__ import annotations

from typing import Any


def progress_percent(value: float | None, target: float | None) -> float:
    """``value / target`` as a percentage capped at 100; 0 when target is 0 or missing."""
    if not target or target <= 0:
        return 0.0
    return min((value or 0) / target * 100, 100.0)


def goal_progress_percent(current_value: float | None, target_value: float | None) -> float:
    """Goal completion percentage; never divides by zero."""
    return progress_percent(current_value, target_value)


def goal_status_for(current_value: float, target_value: float) -> str:
    """``completed`` once the current value reaches the target, else ``active``."""
    return "completed" if current_value >= target_value else "active"


def compliance_ratio(done: int, total: int) -> float:
    """Fraction of scheduled reminders marked done, 0 when none were scheduled."""
    if total <= 0:
        return 0.0
    return done / total


def is_achievement_unlocked(achievement: Any) -> bool:
    """Unlocked by the server flag, or by reaching 100% progress."""
    if isinstance(achievement, dict):
        return bool(achievement.get("is_unlocked")) or (achievement.get("progress") or 0) >= 100
    return bool(achievement.is_unlocked) or (achievement.progress or 0) >= 100
