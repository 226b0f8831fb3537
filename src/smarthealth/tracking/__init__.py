"""Screen-scoped trackers with optimistic, server-acknowledged mutations."""

from .base import MutationState, TrackedList
from .body import HealthStatTracker
from .exercise import ExerciseTracker
from .goals import GOAL_TYPES, PRESETS, GoalPreset, GoalTracker, GoalType
from .nutrition import NutritionTracker
from .prompts import ClickPrompter, Prompter, RecordingPrompter
from .reminders import ReminderTracker, format_days
from .sleep import SleepTracker
from .vitals import VitalsTracker
from .water import WaterTracker

__all__ = [
    "GOAL_TYPES",
    "PRESETS",
    "ClickPrompter",
    "ExerciseTracker",
    "GoalPreset",
    "GoalTracker",
    "GoalType",
    "HealthStatTracker",
    "MutationState",
    "NutritionTracker",
    "Prompter",
    "RecordingPrompter",
    "ReminderTracker",
    "SleepTracker",
    "TrackedList",
    "VitalsTracker",
    "WaterTracker",
    "format_days",
]
