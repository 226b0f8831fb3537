"""Screen loaders that compose several reads into one display state."""

from .achievements import AchievementBoard, load_achievements
from .chat import ChatMessage, ChatSession, Sender
from .cycle import CycleStatus, load_cycle, start_period
from .reports import Report, build_report, load_reports, month_key, week_start
from .session import NextStep, complete_notification_onboarding, login, logout, register, setup_profile
from .summary import Summary, load_summary
from .symptoms import BodyPart, SymptomChecker, SymptomResult

__all__ = [
    "AchievementBoard",
    "BodyPart",
    "ChatMessage",
    "ChatSession",
    "CycleStatus",
    "NextStep",
    "Report",
    "Sender",
    "Summary",
    "SymptomChecker",
    "SymptomResult",
    "build_report",
    "complete_notification_onboarding",
    "load_achievements",
    "load_cycle",
    "load_reports",
    "load_summary",
    "login",
    "logout",
    "month_key",
    "register",
    "setup_profile",
    "start_period",
    "week_start",
]
