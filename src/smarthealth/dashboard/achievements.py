"""Achievement badges and the user's level."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from smarthealth.metrics import is_achievement_unlocked
from smarthealth.models import Achievement

ALL_CATEGORIES = "all"
CATEGORIES = (ALL_CATEGORIES, "water", "exercise", "sleep", "nutrition", "goals", "general")


@dataclass
class AchievementBoard:
    achievements: list[Achievement] = field(default_factory=list)
    level: int = 1
    points: int = 0

    @property
    def unlocked_count(self) -> int:
        return sum(1 for a in self.achievements if is_achievement_unlocked(a))

    @property
    def total(self) -> int:
        return len(self.achievements)

    def by_category(self, category: str = ALL_CATEGORIES) -> list[Achievement]:
        if category == ALL_CATEGORIES:
            return list(self.achievements)
        return [a for a in self.achievements if a.category == category]


async def load_achievements(api) -> AchievementBoard:
    achievements, level = await asyncio.gather(api.get_achievements(), api.get_user_level())
    return AchievementBoard(
        achievements=[Achievement.from_dict(a) for a in achievements if isinstance(a, dict)],
        level=int(level.get("level") or 1),
        points=int(level.get("points") or 0),
    )
