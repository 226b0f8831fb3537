"""Per-user flag recording that notification onboarding was completed."""

from __future__ import annotations

from typing import Any

from .base import KeyValueStore


def notif_key(user_id: Any) -> str:
    return f"@smart_health_notif_done_{user_id}"


class OnboardingStore:
    def __init__(self, store: KeyValueStore):
        self.store = store

    async def is_notif_onboarding_done(self, user_id: Any) -> bool:
        if not user_id:
            return False
        return await self.store.get_item(notif_key(user_id)) == "1"

    async def set_notif_onboarding_done(self, user_id: Any, done: bool) -> None:
        if not user_id:
            return
        if done:
            await self.store.set_item(notif_key(user_id), "1")
        else:
            await self.store.remove_item(notif_key(user_id))
