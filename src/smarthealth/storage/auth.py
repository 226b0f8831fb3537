"""Session persistence: bearer token and the signed-in user object."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from .base import KeyValueStore

TOKEN_KEY = "@smart_health_token"
USER_KEY = "@smart_health_user"


class AuthStore:
    """Token and user blob kept under fixed keys until logout."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def save_token(self, token: str) -> None:
        await self.store.set_item(TOKEN_KEY, token)

    async def load_token(self) -> str | None:
        return await self.store.get_item(TOKEN_KEY)

    async def clear_token(self) -> None:
        await self.store.remove_item(TOKEN_KEY)

    async def save_user(self, user: dict[str, Any]) -> None:
        await self.store.set_item(USER_KEY, json.dumps(user))

    async def load_user(self) -> dict[str, Any] | None:
        """Return the stored user, or None if missing or not valid JSON."""
        raw = await self.store.get_item(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user blob is not valid JSON; ignoring it")
            return None
        return user if isinstance(user, dict) else None

    async def clear_user(self) -> None:
        await self.store.remove_item(USER_KEY)

    async def get_current_user_id(self) -> Any | None:
        user = await self.load_user()
        if user and user.get("id"):
            return user["id"]
        return None

    async def clear(self) -> None:
        """Forget the whole session (logout)."""
        await self.clear_token()
        await self.clear_user()
