"""AI health assistant conversation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from loguru import logger

DEFAULT_SUGGESTIONS = (
    "How can I sleep better?",
    "How much water should I drink every day?",
    "Suggest exercises to reduce belly fat",
    "A healthy breakfast menu",
    "Effective ways to reduce stress",
)
GREETING = (
    "Hello! I'm your AI health assistant. Ask me anything about health, "
    "nutrition, exercise, or sleep."
)


class Sender(StrEnum):
    USER = "user"
    AI = "ai"


@dataclass
class ChatMessage:
    sender: Sender
    text: str
    sent_at: datetime = field(default_factory=datetime.now)


def suggestion_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        return str(item.get("text") or item.get("question") or item)
    return str(item)


class ChatSession:
    """Message history for one assistant conversation, oldest first."""

    def __init__(self, api, clock: Callable[[], datetime] = datetime.now):
        self.api = api
        self.clock = clock
        self.messages: list[ChatMessage] = [ChatMessage(Sender.AI, GREETING, clock())]
        self.suggestions: list[str] = list(DEFAULT_SUGGESTIONS)
        self.typing = False

    async def load_suggestions(self) -> list[str]:
        """Replace the default suggestions when the server has some."""
        result = await self.api.get_ai_suggestions()
        if result:
            self.suggestions = [suggestion_text(s) for s in result]
        return self.suggestions

    async def send(self, text: str) -> ChatMessage | None:
        """Send ``text`` and append the reply; blank input is ignored."""
        text = (text or "").strip()
        if not text:
            return None
        self.messages.append(ChatMessage(Sender.USER, text, self.clock()))
        self.typing = True
        try:
            result = await self.api.send_ai_chat(text)
        finally:
            self.typing = False
        reply = ChatMessage(Sender.AI, result["reply"], self.clock())
        self.messages.append(reply)
        logger.debug(f"Chat reply received ({len(reply.text)} chars)")
        return reply
