"""Optimistic list tracking.

A tracker holds the screen-scoped copy of one remote list, newest first,
plus any aggregates derived from it.  Mutations follow one state machine::

    IDLE -> SUBMITTING -> COMMITTED   (server ack; local copy patched)
                       -> FAILED      (alert shown; local copy untouched)

Input is validated before the request; invalid input alerts and stays IDLE.
Deletes ask for confirmation first and only touch local state after the
server acknowledges.  There is no offline queue and no retry: a failed
mutation is dropped and reported.
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

from loguru import logger

from smarthealth.core.exceptions import APIError, ValidationError

from .prompts import Prompter, RecordingPrompter

T = TypeVar("T")

Clock = Callable[[], datetime]


class MutationState(StrEnum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    COMMITTED = "committed"
    FAILED = "failed"


def local_id() -> str:
    """Placeholder id for an item the server acknowledged without echoing one."""
    return f"local-{uuid.uuid4().hex[:12]}"


class TrackedList(Generic[T]):
    """Base class for the per-list trackers."""

    error_title = "Error"
    invalid_title = "Invalid input"

    def __init__(self, api, prompter: Prompter | None = None, clock: Clock = datetime.now):
        self.api = api
        self.prompter = prompter or RecordingPrompter()
        self.clock = clock
        self.items: list[T] = []
        self.state = MutationState.IDLE
        self.last_error: str | None = None

    @property
    def busy(self) -> bool:
        """True while a request is in flight; submit controls should be disabled."""
        return self.state == MutationState.SUBMITTING

    def today(self) -> date:
        return self.clock().date()

    def find(self, item_id: Any) -> T | None:
        for item in self.items:
            if getattr(item, "id", None) == item_id:
                return item
        return None

    def _prepend(self, item: T) -> None:
        self.items.insert(0, item)

    def _reject(self, error: ValidationError) -> None:
        """Report invalid input; nothing is sent."""
        logger.debug(f"{type(self).__name__}: rejected input: {error}")
        self.prompter.alert(self.invalid_title, str(error))
        return None

    async def _run(
        self,
        request: Callable[[], Awaitable[Any]],
        failure_message: str,
        *,
        alert: bool = True,
    ) -> tuple[bool, Any]:
        """Drive one mutation through SUBMITTING to COMMITTED or FAILED.

        Returns ``(ok, server_payload)``.  A call made while another mutation
        is in flight is refused without sending anything.
        """
        if self.busy:
            logger.debug(f"{type(self).__name__}: mutation already in flight; ignoring")
            return False, None

        self.state = MutationState.SUBMITTING
        try:
            result = await request()
        except APIError as e:
            self.state = MutationState.FAILED
            self.last_error = e.message
            logger.warning(f"{type(self).__name__}: mutation failed: {e.message}")
            if alert:
                self.prompter.alert(self.error_title, failure_message)
            return False, None

        self.state = MutationState.COMMITTED
        self.last_error = None
        return True, result if result is not None else {}

    async def _submit(
        self,
        request: Callable[[], Awaitable[Any]],
        build_item: Callable[[dict[str, Any]], T],
        failure_message: str,
    ) -> T | None:
        """Send a create request and prepend the acknowledged item.

        ``build_item`` receives the server echo (``{}`` when the server sent
        nothing useful) and fills any missing fields from the form input.
        """
        ok, result = await self._run(request, failure_message)
        if not ok:
            return None
        item = build_item(payload_dict(result))
        self._prepend(item)
        return item

    async def _delete(
        self,
        item_id: Any,
        confirm_message: str,
        request: Callable[[Any], Awaitable[Any]],
        failure_message: str = "Could not delete. Please try again.",
    ) -> T | None:
        """Confirm, delete remotely, then drop the item locally.

        Returns the removed item so subclasses can adjust their aggregates,
        or None if it was unknown, declined, or the request failed.
        """
        item = self.find(item_id)
        if item is None:
            return None
        if not self.prompter.confirm(confirm_message):
            return None

        ok, _ = await self._run(lambda: request(item_id), failure_message)
        if not ok:
            return None
        self.items = [i for i in self.items if getattr(i, "id", None) != item_id]
        logger.debug(f"{type(self).__name__}: deleted {item_id}")
        return item


def payload_dict(result: Any) -> dict[str, Any]:
    return result if isinstance(result, dict) else {}
