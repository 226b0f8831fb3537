"""User prompts: alerts and delete confirmations.

Trackers never print or block on input directly; they go through a
``Prompter`` so the terminal front end and tests can supply their own.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import click


@runtime_checkable
class Prompter(Protocol):
    def alert(self, title: str, message: str) -> None:
        """Show a one-off message to the user."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True means go ahead."""
        ...


class ClickPrompter:
    """Terminal prompter backed by click."""

    def alert(self, title: str, message: str) -> None:
        click.secho(f"{title}: {message}", fg="yellow", err=True)

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=False)


class RecordingPrompter:
    """Scripted prompter that records every alert.

    ``answers`` are consumed in order by :meth:`confirm`; once exhausted,
    ``default_answer`` is returned.
    """

    def __init__(self, answers: list[bool] | None = None, default_answer: bool = True):
        self.answers = list(answers or [])
        self.default_answer = default_answer
        self.alerts: list[tuple[str, str]] = []
        self.confirmations: list[str] = []

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        if self.answers:
            return self.answers.pop(0)
        return self.default_answer
