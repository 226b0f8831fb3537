"""smarthealth chat: talk to the AI health assistant in the terminal."""

from __future__ import annotations

import click


async def _ask(session, message: str) -> str:
    reply = await session.send(message)
    return reply.text if reply else ""


@click.command()
@click.option("--message", "-m", default=None, help="Send one message and exit.")
@click.pass_context
def chat(ctx: click.Context, message: str | None) -> None:
    """Chat with the health assistant. Empty input or 'quit' exits."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.dashboard import ChatSession

    session = ChatSession(services_from_context(ctx).api)

    if message:
        click.echo(run(_ask(session, message)))
        return

    click.echo(session.messages[0].text)
    run(session.load_suggestions())
    click.echo("Try asking:")
    for suggestion in session.suggestions:
        click.echo(f"  - {suggestion}")

    while True:
        text = click.prompt("you", default="", show_default=False).strip()
        if not text or text.lower() in ("quit", "exit"):
            break
        click.echo(f"assistant: {run(_ask(session, text))}")
