"""smarthealth goals: review health goals."""

from __future__ import annotations

import click


@click.group()
def goals() -> None:
    """Track health goals."""


@goals.command("list")
@click.option("--completed", is_flag=True, help="Show completed goals instead of active ones.")
@click.pass_context
def list_goals(ctx: click.Context, completed: bool) -> None:
    """List goals with their progress."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.tracking import GoalTracker

    tracker = GoalTracker(services_from_context(ctx).api)
    run(tracker.load())
    selected = tracker.completed if completed else tracker.active
    if not selected:
        click.echo("No goals yet.")
        return
    for goal in selected:
        click.echo(
            f"[{goal.id}] {goal.description}: {goal.current_value:g} / {goal.target_value:g} {goal.unit}"
            f" ({tracker.progress(goal):.0f}%)"
        )


@goals.command("presets")
def presets() -> None:
    """Show the suggested goals."""
    from smarthealth.tracking import PRESETS

    for index, preset in enumerate(PRESETS, 1):
        click.echo(f"{index}. {preset.description}")
