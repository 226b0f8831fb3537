"""smarthealth water: log and review water intake."""

from __future__ import annotations

import click


@click.group()
def water() -> None:
    """Track water intake."""


@water.command("show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """Show today's entries and the weekly totals."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.metrics import format_day_label
    from smarthealth.tracking import WaterTracker

    tracker = WaterTracker(services_from_context(ctx).api)
    run(tracker.load())

    click.echo(f"Today: {tracker.total_ml} / {tracker.goal_ml} ml ({tracker.progress:.0f}%)")
    for entry in tracker.items:
        when = entry.logged_at.strftime("%H:%M") if entry.logged_at else "--:--"
        click.echo(f"  {when}  +{entry.amount_ml}ml  [{entry.id}]")
    if tracker.weekly:
        click.echo("This week:")
        for point in tracker.weekly:
            label = format_day_label(point.day) if point.day else "?"
            click.echo(f"  {label}  {point.total_ml} ml")


@water.command("add")
@click.argument("amount_ml")
@click.pass_context
def add(ctx: click.Context, amount_ml: str) -> None:
    """Log AMOUNT_ML millilitres of water."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.tracking import ClickPrompter, WaterTracker

    tracker = WaterTracker(services_from_context(ctx).api, ClickPrompter())
    entry = run(tracker.add(amount_ml))
    if entry is None:
        ctx.exit(1)
    click.echo(f"Added {entry.amount_ml}ml.")


@water.command("delete")
@click.argument("entry_id")
@click.pass_context
def delete(ctx: click.Context, entry_id: str) -> None:
    """Delete today's entry ENTRY_ID."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.tracking import ClickPrompter, WaterTracker

    tracker = WaterTracker(services_from_context(ctx).api, ClickPrompter())
    run(tracker.load())
    target = next((e.id for e in tracker.items if str(e.id) == entry_id), None)
    if target is None:
        raise click.ClickException(f"No entry {entry_id} today")
    if run(tracker.delete(target)):
        click.echo(f"Deleted. Today: {tracker.total_ml} ml")
