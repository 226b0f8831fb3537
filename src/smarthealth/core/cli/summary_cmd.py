"""smarthealth summary: today's health snapshot."""

from __future__ import annotations

from datetime import date

import click


def _fmt(value, unit: str = "") -> str:
    if value in (None, 0, 0.0):
        return "--"
    return f"{value}{unit}"


@click.command()
@click.pass_context
def summary(ctx: click.Context) -> None:
    """Show today's summary."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.dashboard import load_summary

    services = services_from_context(ctx)
    s = run(load_summary(services.api, date.today(), services.config))

    name = s.profile.full_name or "there"
    click.secho(f"Hello, {name}!", bold=True)
    click.echo(f"BMI:        {_fmt(s.bmi)} ({s.bmi_category or '--'})")
    click.echo(f"Water:      {s.water_ml} / {s.water_goal_ml} ml ({s.water_progress:.0f}%)")
    click.echo(f"Exercise:   {s.exercise_minutes_today} min today, streak {s.exercise_streak} days")
    click.echo(f"Sleep:      last night {_fmt(s.sleep_last_night, 'h')}, average {_fmt(s.sleep_average, 'h')}")
    click.echo(f"Nutrition:  {s.calories} / {s.calorie_goal} kcal ({s.nutrition_progress:.0f}%)")
    for vital_type, reading in s.vitals.items():
        click.echo(f"{vital_type + ':':<12}{reading.value:g}" if reading else f"{vital_type + ':':<12}--")
    click.echo(f"Reminders:  {s.reminders_done} / {s.reminders_total} done")
    if s.insights:
        click.secho("Today's tips:", bold=True)
        for tip in s.insights:
            click.echo(f"  - {tip}")
