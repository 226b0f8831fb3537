"""smarthealth profile: first-run profile setup and body measurements."""

from __future__ import annotations

import click


@click.group()
def profile() -> None:
    """Manage your profile and BMI."""


@profile.command("setup")
@click.option("--name", "full_name", prompt="Full name", help="Your full name (required).")
@click.option("--age", default=None, help="Age in years.")
@click.option("--height", "height_cm", default=None, help="Height in cm.")
@click.option("--weight", "weight_kg", default=None, help="Weight in kg.")
@click.option("--birthdate", default=None, help="Birthdate as YYYY-MM-DD.")
@click.pass_context
def setup(
    ctx: click.Context,
    full_name: str,
    age: str | None,
    height_cm: str | None,
    weight_kg: str | None,
    birthdate: str | None,
) -> None:
    """Create or update your profile."""
    from smarthealth.core.cli.auth_cmd import NEXT_STEP_HINTS
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.dashboard import setup_profile

    services = services_from_context(ctx)
    step = run(
        setup_profile(
            services.api,
            services.auth,
            services.onboarding,
            full_name,
            age=age,
            height_cm=height_cm,
            weight_kg=weight_kg,
            birthdate=birthdate,
        )
    )
    click.echo(f"Profile saved. {NEXT_STEP_HINTS.get(step, '')}".rstrip())


@profile.command("bmi")
@click.option("--height", "height_cm", default=None, help="Record a new height in cm.")
@click.option("--weight", "weight_kg", default=None, help="Record a new weight in kg.")
@click.pass_context
def bmi(ctx: click.Context, height_cm: str | None, weight_kg: str | None) -> None:
    """Show your BMI, or record a new measurement with --height and --weight."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.tracking import ClickPrompter, HealthStatTracker

    tracker = HealthStatTracker(services_from_context(ctx).api, ClickPrompter())
    if height_cm is not None or weight_kg is not None:
        if run(tracker.record(height_cm, weight_kg)) is None:
            ctx.exit(1)
    else:
        run(tracker.load())

    if tracker.bmi is None:
        click.echo("No measurements yet.")
        return
    click.echo(f"BMI: {tracker.bmi:g} ({tracker.category})")
    recent = tracker.recent_bmi()
    if len(recent) > 1:
        click.echo("Recent: " + ", ".join(f"{v:g}" for v in recent))
