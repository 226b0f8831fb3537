"""smarthealth login / logout."""

from __future__ import annotations

import click

NEXT_STEP_HINTS = {
    "profile_setup": "No profile yet. Run 'smarthealth profile setup' to create one.",
    "notification_onboarding": "Run 'smarthealth notifications' to finish setting up reminders.",
    "home": "You're all set.",
}


@click.command()
@click.option("--username", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.pass_context
def login(ctx: click.Context, username: str, password: str) -> None:
    """Sign in and store the session token."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.dashboard import login as do_login

    services = services_from_context(ctx)
    step = run(do_login(services.api, services.auth, services.onboarding, username, password))
    click.echo(f"Signed in as {username}. {NEXT_STEP_HINTS.get(step, '')}".rstrip())


@click.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Forget the stored session."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.dashboard import logout as do_logout

    services = services_from_context(ctx)
    run(do_logout(services.auth))
    click.echo("Signed out.")


@click.command()
@click.option("--disable", is_flag=True, help="Skip push reminders.")
@click.option("--push-token", default=None, help="Push token to register for reminders.")
@click.pass_context
def notifications(ctx: click.Context, disable: bool, push_token: str | None) -> None:
    """Finish first-run notification setup."""
    from smarthealth.core.cli.common import run, services_from_context
    from smarthealth.dashboard import complete_notification_onboarding

    services = services_from_context(ctx)
    registered = run(complete_notification_onboarding(services.api, services.onboarding, not disable, push_token))
    click.echo("Push reminders registered." if registered else "Notification setup finished.")
