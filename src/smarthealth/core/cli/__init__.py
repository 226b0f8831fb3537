"""Smart Health CLI: sign in, set up a profile, check today's summary, log water, chat."""

import click

from smarthealth import __version__


@click.group()
@click.version_option(version=__version__, package_name="smarthealth")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: ~/.smarthealth/config.yaml).",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None) -> None:
    """Smart Health: your personal health tracker."""
    ctx.ensure_object(dict)["config_file"] = config_file


# Register subcommands (lazy imports keep startup fast)
from .auth_cmd import login, logout, notifications
from .chat_cmd import chat
from .goals_cmd import goals
from .profile_cmd import profile
from .summary_cmd import summary
from .water_cmd import water

main.add_command(login)
main.add_command(logout)
main.add_command(notifications)
main.add_command(profile)
main.add_command(summary)
main.add_command(water)
main.add_command(goals)
main.add_command(chat)
