"""StuddyBuddy CLI main entry point."""

from pathlib import Path
from typing import Optional

import click

from studdybuddy.core.config import ConfigManager

from . import __version__
from .commands.auth import login, logout, status
from .commands.config import config
from .commands.request import request


@click.group()
@click.version_option(version=__version__, prog_name="studdybuddy")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="STUDDYBUDDY_CONFIG",
    help="Configuration file (default: ~/.config/studdybuddy/config.toml)",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], verbose: int) -> None:
    """StuddyBuddy API client.

    \b
    Quick start:
        studdybuddy config --set api.base_url=https://studdybuddy.example.com
        studdybuddy login --email you@example.com
        studdybuddy request GET /api/projects
    """
    ctx.ensure_object(dict)
    ctx.obj["config_manager"] = ConfigManager(config_file)
    ctx.obj["verbose"] = verbose


cli.add_command(login)
cli.add_command(logout)
cli.add_command(status)
cli.add_command(request)
cli.add_command(config)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
