"""Configuration management command."""

from typing import Any, Dict, Tuple

import click
from rich.console import Console
from rich.table import Table

from ...core.config import ClientConfig
from ...exceptions import InvalidCommandError
from ..context import get_config_manager, load_config
from ..error_handler import handle_cli_errors

console = Console()


@click.command()
@click.option("--show", is_flag=True, help="Show current configuration")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Set a configuration value (repeatable)",
)
@click.option("--reset", is_flag=True, help="Reset configuration to defaults")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_cli_errors
def config(
    ctx: click.Context,
    show: bool,
    assignments: Tuple[str, ...],
    reset: bool,
    yes: bool,
) -> None:
    """Manage configuration.

    \b
    Examples:
        studdybuddy config --show
        studdybuddy config --set api.base_url=https://studdybuddy.example.com
        studdybuddy config --set api.timeout=10 --set logging.level=DEBUG
        studdybuddy config --reset
    """
    config_manager = get_config_manager(ctx)

    if reset:
        if yes or click.confirm("Are you sure you want to reset all configuration?"):
            config_manager.reset_config()
            console.print("[green]✓ Configuration reset to defaults[/green]")
        return

    if assignments:
        for assignment in assignments:
            section, key, value = _parse_assignment(assignment)
            config_manager.set_value(section, key, value)
            console.print(f"[green]✓ {section}.{key} = {value}[/green]")
        console.print(f"[dim]Saved to {config_manager.config_file}[/dim]")
        return

    show_configuration(load_config(ctx), config_manager.config_file)


def _parse_assignment(assignment: str) -> Tuple[str, str, str]:
    target, sep, value = assignment.partition("=")
    section, dot, key = target.strip().partition(".")
    if not sep or not dot or not section or not key:
        raise InvalidCommandError("config", f"--set expects SECTION.KEY=VALUE, got '{assignment}'")
    return section, key, value.strip()


def show_configuration(config: ClientConfig, config_file) -> None:
    """Display current configuration."""
    table = Table(title="StuddyBuddy Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for section, values in config.model_dump(mode="json").items():
        for key, value in _flatten(values).items():
            table.add_row(f"{section}.{key}", str(value))

    console.print(table)
    status = "exists" if config_file.exists() else "defaults"
    console.print(f"[dim]Config file: {config_file} ({status})[/dim]")


def _flatten(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: ", ".join(v) if isinstance(v, list) else v for key, v in values.items()}
