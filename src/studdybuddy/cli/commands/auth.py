"""Session commands: login, logout and status."""

import click
from rich.console import Console
from rich.table import Table

from ...core.config import ClientConfig, SessionStoreType
from ...core.security import mask_token
from ...exceptions import NotLoggedInError
from ...logging import get_logger
from ..context import get_factory
from ..error_handler import handle_cli_errors

console = Console()
logger = get_logger(__name__)


@click.command()
@click.option("--email", required=True, help="Account email address")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    help="Account password (prompted when omitted)",
)
@click.pass_context
@handle_cli_errors
def login(ctx: click.Context, email: str, password: str) -> None:
    """Log in with email and password and store the session.

    \b
    Examples:
        studdybuddy login --email ada@example.com
    """
    factory = get_factory(ctx)
    auth = factory.create_auth_service()
    try:
        user = auth.login(email=email, password=password)
    finally:
        auth.close()

    console.print(f"[green]✓ Logged in as {user.name or user.email or email}[/green]")
    logger.info("User logged in", email=email)


@click.command()
@click.pass_context
@handle_cli_errors
def logout(ctx: click.Context) -> None:
    """Forget the stored session."""
    auth = get_factory(ctx).create_auth_service()
    if not auth.is_user_logged_in():
        console.print("[yellow]No active session[/yellow]")
        return
    auth.logout()
    console.print("[green]✓ Logged out[/green]")


@click.command()
@click.pass_context
@handle_cli_errors
def status(ctx: click.Context) -> None:
    """Show the logged-in user and (masked) tokens."""
    factory = get_factory(ctx)
    user = factory.create_auth_service().get_auth_user()
    if user is None:
        raise NotLoggedInError()

    table = Table(title="StuddyBuddy Session")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("User", str(user.name or "-"))
    table.add_row("Email", str(user.email or "-"))
    table.add_row("API", factory.config.api.base_url)
    table.add_row("Access token", mask_token(user.access_token))
    table.add_row("Refresh token", mask_token(user.refresh_token))
    table.add_row("Session store", _describe_store(factory.config))

    console.print(table)


def _describe_store(config: ClientConfig) -> str:
    if config.session.store == SessionStoreType.MEMORY:
        return SessionStoreType.MEMORY.value
    return str(config.session.file_path)
