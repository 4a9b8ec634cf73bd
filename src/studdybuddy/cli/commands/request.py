"""Send an arbitrary request through the authenticated client."""

import json
from typing import Any, Dict, Optional, Tuple

import click
from rich.console import Console

from ...auth import AuthService
from ...exceptions import InvalidCommandError
from ...infrastructure.http import LoginRedirect
from ...logging import get_logger
from ..context import get_factory
from ..error_handler import handle_cli_errors

console = Console()
logger = get_logger(__name__)

HTTP_METHODS = ["GET", "POST", "PUT", "DELETE"]


class SessionExpiredPrompt:
    """Re-login action for the CLI: drop the stale session and say how to log in."""

    def __init__(self, auth: AuthService, base_url: str):
        self.auth = auth
        self.base_url = base_url

    def __call__(self, login_path: str) -> None:
        self.auth.logout()
        console.print(
            "[yellow]Your session has expired. "
            "Run: studdybuddy login --email <email>[/yellow]"
        )
        console.print(f"[dim]Web login: {self.base_url}{login_path}[/dim]")


@click.command("request")
@click.argument("method", type=click.Choice(HTTP_METHODS, case_sensitive=False))
@click.argument("path")
@click.option("--json", "json_body", help="JSON request body")
@click.option(
    "--param",
    "params",
    multiple=True,
    metavar="KEY=VALUE",
    help="Query parameter (repeatable)",
)
@click.pass_context
@handle_cli_errors
def request(
    ctx: click.Context,
    method: str,
    path: str,
    json_body: Optional[str],
    params: Tuple[str, ...],
) -> None:
    """Call the StuddyBuddy API with the stored session.

    An expired access token is refreshed once automatically.

    \b
    Examples:
        studdybuddy request GET /api/projects
        studdybuddy request GET /api/files --param projectId=42
        studdybuddy request POST /api/boards --json '{"name": "Exams"}'
    """
    body = _parse_json(json_body)
    query = _parse_params(params)

    factory = get_factory(ctx)
    auth = factory.create_auth_service()
    relogin = LoginRedirect(
        factory.config.api.login_path,
        navigate=SessionExpiredPrompt(auth, factory.config.api.base_url),
    )

    try:
        with factory.create_client(auth, on_unrecoverable_auth_failure=relogin) as client:
            response = client.request(method, path, params=query or None, json=body)
    finally:
        auth.close()

    console.print(f"[dim]HTTP {response.status_code}[/dim]")
    _print_body(response)


def _parse_json(json_body: Optional[str]) -> Any:
    if json_body is None:
        return None
    try:
        return json.loads(json_body)
    except json.JSONDecodeError as e:
        raise InvalidCommandError("request", f"--json is not valid JSON ({e.msg})") from e


def _parse_params(params: Tuple[str, ...]) -> Dict[str, str]:
    query = {}
    for item in params:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise InvalidCommandError("request", f"--param expects KEY=VALUE, got '{item}'")
        query[key] = value
    return query


def _print_body(response) -> None:
    if not response.content:
        return
    try:
        console.print_json(data=response.json())
    except ValueError:
        console.print(response.text, highlight=False, markup=False)
