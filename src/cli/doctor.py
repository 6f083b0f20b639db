"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from adapters.portainer_client import PortainerApiClient
from core.config import AppSettings, write_user_env_vars
from core.errors import PsuError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_status(settings: AppSettings) -> tuple[bool, str]:
    """`GET /api/status` does not require authentication."""

    try:
        with build_client(settings) as client:
            response = client.get("status")
        if not response.is_success:
            return False, f"HTTP {response.status_code}"
        payload = response.json()
        version = payload.get("Version", "?") if isinstance(payload, dict) else "?"
        return True, f"Portainer {version}"
    except (httpx.HTTPError, ValueError) as exc:
        return False, str(exc)


def _check_auth(settings: AppSettings) -> tuple[bool, str]:
    try:
        with PortainerApiClient(settings) as client:
            endpoints = client.endpoint_list()
        return True, f"{len(endpoints)} endpoint(s) visible"
    except (PsuError, httpx.HTTPError) as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="psu Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Portainer URL", "OK", settings.url)
    if settings.auth_token:
        table.add_row("Credentials", "OK", "Using PSU_AUTH_TOKEN")
    elif settings.user and settings.password:
        table.add_row("Credentials", "OK", f"User {settings.user}")
    else:
        table.add_row("Credentials", "MISSING", "Run `psu doctor setup`")
    if settings.insecure:
        table.add_row("TLS", "WARN", "Certificate verification disabled")

    ok_status, detail_status = _check_status(settings)
    table.add_row("HTTP connectivity", "OK" if ok_status else "FAIL", detail_status)

    ok_auth = False
    if ok_status:
        ok_auth, detail_auth = _check_auth(settings)
        table.add_row("API access", "OK" if ok_auth else "FAIL", detail_auth)

    _console.print(table)

    if not (ok_status and ok_auth):
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    url = typer.prompt("Portainer URL", default=settings.url, show_default=True).strip()
    user = typer.prompt("Username", default=settings.user or "admin", show_default=True).strip()
    password = typer.prompt("Password", hide_input=True, confirmation_prompt=False).strip()

    if not url or not user:
        raise typer.BadParameter("url and username are required")

    env_path = write_user_env_vars(
        {
            "PSU_URL": url,
            "PSU_USER": user,
            "PSU_PASSWORD": password,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
