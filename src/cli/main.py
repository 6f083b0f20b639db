"""CLI `psu` (Typer).

Capa fina sobre el Core: parsea argumentos, abre el cliente de Portainer,
delega la resolución de nombres/controles de acceso y presenta el resultado.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import typer
from jinja2 import TemplateError
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.portainer_client import PortainerApiClient
from cli import doctor
from cli.ui_components import (
    build_access_control_panel,
    build_endpoints_table,
    build_stacks_table,
    render_format,
)
from core.config import AppSettings
from core.domain.models import (
    DockerResourceType,
    Endpoint,
    EndpointGroup,
    ResourceControl,
    Stack,
    User,
)
from core.errors import EndpointNotFoundError, PsuError
from core.interfaces.portainer import PortainerClient
from core.services.access_control import (
    get_docker_resource_access_control,
    get_stack_access_control,
)
from core.services.format_help import get_format_help
from core.services.resolvers import (
    get_default_endpoint,
    get_endpoint_by_name,
    get_endpoint_from_list_by_id,
    get_endpoint_from_list_by_name,
    get_endpoint_group_by_name,
    get_user_by_name,
    resolve_stack,
)

app = typer.Typer(
    name="psu",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode=None,
    help="Portainer stack utils: resolve endpoints, stacks, users and access controls.",
)
endpoint_app = typer.Typer(no_args_is_help=True, help="Inspect endpoints.")
endpoint_group_app = typer.Typer(no_args_is_help=True, help="Inspect endpoint groups.")
stack_app = typer.Typer(no_args_is_help=True, help="Inspect stacks.")
user_app = typer.Typer(no_args_is_help=True, help="Inspect users.")
access_app = typer.Typer(no_args_is_help=True, help="Show Portainer access controls.")

app.add_typer(endpoint_app, name="endpoint")
app.add_typer(endpoint_group_app, name="endpoint-group")
app.add_typer(stack_app, name="stack")
app.add_typer(user_app, name="user")
app.add_typer(access_app, name="access")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

_ENDPOINT_OPTION_HELP = "Endpoint name (defaults to the only available endpoint)."


def open_client() -> PortainerApiClient:
    return PortainerApiClient(AppSettings())


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except PsuError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        if exc.hint:
            _err_console.print(f"[dim]{exc.hint}[/dim]")
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        _err_console.print(f"[red]HTTP error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        _err_console.print(f"[red]Unexpected Portainer response:[/red] {exc.title}")
        _err_console.print(str(exc), markup=False, highlight=False)
        raise typer.Exit(code=1) from exc


def _print_item(item: BaseModel, template: str | None) -> None:
    if template:
        try:
            rendered = render_format(template, item)
        except TemplateError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc
        _console.print(rendered, markup=False, highlight=False)
    else:
        _console.print_json(item.model_dump_json(by_alias=True))


def _resolve_endpoint(client: PortainerClient, name: str | None) -> Endpoint:
    if name:
        return get_endpoint_by_name(client, name)
    return get_default_endpoint(client)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    try:
        level = "DEBUG" if debug else AppSettings().log_level
    except ValidationError as exc:
        _err_console.print("[red]Invalid configuration:[/red]")
        _err_console.print(str(exc), markup=False, highlight=False)
        raise typer.Exit(code=1) from exc
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
    )


# --- Endpoints ---------------------------------------------------------------

@endpoint_app.command("ls")
def endpoint_ls(
    template: str | None = typer.Option(None, "--format", help=get_format_help(Endpoint)),
) -> None:
    """List endpoints."""

    with _handle_errors(), open_client() as client:
        endpoints = client.endpoint_list()

    if template:
        for endpoint in endpoints:
            _print_item(endpoint, template)
        return
    _console.print(build_endpoints_table(endpoints))


@endpoint_app.command("inspect")
def endpoint_inspect(
    name: str = typer.Argument(..., help="Endpoint name."),
    template: str | None = typer.Option(None, "--format", help=get_format_help(Endpoint)),
) -> None:
    """Show an endpoint by name."""

    with _handle_errors(), open_client() as client:
        endpoint = get_endpoint_by_name(client, name)
    _print_item(endpoint, template)


# --- Endpoint groups ---------------------------------------------------------

@endpoint_group_app.command("inspect")
def endpoint_group_inspect(
    name: str = typer.Argument(..., help="Endpoint group name."),
    template: str | None = typer.Option(None, "--format", help=get_format_help(EndpointGroup)),
) -> None:
    """Show an endpoint group by name."""

    with _handle_errors(), open_client() as client:
        group = get_endpoint_group_by_name(client, name)
    _print_item(group, template)


# --- Stacks ------------------------------------------------------------------

@stack_app.command("ls")
def stack_ls(
    endpoint_name: str | None = typer.Option(None, "--endpoint", help="Only stacks of this endpoint."),
    template: str | None = typer.Option(None, "--format", help=get_format_help(Stack)),
) -> None:
    """List stacks."""

    with _handle_errors(), open_client() as client:
        endpoints = client.endpoint_list()
        endpoint_id = 0
        if endpoint_name:
            endpoint_id = get_endpoint_from_list_by_name(endpoints, endpoint_name).id
        stacks = client.stack_list(endpoint_id=endpoint_id)

    if template:
        for stack in stacks:
            _print_item(stack, template)
        return

    rows: list[tuple[Stack, str]] = []
    for stack in stacks:
        try:
            owner = get_endpoint_from_list_by_id(endpoints, stack.endpoint_id).name
        except EndpointNotFoundError:
            owner = "-"
        rows.append((stack, owner))
    _console.print(build_stacks_table(rows))


@stack_app.command("inspect")
def stack_inspect(
    name: str = typer.Argument(..., help="Stack name."),
    endpoint_name: str | None = typer.Option(None, "--endpoint", help=_ENDPOINT_OPTION_HELP),
    template: str | None = typer.Option(None, "--format", help=get_format_help(Stack)),
) -> None:
    """Show a stack by name."""

    with _handle_errors(), open_client() as client:
        endpoint = _resolve_endpoint(client, endpoint_name)
        stack = resolve_stack(client, endpoint.id, name)
    _print_item(stack, template)


# --- Users -------------------------------------------------------------------

@user_app.command("inspect")
def user_inspect(
    name: str = typer.Argument(..., help="Username."),
    template: str | None = typer.Option(None, "--format", help=get_format_help(User)),
) -> None:
    """Show a user by username."""

    with _handle_errors(), open_client() as client:
        user = get_user_by_name(client, name)
    _print_item(user, template)


# --- Access control ----------------------------------------------------------

def _print_access_control(resource_control: ResourceControl, template: str | None, *, title: str) -> None:
    if template:
        _print_item(resource_control, template)
    else:
        _console.print(build_access_control_panel(resource_control, title=title))


@access_app.command("docker")
def access_docker(
    resource_type: DockerResourceType = typer.Argument(..., help="Docker resource type."),
    resource_id: str = typer.Argument(..., help="Docker resource id."),
    endpoint_name: str | None = typer.Option(None, "--endpoint", help=_ENDPOINT_OPTION_HELP),
    template: str | None = typer.Option(None, "--format", help=get_format_help(ResourceControl)),
) -> None:
    """Show the access control of a Docker resource."""

    with _handle_errors(), open_client() as client:
        endpoint = _resolve_endpoint(client, endpoint_name)
        resource_control = get_docker_resource_access_control(client, endpoint.id, resource_id, resource_type)
    _print_access_control(resource_control, template, title=f"{resource_type.value} {resource_id}")


@access_app.command("stack")
def access_stack(
    name: str = typer.Argument(..., help="Stack name."),
    endpoint_name: str | None = typer.Option(None, "--endpoint", help=_ENDPOINT_OPTION_HELP),
    template: str | None = typer.Option(None, "--format", help=get_format_help(ResourceControl)),
) -> None:
    """Show the access control of a stack."""

    with _handle_errors(), open_client() as client:
        endpoint = _resolve_endpoint(client, endpoint_name)
        resource_control = get_stack_access_control(client, endpoint.id, name)
    _print_access_control(resource_control, template, title=f"stack {name}")


def run() -> None:
    app()
