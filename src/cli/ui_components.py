"""Componentes de UI para CLI (Rich + Jinja2).

Evita mezclar lógica de comandos con detalles visuales: tablas, paneles y el
render de plantillas `--format`.
"""

from __future__ import annotations

from collections.abc import Iterable

from jinja2 import Environment, StrictUndefined
from pydantic import BaseModel
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Endpoint, EndpointType, ResourceControl, Stack, StackType

_TEMPLATES = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=False)


def render_format(template: str, item: BaseModel) -> str:
    """Renderiza una plantilla `--format` con los campos del modelo."""

    return _TEMPLATES.from_string(template).render(**item.model_dump())


def _enum_label(enum_cls: type, value: int) -> str:
    try:
        return enum_cls(value).name.lower().replace("_", " ")
    except ValueError:
        return str(value)


def build_endpoints_table(endpoints: Iterable[Endpoint]) -> Table:
    table = Table(title="Endpoints")
    table.add_column("ID", style="cyan", justify="right", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Type", style="green")
    table.add_column("URL", style="magenta")
    table.add_column("Group", style="dim", justify="right")
    for endpoint in endpoints:
        table.add_row(
            str(endpoint.id),
            endpoint.name,
            _enum_label(EndpointType, endpoint.type),
            endpoint.url,
            str(endpoint.group_id),
        )
    return table


def build_stacks_table(rows: Iterable[tuple[Stack, str]]) -> Table:
    """Tabla de stacks; cada fila es `(stack, nombre del endpoint)`."""

    table = Table(title="Stacks")
    table.add_column("ID", style="cyan", justify="right", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Type", style="green")
    table.add_column("Endpoint", style="magenta")
    table.add_column("Swarm", style="dim")
    for stack, endpoint_name in rows:
        table.add_row(
            str(stack.id),
            stack.name,
            _enum_label(StackType, stack.type),
            endpoint_name,
            stack.swarm_id or "-",
        )
    return table


def build_access_control_panel(resource_control: ResourceControl, *, title: str) -> Panel:
    body = Text()
    body.append(f"ID: {resource_control.id}\n")
    body.append(f"Resource: {resource_control.resource_id or '-'}\n")
    if resource_control.administrators_only:
        body.append("Administrators only\n", style="bold yellow")
    elif resource_control.public:
        body.append("Public\n", style="bold green")
    if resource_control.user_accesses:
        users = ", ".join(str(a.user_id) for a in resource_control.user_accesses)
        body.append(f"Users: {users}\n")
    if resource_control.team_accesses:
        teams = ", ".join(str(a.team_id) for a in resource_control.team_accesses)
        body.append(f"Teams: {teams}\n")
    if resource_control.system:
        body.append("System", style="dim")

    return Panel(body, title=Text(title, style="bold cyan"), border_style="cyan")
