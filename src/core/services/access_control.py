"""Controles de acceso (ResourceControl) de recursos decorados por Portainer.

Portainer no representa "sin control de acceso" con null: siempre devuelve un
`ResourceControl`, con `Id == 0` como marcador de ausencia. Hay dos formas de
decoración:

- Objetos Docker: `{"...": ..., "Portainer": {"ResourceControl": {...}}}`
- Stacks:         `{"Id": 5, "Name": "web", "ResourceControl": {...}}`

Ambas exponen `access_control` (ver `AccessControlled`) y comparten la misma
política en `require_access_control`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, runtime_checkable

from core.domain.models import (
    DecoratedDockerResource,
    DecoratedStack,
    DockerResourceType,
    ResourceControl,
    ResourceType,
)
from core.errors import AccessControlNotFoundError
from core.interfaces.portainer import PortainerClient
from core.services.resolvers import resolve_stack

logger = logging.getLogger(__name__)


@runtime_checkable
class AccessControlled(Protocol):
    """Recurso con un `ResourceControl` posiblemente ausente."""

    @property
    def access_control(self) -> ResourceControl | None:
        ...


def require_access_control(resource: AccessControlled) -> ResourceControl:
    """Devuelve el control de acceso o lanza `AccessControlNotFoundError`."""

    resource_control = resource.access_control
    if resource_control is None or not resource_control.has_access_control:
        raise AccessControlNotFoundError()
    return resource_control


def get_docker_resource_access_control(
    client: PortainerClient,
    endpoint_id: int,
    resource_id: str,
    resource_type: ResourceType | DockerResourceType | str,
) -> ResourceControl:
    """Control de acceso de un contenedor/servicio/volumen/... del endpoint.

    Raises:
        ValueError: si `resource_type` es `stack` (usar `get_stack_access_control`).
    """

    if isinstance(resource_type, Enum):
        resource_type = resource_type.value
    resource_type = ResourceType(resource_type)
    if resource_type is ResourceType.STACK:
        raise ValueError("Stacks are not Docker resources; use get_stack_access_control")
    path = f"endpoints/{endpoint_id}/docker/{resource_type.value}s/{resource_id}"

    logger.debug("Getting %s %s access control", resource_type.value, resource_id)
    resource = client.do_json_with_token(path, "GET", {}, None, DecoratedDockerResource)
    return require_access_control(resource)


def get_stack_access_control(
    client: PortainerClient,
    endpoint_id: int,
    stack_name: str,
) -> ResourceControl:
    """Control de acceso de un stack, buscado por nombre dentro del endpoint."""

    stack = resolve_stack(client, endpoint_id, stack_name)

    logger.debug("Getting stack %s access control", stack.id)
    decorated = client.do_json_with_token(f"stacks/{stack.id}", "GET", {}, None, DecoratedStack)
    return require_access_control(decorated)
