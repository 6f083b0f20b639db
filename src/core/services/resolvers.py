"""Resolución de nombres a entidades de Portainer.

Reglas comunes:
- Cada llamada pide la colección completa al servidor; no hay caché.
- La comparación de nombres es exacta y sensible a mayúsculas.
- Gana el primer elemento en el orden que devuelve el servidor. Si dos
  entidades comparten nombre, el resultado depende de ese orden (Portainer
  no lo garantiza).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from core.domain.models import Endpoint, EndpointGroup, Stack, User
from core.errors import (
    EndpointGroupNotFoundError,
    EndpointNotFoundError,
    NoEndpointsAvailableError,
    PsuError,
    SeveralEndpointsAvailableError,
    StackClusterNotFoundError,
    StackNotFoundError,
    UserNotFoundError,
    ValueNotFoundError,
    ValueShapeError,
)
from core.interfaces.portainer import PortainerClient
from core.services.value_selector import select_value

logger = logging.getLogger(__name__)

SWARM_CLUSTER_ID_PATH = ("Swarm", "Cluster", "ID")

T = TypeVar("T")


def _first_match(
    items: Iterable[T],
    predicate: Callable[[T], bool],
    error: type[PsuError],
) -> T:
    for item in items:
        if predicate(item):
            return item
    raise error()


def get_default_endpoint(client: PortainerClient) -> Endpoint:
    """Devuelve el único endpoint existente.

    Raises:
        NoEndpointsAvailableError: si no hay endpoints.
        SeveralEndpointsAvailableError: si hay más de uno.
    """

    logger.debug("Getting endpoints")
    endpoints = client.endpoint_list()

    if not endpoints:
        raise NoEndpointsAvailableError(hint="Register an endpoint in Portainer first.")
    if len(endpoints) > 1:
        raise SeveralEndpointsAvailableError(hint="Select one explicitly with --endpoint.")
    return endpoints[0]


def get_stack_by_name(
    client: PortainerClient,
    name: str,
    *,
    swarm_id: str = "",
    endpoint_id: int = 0,
) -> Stack:
    logger.debug("Getting stacks (swarm_id=%r, endpoint_id=%s)", swarm_id, endpoint_id)
    stacks = client.stack_list(swarm_id=swarm_id, endpoint_id=endpoint_id)
    return _first_match(stacks, lambda s: s.name == name, StackNotFoundError)


def get_endpoint_by_name(client: PortainerClient, name: str) -> Endpoint:
    logger.debug("Getting endpoints")
    endpoints = client.endpoint_list()
    return get_endpoint_from_list_by_name(endpoints, name)


def get_endpoint_group_by_name(client: PortainerClient, name: str) -> EndpointGroup:
    logger.debug("Getting endpoint groups")
    groups = client.endpoint_group_list()
    return _first_match(groups, lambda g: g.name == name, EndpointGroupNotFoundError)


def get_user_by_name(client: PortainerClient, name: str) -> User:
    logger.debug("Getting users")
    users = client.user_list()
    return _first_match(users, lambda u: u.username == name, UserNotFoundError)


def get_endpoint_from_list_by_id(endpoints: Iterable[Endpoint], endpoint_id: int) -> Endpoint:
    """Busca por id en una lista ya obtenida (sin llamar a la API)."""

    return _first_match(endpoints, lambda e: e.id == endpoint_id, EndpointNotFoundError)


def get_endpoint_from_list_by_name(endpoints: Iterable[Endpoint], name: str) -> Endpoint:
    """Busca por nombre en una lista ya obtenida (sin llamar a la API)."""

    return _first_match(endpoints, lambda e: e.name == name, EndpointNotFoundError)


def get_endpoint_swarm_cluster_id(client: PortainerClient, endpoint_id: int) -> str:
    """Id del cluster swarm del endpoint.

    Raises:
        StackClusterNotFoundError: el endpoint no pertenece a un swarm.
        ValueShapeError: `docker info` no tiene la forma esperada.
    """

    logger.debug("Getting docker info for endpoint %s", endpoint_id)
    info = client.endpoint_docker_info(endpoint_id)

    try:
        cluster_id = select_value(info, SWARM_CLUSTER_ID_PATH)
    except ValueNotFoundError as exc:
        raise StackClusterNotFoundError() from exc

    if not isinstance(cluster_id, str):
        raise ValueShapeError(f"Expected a string swarm cluster id, got {type(cluster_id).__name__}")
    return cluster_id


def resolve_stack(client: PortainerClient, endpoint_id: int, name: str) -> Stack:
    """Busca un stack del endpoint, filtrando por su cluster swarm si lo hay.

    Un endpoint fuera de swarm (`StackClusterNotFoundError`) se consulta sin
    filtro de cluster.
    """

    try:
        swarm_id = get_endpoint_swarm_cluster_id(client, endpoint_id)
    except StackClusterNotFoundError:
        swarm_id = ""
    return get_stack_by_name(client, name, swarm_id=swarm_id, endpoint_id=endpoint_id)
