"""Contrato del cliente de la API de Portainer.

El Core solo necesita listados tipados, una petición JSON autenticada
arbitraria y el `docker info` sin tipar de un endpoint. Transporte,
autenticación y decodificación son responsabilidad del adaptador.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from core.domain.models import Endpoint, EndpointGroup, Stack, User

ModelT = TypeVar("ModelT", bound=BaseModel)


@runtime_checkable
class PortainerClient(Protocol):
    """Contrato mínimo que consume el Core."""

    def endpoint_list(self) -> list[Endpoint]:
        ...

    def endpoint_group_list(self) -> list[EndpointGroup]:
        ...

    def stack_list(self, *, swarm_id: str = "", endpoint_id: int = 0) -> list[Stack]:
        """Lista stacks; valores vacíos/0 significan "sin filtro"."""

        ...

    def user_list(self) -> list[User]:
        ...

    def endpoint_docker_info(self, endpoint_id: int) -> dict[str, Any]:
        """Documento JSON sin tipar de `docker info` para el endpoint."""

        ...

    def do_json_with_token(
        self,
        path: str,
        method: str,
        headers: Mapping[str, str] | None,
        body: Any,
        model: type[ModelT],
    ) -> ModelT:
        """Petición autenticada; decodifica la respuesta JSON en `model`."""

        ...
