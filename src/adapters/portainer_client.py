"""Cliente síncrono de la API de Portainer (httpx).

Implementa `core.interfaces.portainer.PortainerClient`. No reintenta: los
errores de transporte de httpx se propagan tal cual y las respuestas no-2xx
se convierten en `PortainerApiError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import Endpoint, EndpointGroup, Stack, User
from core.errors import PortainerApiError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_ENDPOINTS = TypeAdapter(list[Endpoint])
_ENDPOINT_GROUPS = TypeAdapter(list[EndpointGroup])
_STACKS = TypeAdapter(list[Stack])
_USERS = TypeAdapter(list[User])


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return

    message = response.reason_phrase or "Portainer API error"
    details = None
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = str(payload.get("message") or message)
        if payload.get("details"):
            details = str(payload["details"])

    raise PortainerApiError(message, status_code=response.status_code, details=details)


class PortainerApiClient:
    """Cliente de la API REST de Portainer.

    Uso:
        with PortainerApiClient(settings) as client:
            client.endpoint_list()
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._http = http or build_client(self._settings)
        self._token: str | None = self._settings.auth_token

    def __enter__(self) -> PortainerApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # --- Autenticación -------------------------------------------------------

    def authenticate(self) -> str:
        """Obtiene un JWT vía `POST /api/auth` y lo guarda para este cliente."""

        logger.debug("Getting auth token for user %r", self._settings.user)
        response = self._http.post(
            "auth",
            json={"Username": self._settings.user or "", "Password": self._settings.password or ""},
        )
        _raise_for_status(response)
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict) or not payload.get("jwt"):
            raise PortainerApiError("Unexpected auth response", status_code=response.status_code)
        self._token = str(payload["jwt"])
        return self._token

    def _auth_headers(self) -> dict[str, str]:
        token = self._token or self.authenticate()
        return {"Authorization": f"Bearer {token}"}

    # --- Peticiones ----------------------------------------------------------

    def _request_json(
        self,
        path: str,
        method: str = "GET",
        *,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        merged = {**self._auth_headers(), **(headers or {})}
        logger.debug("%s %s", method, path)
        response = self._http.request(
            method,
            path.lstrip("/"),
            headers=merged,
            json=body,
            params=params,
        )
        _raise_for_status(response)
        return response.json()

    def do_json_with_token(
        self,
        path: str,
        method: str,
        headers: Mapping[str, str] | None,
        body: Any,
        model: type[ModelT],
    ) -> ModelT:
        data = self._request_json(path, method, headers=headers, body=body)
        return model.model_validate(data)

    def endpoint_list(self) -> list[Endpoint]:
        return _ENDPOINTS.validate_python(self._request_json("endpoints"))

    def endpoint_group_list(self) -> list[EndpointGroup]:
        return _ENDPOINT_GROUPS.validate_python(self._request_json("endpoint_groups"))

    def stack_list(self, *, swarm_id: str = "", endpoint_id: int = 0) -> list[Stack]:
        filters: dict[str, Any] = {}
        if swarm_id:
            filters["SwarmID"] = swarm_id
        if endpoint_id:
            filters["EndpointID"] = endpoint_id

        params = {"filters": json.dumps(filters)} if filters else None
        return _STACKS.validate_python(self._request_json("stacks", params=params))

    def user_list(self) -> list[User]:
        return _USERS.validate_python(self._request_json("users"))

    def endpoint_docker_info(self, endpoint_id: int) -> dict[str, Any]:
        data = self._request_json(f"endpoints/{endpoint_id}/docker/info")
        if not isinstance(data, dict):
            raise PortainerApiError(f"Unexpected docker info payload: {type(data).__name__}")
        return data
