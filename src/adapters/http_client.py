"""Wrapper de httpx.

- Estandariza timeouts, headers y verificación TLS para la API de Portainer.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` apuntando a `<url>/api/`."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=settings.api_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        verify=not settings.insecure,
        headers=headers,
        transport=transport,
    )
