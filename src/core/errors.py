"""Jerarquía de errores de psu.

Todas las excepciones propias heredan de :class:`PsuError`, de modo que la
CLI puede renderizar un mensaje limpio (y un `hint` opcional) sin trazas.

Los errores de transporte de httpx NO se envuelven: se propagan tal cual.

Jerarquía
---------
PsuError
├── EndpointNotFoundError
├── EndpointGroupNotFoundError
├── StackNotFoundError
├── StackClusterNotFoundError
├── UserNotFoundError
├── AccessControlNotFoundError
├── NoEndpointsAvailableError
├── SeveralEndpointsAvailableError
├── ValueNotFoundError
├── ValueShapeError
└── PortainerApiError
"""

from __future__ import annotations


class PsuError(Exception):
    """Base de todos los errores de psu."""

    default_message = "Unexpected error"

    def __init__(self, message: str | None = None, *, hint: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.hint: str | None = hint


# --- Búsquedas por nombre ----------------------------------------------------

class EndpointNotFoundError(PsuError):
    default_message = "Endpoint not found"


class EndpointGroupNotFoundError(PsuError):
    default_message = "Endpoint group not found"


class StackNotFoundError(PsuError):
    default_message = "Stack not found"


class StackClusterNotFoundError(PsuError):
    """El endpoint no forma parte de un cluster swarm.

    Quien resuelve stacks debe tratarlo como "sin filtro de cluster".
    """

    default_message = "Stack cluster not found"


class UserNotFoundError(PsuError):
    default_message = "User not found"


class AccessControlNotFoundError(PsuError):
    default_message = "Access control not found"


# --- Endpoint por defecto ----------------------------------------------------

class NoEndpointsAvailableError(PsuError):
    default_message = "No endpoints available"


class SeveralEndpointsAvailableError(PsuError):
    default_message = "Several endpoints available"


# --- Documentos JSON sin tipar -----------------------------------------------

class ValueNotFoundError(PsuError):
    """Alguna clave del path no existe (o vale null)."""

    default_message = "Value not found"


class ValueShapeError(PsuError):
    """Un valor intermedio existe pero no es un mapping."""

    default_message = "Unexpected value shape"


# --- API ---------------------------------------------------------------------

class PortainerApiError(PsuError):
    """Respuesta no-2xx de la API de Portainer."""

    default_message = "Portainer API error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.details = details
