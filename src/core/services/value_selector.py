"""Selección de valores en documentos JSON sin tipar.

Algunas respuestas de la API (p.ej. `docker info`) no tienen un modelo propio.
`select_value` recorre un documento anidado con un path de claves y distingue
entre "la clave no existe" (`ValueNotFoundError`) y "el documento no tiene la
forma esperada" (`ValueShapeError`).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from core.errors import ValueNotFoundError, ValueShapeError


class JsonKind(str, Enum):
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    MISSING = "missing"


def kind_of(value: Any) -> JsonKind:
    """Clasifica un valor decodificado de JSON."""

    if value is None:
        return JsonKind.MISSING
    if isinstance(value, Mapping):
        return JsonKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return JsonKind.SEQUENCE
    return JsonKind.SCALAR


def select_value(document: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Devuelve el valor en `path` (p.ej. ``["Swarm", "Cluster", "ID"]``).

    Raises:
        ValueError: si `path` está vacío.
        ValueNotFoundError: si alguna clave falta o vale null.
        ValueShapeError: si un valor intermedio no es un mapping.
    """

    if not path:
        raise ValueError("path must not be empty")
    if kind_of(document) is not JsonKind.MAPPING:
        raise ValueShapeError(f"Expected a mapping at the document root, got {type(document).__name__}")

    key, rest = path[0], path[1:]
    value = document.get(key)
    kind = kind_of(value)

    if kind is JsonKind.MISSING:
        raise ValueNotFoundError(f"Value not found: {key}")
    if not rest:
        return value
    if kind is not JsonKind.MAPPING:
        raise ValueShapeError(f"Expected a mapping at {key!r}, got {kind.value}")
    return select_value(value, rest)
