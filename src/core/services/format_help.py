"""Texto de ayuda para los flags `--format`.

`render_type` describe la forma de un tipo (modelos pydantic, dataclasses,
secuencias, mappings) como texto indentado; `get_format_help` lo envuelve en
el párrafo que se muestra en la ayuda de la CLI.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping, Sequence, Set
from typing import Any

from pydantic import BaseModel

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence, Set)
_MAPPING_ORIGINS = (dict, Mapping)


def _record_fields(tp: type) -> list[tuple[str, Any]] | None:
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return [(name, field.annotation) for name, field in tp.model_fields.items()]
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        hints = typing.get_type_hints(tp)
        return [(f.name, hints.get(f.name, f.type)) for f in dataclasses.fields(tp)]
    return None


def _type_name(tp: Any) -> str:
    if tp is Any:
        return "Any"
    if tp is None or tp is type(None):
        return "None"
    return getattr(tp, "__name__", None) or str(tp)


def render_type(tp: Any, margin: str, before_margin: str) -> str:
    """Renderiza la estructura de `tp`.

    `margin` es el incremento por nivel y `before_margin` el prefijo acumulado.
    """

    fields = _record_fields(tp)
    if fields is not None:
        lines = ["{"]
        for name, annotation in fields:
            inner = render_type(annotation, margin, before_margin + margin)
            lines.append(f"{before_margin}{margin}{name} {inner}")
        lines.append(f"{before_margin}}}")
        return "\n".join(lines)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Union or origin is types.UnionType:
        non_null = [a for a in args if a is not type(None)]
        if len(non_null) == 1:
            return render_type(non_null[0], margin, before_margin)
        return " | ".join(render_type(a, margin, before_margin) for a in non_null)

    if origin in _SEQUENCE_ORIGINS:
        element = args[0] if args else Any
        return f"[]{render_type(element, margin, before_margin)}"

    if origin in _MAPPING_ORIGINS:
        key, value = args if len(args) == 2 else (Any, Any)
        return f"map[{render_type(key, margin, before_margin)}]{render_type(value, margin, before_margin)}"

    return _type_name(tp)


def get_format_help(value: Any) -> str:
    """Ayuda de `--format` para una instancia o clase."""

    tp = value if isinstance(value, type) else type(value)
    structure = render_type(tp, "  ", "  ")
    return (
        "\nFormat:\n"
        "  The --format flag accepts a Jinja2 template, which is passed a "
        f"{tp.__module__}.{tp.__qualname__} object:\n\n"
        f"  {structure}\n"
    )
