"""Tests for the --format help renderer (core/services/format_help.py)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel

from core.domain.models import Endpoint, ResourceControl, Stack
from core.services.format_help import get_format_help, render_type


class Inner(BaseModel):
    count: int
    tags: list[str]


class Outer(BaseModel):
    name: str
    inner: Inner
    items: list[Inner] = []
    maybe: Optional[int] = None
    labels: dict[str, str] = {}


@dataclass
class Point:
    x: float
    y: float
    history: list[tuple[float, ...]] = field(default_factory=list)


def test_scalars_render_bare_name() -> None:
    assert render_type(int, "  ", "  ") == "int"
    assert render_type(str, "  ", "  ") == "str"
    assert render_type(Any, "  ", "  ") == "Any"


def test_sequences_get_marker() -> None:
    assert render_type(list[int], "  ", "") == "[]int"
    assert render_type(list[list[str]], "  ", "") == "[][]str"
    assert render_type(tuple[int, ...], "  ", "") == "[]int"


def test_optional_renders_inner_type() -> None:
    assert render_type(Optional[int], "  ", "") == "int"
    assert render_type(int | None, "  ", "") == "int"


def test_mapping_renders_key_and_value() -> None:
    assert render_type(dict[str, int], "  ", "") == "map[str]int"


def test_nested_records() -> None:
    expected = "\n".join(
        [
            "{",
            "  name str",
            "  inner {",
            "    count int",
            "    tags []str",
            "  }",
            "  items []{",
            "    count int",
            "    tags []str",
            "  }",
            "  maybe int",
            "  labels map[str]str",
            "}",
        ]
    )
    assert render_type(Outer, "  ", "") == expected


def test_dataclass_records() -> None:
    expected = "\n".join(
        [
            "{",
            "-x float",
            "-y float",
            "-history [][]float",
            "}",
        ]
    )
    assert render_type(Point, "-", "") == expected


def test_margins_accumulate() -> None:
    rendered = render_type(Inner, "..", ">>")
    assert rendered.splitlines() == ["{", ">>..count int", ">>..tags []str", ">>}"]


def test_format_help_header() -> None:
    help_text = get_format_help(Endpoint(Id=1, Name="prod"))
    assert help_text.startswith("\nFormat:\n  The --format flag accepts a Jinja2 template")
    assert "core.domain.models.Endpoint object:" in help_text
    assert "    name str" in help_text
    assert help_text.endswith("  }\n")


def test_format_help_accepts_classes() -> None:
    assert get_format_help(Stack) == get_format_help(Stack(Id=1, Name="web"))


def test_format_help_expands_nested_models() -> None:
    help_text = get_format_help(ResourceControl)
    assert "user_accesses []{" in help_text
    assert "      user_id int" in help_text


def test_rendering_is_deterministic() -> None:
    assert get_format_help(Outer) == get_format_help(Outer)
