"""Rendering helpers for call diagnostics."""

from __future__ import annotations

import typing as t
from textwrap import indent

from .comparators import Comparator, Shape, shape_of


def format_value(value: object) -> str:
    """Render one argument the way failure messages show it."""
    if isinstance(value, Comparator):
        return repr(value)
    shape = shape_of(value)
    if shape is Shape.STRING:
        return repr(value)
    if shape is Shape.FUNCTION:
        return "function"
    if shape is Shape.ARRAY:
        return "[...]"
    if shape is Shape.OBJECT:
        return "{...}"
    return repr(value)


def format_args(
    args: t.Sequence[object], kwargs: t.Mapping[str, object] | None = None
) -> str:
    """Render positional and keyword arguments separated by commas."""
    parts = [format_value(arg) for arg in args]
    if kwargs:
        parts.extend(f"{key}={format_value(val)}" for key, val in kwargs.items())
    return ",".join(parts)


def format_call(
    name: str,
    args: t.Sequence[object] = (),
    kwargs: t.Mapping[str, object] | None = None,
) -> str:
    """Render a call as ``name(arg1,arg2,...)``."""
    return f"{name}({format_args(args, kwargs)})"


def format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    """Join labelled, indented sections under *title*."""
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    """Return *entries* as a numbered list, or ``(none)`` when empty."""
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)
