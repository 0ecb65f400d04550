"""Comparator classes used for positional argument matching."""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as t


class Shape(enum.StrEnum):
    """Runtime shape of a single call argument."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    FUNCTION = "function"
    ARRAY = "array"
    OBJECT = "object"


def shape_of(value: object) -> Shape:
    """Return the :class:`Shape` tag for *value*."""
    if value is None:
        return Shape.NULL
    # bool subclasses int
    if isinstance(value, bool):
        return Shape.BOOLEAN
    if isinstance(value, int | float | complex):
        return Shape.NUMBER
    if isinstance(value, str):
        return Shape.STRING
    if isinstance(value, list | tuple):
        return Shape.ARRAY
    if callable(value):
        return Shape.FUNCTION
    return Shape.OBJECT


class Comparator:
    """Callable returning ``True`` when a single argument matches.

    Positional matchers call instances of this class instead of comparing
    them with ``==``.
    """

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        raise NotImplementedError


@dc.dataclass(frozen=True, slots=True)
class Any(Comparator):
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "ANY"


@dc.dataclass(frozen=True, slots=True)
class TypeChecker(Comparator):
    """Match values whose :func:`shape_of` equals ``shape``."""

    shape: Shape

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* has the expected shape."""
        return shape_of(value) is self.shape

    def __repr__(self) -> str:
        """Return a debug representation."""
        return self.shape.name


@dc.dataclass(frozen=True, slots=True)
class IsA(Comparator):
    """Match instances of ``typ``."""

    typ: type | tuple[type, ...]

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)


@dc.dataclass(frozen=True, slots=True)
class Regex(Comparator):
    """Match string values against ``pattern``."""

    pattern: str
    _compiled: re.Pattern[str] = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* is a string the regex matches."""
        return isinstance(value, str) and bool(self._compiled.search(value))


@dc.dataclass(frozen=True, slots=True)
class Contains(Comparator):
    """Match if ``item`` is found in *value*."""

    item: object

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        try:
            return self.item in value  # type: ignore[operator]
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class StartsWith(Comparator):
    """Match if *value* is a string beginning with ``prefix``."""

    prefix: str

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)


@dc.dataclass(frozen=True, slots=True)
class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    func: t.Callable[[t.Any], object]

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))


ANY = Any()
OBJECT = TypeChecker(Shape.OBJECT)
NUMBER = TypeChecker(Shape.NUMBER)
STRING = TypeChecker(Shape.STRING)
BOOLEAN = TypeChecker(Shape.BOOLEAN)
FUNCTION = TypeChecker(Shape.FUNCTION)
ARRAY = TypeChecker(Shape.ARRAY)


__all__ = [
    "ANY",
    "ARRAY",
    "BOOLEAN",
    "FUNCTION",
    "NUMBER",
    "OBJECT",
    "STRING",
    "Any",
    "Comparator",
    "Contains",
    "IsA",
    "Predicate",
    "Regex",
    "Shape",
    "StartsWith",
    "TypeChecker",
    "shape_of",
]
