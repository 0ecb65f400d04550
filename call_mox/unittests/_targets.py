"""Sample collaborators used as mock and spy targets in unit tests."""

from __future__ import annotations

import types
import typing as t


class Calculator:
    """Small object with a few public methods."""

    def __init__(self) -> None:
        self.label = "calc"

    def add(self, a: int, b: int) -> int:
        return a + b

    def sub(self, a: int, b: int) -> int:
        return a - b

    def apply(self, value: int, callback: t.Callable[[int], t.Any]) -> t.Any:
        return callback(value)

    @property
    def doubled_label(self) -> str:
        return self.label * 2


class Service:
    """Class target with all three method kinds."""

    def fetch(self, key: str) -> str:
        return f"real:{key}"

    @staticmethod
    def version() -> int:
        return 1

    @classmethod
    def build(cls) -> Service:
        return cls()


class ChildService(Service):
    """Subclass inheriting every member."""


def make_module() -> types.ModuleType:
    """Return a throwaway module with one function and one constant."""
    module = types.ModuleType("sample_module")

    def greet(name: str) -> str:
        return f"hello {name}"

    module.greet = greet  # type: ignore[attr-defined]
    module.VALUE = 3  # type: ignore[attr-defined]
    return module
