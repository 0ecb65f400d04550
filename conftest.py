"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest

from call_mox.unittests._targets import ChildService, Service

_SHARED_CLASSES: tuple[type, ...] = (Service, ChildService)


def pytest_configure(config: pytest.Config) -> None:
    """Route library debug logs through pytest's log capture."""
    del config
    logging.getLogger("call_mox").setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def restore_shared_class_targets() -> t.Generator[None, None, None]:
    """Ensure class-level targets shared between tests end each test intact."""
    snapshots = [(cls, dict(vars(cls))) for cls in _SHARED_CLASSES]
    yield
    for cls, snapshot in snapshots:
        for name in set(vars(cls)) - set(snapshot):
            delattr(cls, name)
        for name, value in snapshot.items():
            if vars(cls).get(name) is not value and not name.startswith("__"):
                setattr(cls, name, value)
