"""Shared state and helpers for behavioural mocking tests."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from call_mox.controller import CallMox
from call_mox.unittests._targets import Calculator

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from call_mox.mock import Mock
    from call_mox.spy import Spy


@dc.dataclass(slots=True)
class MoxWorld:
    """Controller, target and doubles shared between scenario steps."""

    mox: CallMox
    calc: Calculator
    mock: Mock | None = None
    spy: Spy | None = None
    results: list[t.Any] = dc.field(default_factory=list)

    def require_mock(self) -> Mock:
        """Return the scenario mock, failing loudly when none was created."""
        if self.mock is None:
            msg = "scenario did not create a mock"
            raise AssertionError(msg)
        return self.mock

    def require_spy(self) -> Spy:
        """Return the scenario spy, failing loudly when none was created."""
        if self.spy is None:
            msg = "scenario did not create a spy"
            raise AssertionError(msg)
        return self.spy


def mocked_world() -> MoxWorld:
    """Create a controller with a mocked :class:`Calculator`."""
    mox = CallMox()
    calc = Calculator()
    return MoxWorld(mox=mox, calc=calc, mock=mox.mock(calc))


def spied_world() -> MoxWorld:
    """Create a controller with a spied :class:`Calculator`."""
    mox = CallMox()
    calc = Calculator()
    return MoxWorld(mox=mox, calc=calc, spy=mox.spy(calc))


def call_repeatedly(
    world: MoxWorld, name: str, count: int, *args: object
) -> list[t.Any]:
    """Call *name* on the target *count* times and keep the results."""
    member = getattr(world.calc, name)
    world.results = [member(*args) for _ in range(count)]
    return world.results


def render_results(results: t.Iterable[object]) -> str:
    """Join results with commas for comparison with feature text."""
    return ",".join(str(result) for result in results)
