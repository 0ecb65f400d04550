"""Unit tests for :class:`call_mox.controller.CallMox`."""

from __future__ import annotations

import pytest

from call_mox.controller import CallMox, Phase
from call_mox.errors import LifecycleError, UnresolvedExpectationsError
from call_mox.unittests._targets import Calculator, make_module


def test_phase_tracks_lifecycle() -> None:
    """The phase property reflects verify and cleanup."""
    mox = CallMox()
    assert mox.phase is Phase.ACTIVE
    mox.verify()
    assert mox.phase is Phase.VERIFIED
    mox.cleanup()
    assert mox.phase is Phase.CLOSED


def test_verify_aggregates_unresolved_mocks() -> None:
    """One error names the unresolved calls of every mock."""
    mox = CallMox()
    calc = Calculator()
    module = make_module()
    mox.mock(calc).expect_call("add")
    mox.mock(module).expect_call("greet")
    with pytest.raises(UnresolvedExpectationsError) as exc:
        mox.verify()
    assert exc.value.names == ("add", "greet")
    assert "Mock 2" in str(exc.value)
    mox.cleanup()


def test_cleanup_restores_every_double() -> None:
    """Targets shared by several doubles end up with their originals."""
    mox = CallMox()
    calc = Calculator()
    spy = mox.spy(calc)
    mock = mox.mock(calc, names=["add"])
    mock.expect_call("add").will_once(0)
    assert calc.add(1, 1) == 0
    assert spy.call_count("add") == 0
    mox.verify()
    mox.cleanup()
    assert calc.add(1, 1) == 2
    assert "add" not in vars(calc)
    assert mox.mocks == [mock]
    assert mox.spies == [spy]


def test_context_manager_verifies_on_exit() -> None:
    """Leaving the block verifies mocks and restores targets."""
    calc = Calculator()
    with pytest.raises(UnresolvedExpectationsError):
        with CallMox() as mox:
            mox.mock(calc).expect_call("sub")
    assert calc.sub(3, 1) == 2


def test_context_manager_skips_verify_on_error() -> None:
    """An exception in the block is not masked by verification."""
    calc = Calculator()
    with pytest.raises(ZeroDivisionError):
        with CallMox() as mox:
            mox.mock(calc).expect_call("sub")
            _ = 1 / 0
    assert calc.sub(3, 1) == 2


def test_verify_on_exit_disabled() -> None:
    """verify_on_exit=False only restores."""
    calc = Calculator()
    with CallMox(verify_on_exit=False) as mox:
        mox.mock(calc).expect_call("sub")
    assert mox.phase is Phase.CLOSED


def test_closed_controller_rejects_use() -> None:
    """No doubles can be created once the controller cleaned up."""
    mox = CallMox()
    mox.cleanup()
    mox.cleanup()
    for action in (lambda: mox.mock(Calculator()), lambda: mox.spy(Calculator())):
        with pytest.raises(LifecycleError, match="already cleaned up"):
            action()
    with pytest.raises(LifecycleError):
        mox.verify()
