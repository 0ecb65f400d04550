"""Behave steps for mocks and spies over a calculator target."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import typing as t

from behave import given, then, when  # type: ignore[attr-defined]

from call_mox.controller import CallMox
from call_mox.errors import UnexpectedCallError, UnresolvedExpectationsError
from call_mox.unittests._targets import Calculator

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from call_mox.mock import Mock
    from call_mox.spy import Spy


class BehaveContext(t.Protocol):
    """Behave step context with attributes used in tests."""

    mox: CallMox
    calc: Calculator
    mock: Mock
    spy: Spy
    results: list[t.Any]

    def add_cleanup(self, func: t.Callable[[], t.Any]) -> None: ...


def _setup(context: BehaveContext) -> None:
    context.mox = CallMox()
    context.calc = Calculator()
    context.results = []
    context.add_cleanup(context.mox.cleanup)


def _expect_failure(func: t.Callable[[], t.Any], text: str) -> None:
    try:
        func()
    except UnexpectedCallError as err:
        assert text in str(err)  # noqa: S101
    else:  # pragma: no cover - only reached on regression
        msg = f"expected UnexpectedCallError containing {text!r}"
        raise AssertionError(msg)


@given("a calculator mocked by a CallMox controller")
def step_mocked_calculator(context: BehaveContext) -> None:
    """Mock every public method of a fresh calculator."""
    _setup(context)
    context.mock = context.mox.mock(context.calc)


@given("a calculator spied by a CallMox controller")
def step_spied_calculator(context: BehaveContext) -> None:
    """Spy on every public method of a fresh calculator."""
    _setup(context)
    context.spy = context.mox.spy(context.calc)


@given('"{name}" is expected to return {first:d} once then {second:d} once')
def step_two_once_actions(
    context: BehaveContext, name: str, first: int, second: int
) -> None:
    """Register two once-actions on one expectation."""
    context.mock.expect_call(name).will_once(first).will_once(second)


@given('"{name}" is expected {count:d} times with no action')
def step_expect_times(context: BehaveContext, name: str, count: int) -> None:
    """Register an expectation with a fixed count and no action."""
    context.mock.expect_call(name).times(count)


@given('"{name}" is expected with {a:d} and {b:d} to return {value:d} repeatedly')
def step_expect_repeatedly(
    context: BehaveContext, name: str, a: int, b: int, value: int
) -> None:
    """Register a matching expectation with an unbounded action."""
    context.mock.expect_call(name).matching(a, b).will_repeatedly(value)


@given('"{name}" is expected once to return {value:d}')
def step_expect_once(context: BehaveContext, name: str, value: int) -> None:
    """Register a single once-action."""
    context.mock.expect_call(name).will_once(value)


@when('I call "{name}" {count:d} times')
def step_call(context: BehaveContext, name: str, count: int) -> None:
    """Call the member without arguments."""
    member = getattr(context.calc, name)
    context.results = [member() for _ in range(count)]


@when('I call "{name}" with {a:d} and {b:d} {count:d} times')
def step_call_with_args(
    context: BehaveContext, name: str, a: int, b: int, count: int
) -> None:
    """Call the member with two arguments."""
    member = getattr(context.calc, name)
    context.results = [member(a, b) for _ in range(count)]


@then('the results should be "{text}"')
def step_check_results(context: BehaveContext, text: str) -> None:
    """Compare the collected results with *text*."""
    assert ",".join(str(r) for r in context.results) == text  # noqa: S101


@then("{count:d} results should equal {value:d}")
def step_check_uniform(context: BehaveContext, count: int, value: int) -> None:
    """Every collected result equals *value*."""
    assert context.results == [value] * count  # noqa: S101


@then('calling "{name}" again fails with "{text}"')
def step_call_fails(context: BehaveContext, name: str, text: str) -> None:
    """One more call without arguments is rejected."""
    _expect_failure(getattr(context.calc, name), text)


@then('calling "{name}" with {a:d} and {b:d} fails with "{text}"')
def step_call_with_args_fails(
    context: BehaveContext, name: str, a: int, b: int, text: str
) -> None:
    """A call with the given arguments is rejected."""
    member = getattr(context.calc, name)
    _expect_failure(lambda: member(a, b), text)


@then("the controller verifies cleanly")
def step_verifies(context: BehaveContext) -> None:
    """Verification raises nothing."""
    context.mox.verify()


@then('verifying fails naming "{name}"')
def step_verify_fails(context: BehaveContext, name: str) -> None:
    """Verification reports *name* as unresolved."""
    try:
        context.mox.verify()
    except UnresolvedExpectationsError as err:
        assert name in err.names  # noqa: S101
    else:  # pragma: no cover - only reached on regression
        msg = "verification unexpectedly passed"
        raise AssertionError(msg)


@then("the mock has no expectations left")
def step_expectations_cleared(context: BehaveContext) -> None:
    """Verification cleared the expectation registry."""
    assert context.mock.expectations == {}  # noqa: S101


@then('after cleanup "{name}" with {a:d} and {b:d} returns {value:d}')
def step_restored(
    context: BehaveContext, name: str, a: int, b: int, value: int
) -> None:
    """The original member answers once the controller cleaned up."""
    context.mox.verify()
    context.mox.cleanup()
    assert getattr(context.calc, name)(a, b) == value  # noqa: S101


@then('the spy recorded {count:d} calls of "{name}"')
def step_spy_records(context: BehaveContext, count: int, name: str) -> None:
    """The spy stored one record per call."""
    assert context.spy.call_count(name) == count  # noqa: S101
