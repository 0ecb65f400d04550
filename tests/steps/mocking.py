"""pytest-bdd steps for mocks and spies over a calculator target."""

from __future__ import annotations

import typing as t

import pytest
from pytest_bdd import given, parsers, then, when

from call_mox.errors import UnexpectedCallError, UnresolvedExpectationsError
from tests.helpers.doubles import (
    MoxWorld,
    call_repeatedly,
    mocked_world,
    render_results,
    spied_world,
)


@pytest.fixture
def world_cleanup() -> t.Generator[list[MoxWorld], None, None]:
    """Restore every scenario target even when a step fails."""
    worlds: list[MoxWorld] = []
    yield worlds
    for world in worlds:
        world.mox.cleanup()


@given("a calculator mocked by a CallMox controller", target_fixture="world")
def create_mocked_world(world_cleanup: list[MoxWorld]) -> MoxWorld:
    """Mock every public method of a fresh calculator."""
    world = mocked_world()
    world_cleanup.append(world)
    return world


@given("a calculator spied by a CallMox controller", target_fixture="world")
def create_spied_world(world_cleanup: list[MoxWorld]) -> MoxWorld:
    """Spy on every public method of a fresh calculator."""
    world = spied_world()
    world_cleanup.append(world)
    return world


@given(
    parsers.parse(
        '"{name}" is expected to return {first:d} once then {second:d} once'
    )
)
def expect_two_once_actions(
    world: MoxWorld, name: str, first: int, second: int
) -> None:
    """Register two once-actions on one expectation."""
    world.require_mock().expect_call(name).will_once(first).will_once(second)


@given(parsers.parse('"{name}" is expected {count:d} times with no action'))
def expect_times(world: MoxWorld, name: str, count: int) -> None:
    """Register an expectation with a fixed count and no action."""
    world.require_mock().expect_call(name).times(count)


@given(
    parsers.parse(
        '"{name}" is expected with {a:d} and {b:d} to return {value:d} repeatedly'
    )
)
def expect_repeatedly(world: MoxWorld, name: str, a: int, b: int, value: int) -> None:
    """Register a matching expectation with an unbounded action."""
    world.require_mock().expect_call(name).matching(a, b).will_repeatedly(value)


@given(parsers.parse('"{name}" is expected once to return {value:d}'))
def expect_once(world: MoxWorld, name: str, value: int) -> None:
    """Register a single once-action."""
    world.require_mock().expect_call(name).will_once(value)


@when(parsers.parse('I call "{name}" {count:d} times'))
def call_without_args(world: MoxWorld, name: str, count: int) -> None:
    """Call the member without arguments."""
    call_repeatedly(world, name, count)


@when(parsers.parse('I call "{name}" with {a:d} and {b:d} {count:d} times'))
def call_with_args(world: MoxWorld, name: str, a: int, b: int, count: int) -> None:
    """Call the member with two arguments."""
    call_repeatedly(world, name, count, a, b)


@then(parsers.parse('the results should be "{text}"'))
def check_results(world: MoxWorld, text: str) -> None:
    """Compare the collected results with *text*."""
    assert render_results(world.results) == text


@then(parsers.parse("{count:d} results should equal {value:d}"))
def check_uniform_results(world: MoxWorld, count: int, value: int) -> None:
    """Every collected result equals *value*."""
    assert world.results == [value] * count


@then(parsers.parse('calling "{name}" again fails with "{text}"'))
def check_call_fails(world: MoxWorld, name: str, text: str) -> None:
    """One more call without arguments is rejected."""
    with pytest.raises(UnexpectedCallError, match=text):
        getattr(world.calc, name)()


@then(parsers.parse('calling "{name}" with {a:d} and {b:d} fails with "{text}"'))
def check_call_with_args_fails(
    world: MoxWorld, name: str, a: int, b: int, text: str
) -> None:
    """A call with the given arguments is rejected."""
    with pytest.raises(UnexpectedCallError, match=text):
        getattr(world.calc, name)(a, b)


@then("the controller verifies cleanly")
def check_verifies(world: MoxWorld) -> None:
    """Verification raises nothing."""
    world.mox.verify()


@then(parsers.parse('verifying fails naming "{name}"'))
def check_verify_fails(world: MoxWorld, name: str) -> None:
    """Verification reports *name* as unresolved."""
    with pytest.raises(UnresolvedExpectationsError) as exc:
        world.mox.verify()
    assert name in exc.value.names


@then("the mock has no expectations left")
def check_expectations_cleared(world: MoxWorld) -> None:
    """Verification cleared the expectation registry."""
    assert world.require_mock().expectations == {}


@then(parsers.parse('after cleanup "{name}" with {a:d} and {b:d} returns {value:d}'))
def check_restored(world: MoxWorld, name: str, a: int, b: int, value: int) -> None:
    """The original member answers once the controller cleaned up."""
    world.mox.verify()
    world.mox.cleanup()
    assert getattr(world.calc, name)(a, b) == value


@then(parsers.parse('the spy recorded {count:d} calls of "{name}"'))
def check_spy_records(world: MoxWorld, count: int, name: str) -> None:
    """The spy stored one record per call."""
    spy = world.require_spy()
    assert spy.call_count(name) == count
    spy.assert_called(name)
