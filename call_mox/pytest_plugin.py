"""Pytest plugin providing the ``call_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .controller import CallMox, Phase

logger = logging.getLogger(__name__)

AUTO_VERIFY = "auto_verify"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the auto-verify flags and ini key."""
    group = parser.getgroup("call_mox", "object mocks and spies")
    for flag, action, verb in (
        ("--call-mox-auto-verify", "store_true", "Verify"),
        ("--no-call-mox-auto-verify", "store_false", "Do not verify"),
    ):
        group.addoption(
            flag,
            action=action,
            dest="call_mox_auto_verify",
            default=None,
            help=f"{verb} call_mox mocks when the fixture is torn down.",
        )
    parser.addini(
        "call_mox_auto_verify",
        "Default for verifying call_mox mocks at fixture teardown.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "call_mox(auto_verify=True): per-test switch for verifying "
            "call_mox mocks at teardown"
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase report to the item so teardown can inspect it."""
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _auto_verify_enabled(request: pytest.FixtureRequest) -> bool:
    """Resolve auto-verify from the most specific setting that is present.

    A ``call_mox`` marker wins over an indirect fixture param, which wins
    over the command line, which wins over the ini file.
    """
    for lookup in (_marker_override, _param_override, _cli_override):
        value = lookup(request)
        if value is not None:
            return value
    return bool(request.config.getini("call_mox_auto_verify"))


def _marker_override(request: pytest.FixtureRequest) -> bool | None:
    marker = request.node.get_closest_marker("call_mox")
    if marker is None:
        return None
    value = marker.kwargs.get(AUTO_VERIFY)
    return None if value is None else bool(value)


def _param_override(request: pytest.FixtureRequest) -> bool | None:
    param = getattr(request, "param", None)
    if param is None or isinstance(param, bool):
        return param
    if not isinstance(param, dict):
        msg = (
            f"call_mox param must be a bool or a dict with {AUTO_VERIFY!r}, "
            f"not {type(param).__name__}"
        )
        raise TypeError(msg)
    if AUTO_VERIFY not in param:
        msg = f"call_mox param dict has no {AUTO_VERIFY!r} entry: {sorted(param)}"
        raise TypeError(msg)
    return bool(param[AUTO_VERIFY])


def _cli_override(request: pytest.FixtureRequest) -> bool | None:
    value = request.config.getoption("call_mox_auto_verify")
    return None if value is None else bool(value)


@pytest.fixture
def call_mox(request: pytest.FixtureRequest) -> t.Generator[CallMox, None, None]:
    """Provide a :class:`CallMox` that restores every target on teardown."""
    mox = CallMox(verify_on_exit=False)
    auto_verify = _auto_verify_enabled(request)
    try:
        yield mox
    except Exception:
        logger.exception("Error during call_mox test execution")
        raise
    finally:
        _teardown_call_mox(request.node, mox, auto_verify=auto_verify)


def _teardown_call_mox(item: pytest.Item, mox: CallMox, *, auto_verify: bool) -> None:
    """Verify when requested, restore targets, and fail the test on error."""
    verify_error: Exception | None = None
    if auto_verify and mox.phase is Phase.ACTIVE and not _call_stage_failed(item):
        try:
            mox.verify()
        except Exception as err:
            logger.exception("Error during call_mox verification")
            verify_error = err
    try:
        mox.cleanup()
    except Exception:
        logger.exception("Error during call_mox fixture cleanup")
        pytest.fail("call_mox fixture cleanup failed")
    if verify_error is not None:
        pytest.fail(f"{type(verify_error).__name__}: {verify_error}")


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)
