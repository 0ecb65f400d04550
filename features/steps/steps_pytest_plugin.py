"""Steps for testing the pytest plugin."""

from __future__ import annotations

import shutil
import subprocess
import sys
import tempfile
import typing as t
from pathlib import Path

from behave import given, then, when  # type: ignore[attr-defined]


class BehaveContext(t.Protocol):
    """Behave step context for plugin tests."""

    test_file: Path
    tmpdir: Path
    result: subprocess.CompletedProcess[str]


_HEADER = """
pytest_plugins = ("call_mox.pytest_plugin",)


class Greeter:
    def greet(self, name):
        return f"hi {name}"
"""


def _write_test_file(context: BehaveContext, body: str) -> None:
    tmpdir = Path(tempfile.mkdtemp())
    context.test_file = tmpdir / "test_example.py"
    context.tmpdir = tmpdir
    context.test_file.write_text(_HEADER + body)


@given("a temporary test file using the call_mox fixture")
def step_create_test_file(context: BehaveContext) -> None:
    """Write a pytest file that exercises the fixture."""
    _write_test_file(
        context,
        """
def test_example(call_mox):
    call_mox.mock(Greeter).expect_call('greet', 'ann').will_once('mocked')
    assert Greeter().greet('ann') == 'mocked'
""",
    )


@given("a temporary test file with an unsatisfied expectation")
def step_create_failing_test_file(context: BehaveContext) -> None:
    """Write a pytest file whose expectation is never met."""
    _write_test_file(
        context,
        """
def test_example(call_mox):
    call_mox.mock(Greeter).expect_call('greet', 'ann')
""",
    )


@when("I run pytest on the file")
def step_run_pytest(context: BehaveContext) -> None:
    """Execute pytest on the generated file."""
    result = subprocess.run(  # noqa: S603
        [sys.executable, "-m", "pytest", str(context.test_file)],
        capture_output=True,
        text=True,
    )
    context.result = result
    shutil.rmtree(context.tmpdir)


@then("the run should pass")
def step_check_pass(context: BehaveContext) -> None:
    """Assert that pytest exited successfully."""
    assert context.result.returncode == 0  # noqa: S101


@then("the run should fail")
def step_check_fail(context: BehaveContext) -> None:
    """Assert that pytest reported the unresolved expectation."""
    assert context.result.returncode != 0  # noqa: S101
    assert "UnresolvedExpectationsError" in context.result.stdout  # noqa: S101
