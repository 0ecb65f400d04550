"""Mock dispatcher routing intercepted calls to expectations."""

from __future__ import annotations

import logging
import typing as t

from .calls import Call
from .errors import UnexpectedCallError, UnknownCallError, UnresolvedExpectationsError
from .expectations import Expectation
from .formatting import format_sections, numbered
from .matchers import create_matcher
from .shim import Member, MemberTable

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import types

logger = logging.getLogger(__name__)

VerifyCallback = t.Callable[[UnresolvedExpectationsError | None], t.Any]


class Mock:
    """Replace callable members of *target* with expectation-driven shims.

    Every call to a shimmed member is routed to the first expectation
    registered for that name which matches the arguments and is not yet
    saturated. Calls nobody expected raise :class:`UnexpectedCallError`
    in the code under test.

    Parameters
    ----------
    target:
        Instance, class or module whose members are intercepted.
    names:
        Explicit member names to intercept. When omitted every public
        callable attribute is intercepted.
    """

    def __init__(self, target: object, names: t.Iterable[str] | None = None) -> None:
        self.target = target
        self._members = MemberTable(target, names)
        self.expectations: dict[str, list[Expectation]] = {}
        self.calls: list[Call] = []
        self._members.install(self._make_shim)

    @property
    def names(self) -> tuple[str, ...]:
        """Return the intercepted member names."""
        return self._members.names

    def _make_shim(self, member: Member) -> t.Callable[..., t.Any]:
        name = member.name

        def shim(*args: t.Any, **kwargs: t.Any) -> t.Any:
            return self._dispatch(Call(name, args, kwargs))

        return shim

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def expect_call(
        self, name: str, *pattern: object, **kw_pattern: object
    ) -> Expectation:
        """Register and return a new expectation for *name*."""
        if name not in self._members:
            msg = f"Unknown function {name!r}"
            raise UnknownCallError(msg)
        matcher = None
        if pattern or kw_pattern:
            matcher = create_matcher(*pattern, **kw_pattern)
        expectation = Expectation(name, matcher)
        self.expectations.setdefault(name, []).append(expectation)
        return expectation

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def _dispatch(self, call: Call) -> t.Any:
        self.calls.append(call)
        expectations = self.expectations.get(call.name)
        if not expectations:
            msg = format_sections(
                f"Unexpected call of {call.name}.",
                [("Actual call", str(call))],
            )
            raise UnexpectedCallError(msg)
        saturated_match = False
        for expectation in expectations:
            if not expectation.is_matching(call.args, call.kwargs):
                continue
            if expectation.is_saturated():
                saturated_match = True
                continue
            logger.debug("Dispatching %s to %r", call, expectation)
            return expectation.execute(call.args, call.kwargs)
        title = (
            f"All matching expectations saturated for call {call}."
            if saturated_match
            else f"No matching expectation for call {call}."
        )
        msg = format_sections(
            title,
            [
                ("Actual call", str(call)),
                (
                    "Registered expectations",
                    numbered([exp.describe() for exp in expectations]),
                ),
            ],
        )
        raise UnexpectedCallError(msg)

    # ------------------------------------------------------------------
    # Verification and lifecycle
    # ------------------------------------------------------------------
    def unresolved(self) -> list[Expectation]:
        """Return every expectation whose call count is out of bounds."""
        return [
            exp
            for exps in self.expectations.values()
            for exp in exps
            if not exp.validate()
        ]

    def verify(self, callback: VerifyCallback | None = None) -> t.Any:
        """Check all expectations were satisfied, then clear them.

        With *callback* the outcome (an error or ``None``) is passed to it
        and its result returned; otherwise a failure is raised.
        """
        failing = self.unresolved()
        names = list(dict.fromkeys(exp.name for exp in failing))
        self.expectations.clear()
        err = None
        if names:
            details = format_sections(
                "Unsatisfied expectations:",
                [("Expected", numbered([exp.describe() for exp in failing]))],
            )
            err = UnresolvedExpectationsError(names, details)
        if callback is not None:
            return callback(err)
        if err is not None:
            raise err
        return None

    def cleanup(self) -> None:
        """Restore the original members of the target."""
        self._members.restore()

    def __enter__(self) -> Mock:
        """Return the mock for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Verify when the block succeeded and always restore the target."""
        try:
            if exc_type is None:
                self.verify()
        finally:
            self.cleanup()
