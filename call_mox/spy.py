"""Pass-through spies recording calls made to a target's members."""

from __future__ import annotations

import typing as t

from .calls import SpyCall
from .errors import UnknownCallError
from .formatting import format_args, format_call
from .shim import Member, MemberTable

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import types


class Spy:
    """Wrap callable members of *target*, forwarding and recording calls.

    Every call reaches the original member. Arguments, results and raised
    errors are stored per name in :attr:`calls` for later assertions.
    """

    def __init__(self, target: object, names: t.Iterable[str] | None = None) -> None:
        self.target = target
        self._members = MemberTable(target, names)
        self.calls: dict[str, list[SpyCall]] = {
            name: [] for name in self._members.names
        }
        self._members.install(self._make_shim, preserve_binding=True)

    @property
    def names(self) -> tuple[str, ...]:
        """Return the wrapped member names."""
        return self._members.names

    def _make_shim(self, member: Member) -> t.Callable[..., t.Any]:
        name = member.name
        original = member.callable
        records = self.calls[name]

        def shim(*args: t.Any, **kwargs: t.Any) -> t.Any:
            record = SpyCall(name, args, kwargs)
            records.append(record)
            try:
                record.result = original(*args, **kwargs)
            except Exception as exc:
                record.error = exc
                raise
            return record.result

        return shim

    # ------------------------------------------------------------------
    # Assertion helpers
    # ------------------------------------------------------------------
    def _records(self, name: str) -> list[SpyCall]:
        try:
            return self.calls[name]
        except KeyError:
            msg = f"Unknown function {name!r}"
            raise UnknownCallError(msg) from None

    def call_count(self, name: str) -> int:
        """Return how many times *name* was called."""
        return len(self._records(name))

    def assert_called(self, name: str) -> None:
        """Raise ``AssertionError`` if *name* was never called."""
        if not self._records(name):
            msg = f"Expected {name!r} to be called but it was never called"
            raise AssertionError(msg)

    def assert_not_called(self, name: str) -> None:
        """Raise ``AssertionError`` if *name* was called."""
        records = self._records(name)
        if records:
            msg = (
                f"Expected {name!r} to be uncalled but it was called "
                f"{len(records)} time(s); last call: {records[-1]}"
            )
            raise AssertionError(msg)

    def assert_called_with(self, name: str, *args: t.Any, **kwargs: t.Any) -> None:
        """Check the most recent call of *name* used *args* and *kwargs*."""
        self.assert_called(name)
        last = self._records(name)[-1]
        if last.args != args or last.kwargs != kwargs:
            expected = format_call(name, args, kwargs)
            msg = f"{name!r} called with {last}, expected {expected}"
            raise AssertionError(msg)

    def assert_called_once_with(
        self, name: str, *args: t.Any, **kwargs: t.Any
    ) -> None:
        """Check *name* was called exactly once, with *args* and *kwargs*."""
        count = self.call_count(name)
        if count != 1:
            msg = (
                f"Expected {name!r} to be called once with "
                f"({format_args(args, kwargs)}), called {count} times"
            )
            raise AssertionError(msg)
        self.assert_called_with(name, *args, **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def cleanup(self) -> None:
        """Restore the original members of the target."""
        self._members.restore()

    def __enter__(self) -> Spy:
        """Return the spy for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Restore the target."""
        self.cleanup()
