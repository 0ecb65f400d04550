"""Canned responses attached to expectations."""

from __future__ import annotations

import typing as t

from ._validators import validate_action_count
from .errors import (
    ActionSaturatedError,
    ConfigurationConflictError,
    InvalidCallbackError,
)

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation


class Action:
    """A response with its own remaining-use counter.

    Callable responses are invoked with the call's arguments; any other
    value is returned unchanged. A negative ``remaining`` never runs out.
    """

    def __init__(
        self,
        response: t.Any = None,
        remaining: int = 1,
        owner: Expectation | None = None,
    ) -> None:
        self.owner = owner
        if callable(response):
            self.computation: t.Callable[..., t.Any] = response
        else:
            self.computation = lambda *args, **kwargs: response
        self.remaining = validate_action_count(remaining)

    @property
    def unbounded(self) -> bool:
        """Return ``True`` when the action never saturates."""
        return self.remaining < 0

    def available(self) -> bool:
        """Return ``True`` while the action can still run."""
        return self.remaining != 0

    def execute(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> t.Any:
        """Run the computation with *args*, consuming one use."""
        if self.remaining == 0:
            msg = "Calling execute on already saturated action"
            raise ActionSaturatedError(msg)
        if self.remaining > 0:
            self.remaining -= 1
        return self.computation(*args, **(kwargs or {}))

    def times(self, count: int) -> Expectation:
        """Set how many times this action runs and return its expectation."""
        if self.owner is None:
            msg = "Action has no owning expectation to chain to"
            raise ConfigurationConflictError(msg)
        return self.owner._retime_action(self, count)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"{type(self).__name__}(remaining={self.remaining})"


class Invoker(Action):
    """Action that calls the trailing callable argument of each call.

    The callback receives the positional and keyword arguments captured
    when the invoker was created.
    """

    def __init__(
        self,
        cb_args: t.Sequence[t.Any] = (),
        remaining: int = 1,
        owner: Expectation | None = None,
        cb_kwargs: t.Mapping[str, t.Any] | None = None,
    ) -> None:
        self.cb_args = tuple(cb_args)
        self.cb_kwargs = dict(cb_kwargs or {})
        super().__init__(self._invoke, remaining, owner)

    def _invoke(self, *args: t.Any, **kwargs: t.Any) -> t.Any:
        del kwargs
        if args and callable(args[-1]):
            return args[-1](*self.cb_args, **self.cb_kwargs)
        msg = "Invoker couldn't find a callable as the last positional argument"
        raise InvalidCallbackError(msg)
