"""Exception hierarchy for call-mox."""

from __future__ import annotations

import typing as t


class CallMoxError(Exception):
    """Base class for all call-mox errors."""


class InvalidArgumentError(CallMoxError, ValueError):
    """Raised for malformed configuration input such as bad counts."""


class ConfigurationConflictError(CallMoxError):
    """Raised when an expectation is configured twice or out of order."""


class ActionsFinalizedError(ConfigurationConflictError):
    """Raised when actions are added after an unbounded action."""


class UnknownCallError(CallMoxError, AttributeError):
    """Raised when a name was never captured by the mock."""


class UnexpectedCallError(CallMoxError, AssertionError):
    """Raised at call time when no expectation accepts the call."""


class CardinalityExceededError(CallMoxError):
    """Raised when an expectation executes beyond its allowed call count."""


class NoAvailableActionError(CallMoxError):
    """Raised when an expectation has actions but none can run."""


class ActionSaturatedError(CallMoxError):
    """Raised when a saturated action is executed."""


class InvalidCallbackError(CallMoxError, TypeError):
    """Raised when an invoker finds no callable trailing argument."""


class VerificationError(CallMoxError, AssertionError):
    """Base class for verification failures."""


class UnresolvedExpectationsError(VerificationError):
    """Raised when one or more expectations were not satisfied."""

    def __init__(self, names: t.Sequence[str], details: str = "") -> None:
        self.names: tuple[str, ...] = tuple(names)
        msg = "Unresolved expectations on calls: " + ", ".join(self.names)
        if details:
            msg = f"{msg}\n\n{details}"
        super().__init__(msg)


class LifecycleError(CallMoxError):
    """Raised when a controller is used after cleanup."""


__all__ = [
    "ActionSaturatedError",
    "ActionsFinalizedError",
    "CallMoxError",
    "CardinalityExceededError",
    "ConfigurationConflictError",
    "InvalidArgumentError",
    "InvalidCallbackError",
    "LifecycleError",
    "NoAvailableActionError",
    "UnexpectedCallError",
    "UnknownCallError",
    "UnresolvedExpectationsError",
    "VerificationError",
]
