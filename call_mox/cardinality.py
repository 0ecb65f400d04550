"""Call count bookkeeping for expectations."""

from __future__ import annotations

from ._validators import validate_int
from .errors import InvalidArgumentError

UNBOUNDED = -1


def _plural(count: int) -> str:
    return "time" if count == 1 else "times"


class Cardinality:
    """Track the minimum and maximum number of allowed invocations.

    A negative ``max`` means there is no upper bound. ``counter`` records
    how many calls were consumed and never decreases.
    """

    def __init__(self, minimum: int, maximum: int | None = None) -> None:
        self.min = 0
        self.max = 0
        self.counter = 0
        self.set(minimum, minimum if maximum is None else maximum)

    def set(self, minimum: int, maximum: int) -> None:
        """Replace both bounds without resetting the counter."""
        minimum = validate_int(minimum, name="min")
        maximum = validate_int(maximum, name="max")
        if maximum >= 0 and maximum < minimum:
            msg = f"min ({minimum}) should be smaller or equal to max ({maximum})"
            raise InvalidArgumentError(msg)
        if minimum < 0:
            msg = f"min can't be a negative number, got {minimum}"
            raise InvalidArgumentError(msg)
        self.min = minimum
        self.max = maximum

    def unbound(self) -> None:
        """Remove the upper bound."""
        self.max = UNBOUNDED

    @property
    def bounded(self) -> bool:
        """Return ``True`` when an upper bound is in effect."""
        return self.max >= 0

    def bump(self, count: int) -> None:
        """Shift both bounds up by *count*."""
        count = validate_int(count, name="count")
        if count <= 0:
            msg = f"Invalid count value {count}"
            raise InvalidArgumentError(msg)
        self.min += count
        if self.bounded:
            self.max += count

    def available(self) -> bool:
        """Return ``True`` while another call may be consumed."""
        return not self.bounded or self.counter < self.max

    def use(self) -> bool:
        """Consume one call, returning ``False`` if it exceeded the bound."""
        self.counter += 1
        return not self.bounded or self.counter <= self.max

    def validate(self) -> bool:
        """Return ``True`` when the observed count lies within bounds."""
        return self.counter >= self.min and (
            not self.bounded or self.counter <= self.max
        )

    def describe(self) -> str:
        """Return a readable summary of the bounds."""
        if not self.bounded:
            return f"at least {self.min} {_plural(self.min)}"
        if self.min == self.max:
            return f"exactly {self.min} {_plural(self.min)}"
        return f"between {self.min} and {self.max} times"

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Cardinality(min={self.min}, max={self.max}, counter={self.counter})"
