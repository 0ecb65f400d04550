"""Unit tests for :mod:`call_mox.cardinality`."""

from __future__ import annotations

import pytest

from call_mox.cardinality import UNBOUNDED, Cardinality
from call_mox.errors import InvalidArgumentError


@pytest.mark.parametrize(("minimum", "maximum"), [(0, 0), (0, 3), (2, 2), (1, 5)])
def test_bounded_cardinality_lifecycle(minimum: int, maximum: int) -> None:
    """Invalid until ``min`` uses, valid through ``max``, then exceeded."""
    card = Cardinality(minimum, maximum)
    for _ in range(minimum):
        assert not card.validate()
        assert card.use()
    assert card.validate()
    for _ in range(maximum - minimum):
        assert card.available()
        assert card.use()
        assert card.validate()
    assert not card.available()
    assert card.use() is False
    assert not card.validate()
    assert card.counter == maximum + 1


def test_unbounded_cardinality_never_saturates() -> None:
    """A negative max accepts any number of calls once min is reached."""
    card = Cardinality(2, UNBOUNDED)
    assert not card.validate()
    for _ in range(100):
        assert card.use()
    assert card.available()
    assert card.validate()


def test_max_defaults_to_min() -> None:
    """Omitting max expects exactly ``min`` calls."""
    card = Cardinality(3)
    assert (card.min, card.max, card.counter) == (3, 3, 0)


@pytest.mark.parametrize(
    ("minimum", "maximum"),
    [(-1, None), (3, 2), ("1", None), (1.5, None), (True, None), (1, "2")],
)
def test_invalid_bounds_rejected(minimum: object, maximum: object) -> None:
    """Negative, inverted or non-integer bounds raise InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError):
        Cardinality(minimum, maximum)  # type: ignore[arg-type]


def test_set_keeps_counter() -> None:
    """set() replaces the bounds but not the consumed count."""
    card = Cardinality(1)
    card.use()
    card.set(2, 4)
    assert (card.min, card.max, card.counter) == (2, 4, 1)
    with pytest.raises(InvalidArgumentError):
        card.set(5, 4)


def test_unbound_leaves_min() -> None:
    """unbound() only removes the upper limit."""
    card = Cardinality(2, 3)
    card.unbound()
    assert (card.min, card.max) == (2, UNBOUNDED)
    assert not card.bounded


@pytest.mark.parametrize(
    ("bounds", "count", "expected"),
    [((1, 2), 3, (4, 5)), ((1, UNBOUNDED), 2, (3, UNBOUNDED)), ((0, 0), 1, (1, 1))],
)
def test_bump_shifts_bounds(
    bounds: tuple[int, int], count: int, expected: tuple[int, int]
) -> None:
    """bump(k) raises min and, when bounded, max by ``k``."""
    card = Cardinality(*bounds)
    card.bump(count)
    assert (card.min, card.max) == expected


@pytest.mark.parametrize("count", [0, -1, "2", 1.0])
def test_bump_rejects_non_positive_counts(count: object) -> None:
    """bump() requires a positive integer."""
    card = Cardinality(1)
    with pytest.raises(InvalidArgumentError):
        card.bump(count)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("bounds", "expected"),
    [
        ((1, 1), "exactly 1 time"),
        ((2, 2), "exactly 2 times"),
        ((2, UNBOUNDED), "at least 2 times"),
        ((1, 3), "between 1 and 3 times"),
    ],
)
def test_describe(bounds: tuple[int, int], expected: str) -> None:
    """describe() renders the bounds for diagnostics."""
    assert Cardinality(*bounds).describe() == expected
