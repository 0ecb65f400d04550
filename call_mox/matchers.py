"""Argument-list matchers for expectations."""

from __future__ import annotations

import inspect
import typing as t

from .comparators import Comparator, shape_of
from .formatting import format_args

_MISSING = object()


def _value_matches(expected: object, actual: object) -> bool:
    if isinstance(expected, Comparator):
        return bool(expected(actual))
    if shape_of(expected) is not shape_of(actual):
        return False
    if isinstance(expected, list | tuple):
        # a list never equals a tuple
        if isinstance(expected, list) != isinstance(actual, list):
            return False
        return len(expected) == len(actual) and all(
            _value_matches(item, other)
            for item, other in zip(expected, actual, strict=True)
        )
    if isinstance(expected, dict):
        return (
            isinstance(actual, dict)
            and expected.keys() == actual.keys()
            and all(_value_matches(val, actual[key]) for key, val in expected.items())
        )
    return expected == actual


class Matcher:
    """Decide whether an argument list satisfies a pattern."""

    def check(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> bool:
        """Return ``True`` if the call arguments are accepted."""
        raise NotImplementedError

    def describe(self) -> str:
        """Return the pattern rendered for diagnostics."""
        raise NotImplementedError


class UniversalMatcher(Matcher):
    """Accept every argument list."""

    def check(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> bool:
        """Return ``True`` unconditionally."""
        return True

    def describe(self) -> str:
        """Return a wildcard marker."""
        return "*"


class PredicateMatcher(Matcher):
    """Delegate to a caller-supplied predicate over the call arguments."""

    def __init__(self, predicate: t.Callable[..., object]) -> None:
        self.predicate = predicate

    def check(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> bool:
        """Return the truthiness of ``predicate(*args, **kwargs)``.

        Calls the predicate cannot accept are rejected without invoking it.
        """
        kwargs = kwargs or {}
        if not self._accepts(args, kwargs):
            return False
        return bool(self.predicate(*args, **kwargs))

    def _accepts(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any]
    ) -> bool:
        try:
            signature = inspect.signature(self.predicate)
        except (TypeError, ValueError):
            # builtins without introspectable signatures
            return True
        try:
            signature.bind(*args, **kwargs)
        except TypeError:
            return False
        return True

    def describe(self) -> str:
        """Return the predicate's name."""
        name = getattr(self.predicate, "__name__", type(self.predicate).__name__)
        return f"<predicate {name}>"


class PositionalMatcher(Matcher):
    """Compare each argument position with a literal or a comparator.

    A *weak* matcher checks only the leading positions covered by the
    pattern and ignores trailing extras, including keyword arguments that
    the keyword pattern does not name.
    """

    def __init__(
        self,
        pattern: t.Sequence[object],
        kw_pattern: t.Mapping[str, object] | None = None,
        *,
        weak: bool = False,
    ) -> None:
        self.pattern = tuple(pattern)
        self.kw_pattern = dict(kw_pattern or {})
        self.weak = weak

    def check(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> bool:
        """Return ``True`` when positions and keywords all match."""
        return self._check_positional(args) and self._check_keywords(kwargs or {})

    def _check_positional(self, args: t.Sequence[t.Any]) -> bool:
        if self.weak:
            if len(args) < len(self.pattern):
                return False
        elif len(args) != len(self.pattern):
            return False
        return all(
            _value_matches(expected, actual)
            for expected, actual in zip(self.pattern, args, strict=False)
        )

    def _check_keywords(self, kwargs: t.Mapping[str, t.Any]) -> bool:
        if not self.weak and set(kwargs) != set(self.kw_pattern):
            return False
        for key, expected in self.kw_pattern.items():
            actual = kwargs.get(key, _MISSING)
            if actual is _MISSING or not _value_matches(expected, actual):
                return False
        return True

    def describe(self) -> str:
        """Return the pattern, with ``...`` marking a weak matcher."""
        rendered = format_args(self.pattern, self.kw_pattern)
        if self.weak:
            return f"{rendered},..." if rendered else "..."
        return rendered


def create_matcher(
    *pattern: object, weak: bool = False, **kw_pattern: object
) -> Matcher:
    """Build the matcher implied by *pattern*.

    No pattern gives a universal matcher. A single plain callable becomes a
    predicate over the whole argument list. Anything else is matched
    position by position.
    """
    if not pattern and not kw_pattern and not weak:
        return UniversalMatcher()
    if (
        len(pattern) == 1
        and not kw_pattern
        and callable(pattern[0])
        and not isinstance(pattern[0], Comparator)
    ):
        return PredicateMatcher(pattern[0])
    return PositionalMatcher(pattern, kw_pattern, weak=weak)


__all__ = [
    "Matcher",
    "PositionalMatcher",
    "PredicateMatcher",
    "UniversalMatcher",
    "create_matcher",
]
