"""Expectation builder and execution state for mocked calls."""

from __future__ import annotations

import typing as t

from ._validators import validate_action_count
from .actions import Action, Invoker
from .cardinality import UNBOUNDED, Cardinality
from .errors import (
    ActionsFinalizedError,
    CardinalityExceededError,
    ConfigurationConflictError,
    NoAvailableActionError,
)
from .matchers import Matcher, UniversalMatcher, create_matcher


class Expectation:
    """Which calls are allowed for one name, how often, and with what result.

    An expectation owns a :class:`~call_mox.matchers.Matcher`, a
    :class:`~call_mox.cardinality.Cardinality` and an ordered list of
    actions. Configuration happens through chainable builder methods, each
    of which locks its category:

    * the matcher may be set once, before the cardinality is forced and
      before any action is added;
    * the cardinality may be forced once, before any action is added;
    * no action may follow an unbounded (``will_repeatedly``) action.

    Unless the cardinality was forced, every added action widens it by the
    action's own count.
    """

    def __init__(self, name: str = "", matcher: Matcher | None = None) -> None:
        self.name = name
        self.matcher: Matcher = matcher if matcher is not None else UniversalMatcher()
        self.cardinality = Cardinality(1)
        self.actions: list[Action] = []
        self.matcher_locked = matcher is not None
        self.cardinality_locked = False
        self.actions_locked = False

    # ------------------------------------------------------------------
    # Matcher configuration
    # ------------------------------------------------------------------
    def _set_matcher(self, matcher: Matcher) -> Expectation:
        if self.matcher_locked:
            msg = f"Matcher already set for expectation on {self.name!r}"
            raise ConfigurationConflictError(msg)
        if self.cardinality_locked or self.actions:
            msg = (
                f"Matcher for {self.name!r} must be set before cardinality "
                "and actions"
            )
            raise ConfigurationConflictError(msg)
        self.matcher = matcher
        self.matcher_locked = True
        return self

    def matching(self, *pattern: object, **kw_pattern: object) -> Expectation:
        """Require call arguments to match *pattern* exactly."""
        return self._set_matcher(create_matcher(*pattern, **kw_pattern))

    def with_args(self, *pattern: object, **kw_pattern: object) -> Expectation:
        """Alias for :meth:`matching`."""
        return self.matching(*pattern, **kw_pattern)

    def matching_at_least(self, *pattern: object, **kw_pattern: object) -> Expectation:
        """Require the leading call arguments to match *pattern*."""
        return self._set_matcher(create_matcher(*pattern, weak=True, **kw_pattern))

    def with_args_at_least(
        self, *pattern: object, **kw_pattern: object
    ) -> Expectation:
        """Alias for :meth:`matching_at_least`."""
        return self.matching_at_least(*pattern, **kw_pattern)

    # ------------------------------------------------------------------
    # Cardinality configuration
    # ------------------------------------------------------------------
    def _force_cardinality(self, minimum: int, maximum: int) -> Expectation:
        if self.cardinality_locked:
            msg = f"Cardinality already set for expectation on {self.name!r}"
            raise ConfigurationConflictError(msg)
        if self.actions:
            msg = f"Cardinality for {self.name!r} must be set before actions"
            raise ConfigurationConflictError(msg)
        self.cardinality.set(minimum, maximum)
        self.cardinality_locked = True
        self.matcher_locked = True
        return self

    def times(self, count: int) -> Expectation:
        """Expect exactly *count* calls."""
        return self._force_cardinality(count, count)

    def at_least(self, count: int) -> Expectation:
        """Expect *count* or more calls."""
        return self._force_cardinality(count, UNBOUNDED)

    def at_most(self, count: int) -> Expectation:
        """Expect between one and *count* calls."""
        return self._force_cardinality(1, count)

    def between(self, minimum: int, maximum: int) -> Expectation:
        """Expect between *minimum* and *maximum* calls inclusive."""
        return self._force_cardinality(minimum, maximum)

    # ------------------------------------------------------------------
    # Action registration
    # ------------------------------------------------------------------
    def _grow_cardinality(self, count: int) -> None:
        if self.cardinality_locked:
            return
        if not self.actions:
            if count >= 0:
                self.cardinality.set(count, count)
            else:
                self.cardinality.set(1, UNBOUNDED)
        elif count >= 0:
            self.cardinality.bump(count)
        else:
            self.cardinality.bump(1)
            self.cardinality.unbound()

    def _add_action(self, action: Action) -> Action:
        """Append *action* and widen the inferred cardinality to match."""
        if self.actions_locked:
            msg = (
                f"Cannot add actions to {self.name!r} after an unbounded action"
            )
            raise ActionsFinalizedError(msg)
        self._grow_cardinality(action.remaining)
        self.actions.append(action)
        self.matcher_locked = True
        if action.unbounded:
            self.actions_locked = True
        return action

    def _retime_action(self, action: Action, count: int) -> Expectation:
        """Change the count of the most recent *action* and its cardinality."""
        count = validate_action_count(count)
        if not self.actions or self.actions[-1] is not action:
            msg = "Only the most recently added action can be re-timed"
            raise ConfigurationConflictError(msg)
        if self.actions_locked:
            msg = (
                f"Cannot re-time actions of {self.name!r} after an unbounded action"
            )
            raise ActionsFinalizedError(msg)
        previous = action.remaining
        action.remaining = count
        if not self.cardinality_locked:
            if count < 0:
                self.cardinality.unbound()
            elif count > previous:
                self.cardinality.bump(count - previous)
            elif count < previous:
                self.cardinality.set(
                    self.cardinality.min - (previous - count),
                    self.cardinality.max - (previous - count),
                )
        if count < 0:
            self.actions_locked = True
        return self

    def will(self, response: t.Any) -> Action:
        """Add a single-use action and return it for ``.times()`` chaining."""
        return self._add_action(Action(response, 1, owner=self))

    def will_once(self, response: t.Any) -> Expectation:
        """Respond once with *response*."""
        self._add_action(Action(response, 1, owner=self))
        return self

    def will_twice(self, response: t.Any) -> Expectation:
        """Respond twice with *response*."""
        self._add_action(Action(response, 2, owner=self))
        return self

    def will_repeatedly(self, response: t.Any) -> Expectation:
        """Respond with *response* for every remaining call."""
        self._add_action(Action(response, UNBOUNDED, owner=self))
        return self

    def will_once_invoke(self, *cb_args: t.Any, **cb_kwargs: t.Any) -> Expectation:
        """Call the trailing callback argument once with *cb_args*."""
        self._add_action(Invoker(cb_args, 1, owner=self, cb_kwargs=cb_kwargs))
        return self

    def will_twice_invoke(self, *cb_args: t.Any, **cb_kwargs: t.Any) -> Expectation:
        """Call the trailing callback argument twice with *cb_args*."""
        self._add_action(Invoker(cb_args, 2, owner=self, cb_kwargs=cb_kwargs))
        return self

    def will_repeatedly_invoke(
        self, *cb_args: t.Any, **cb_kwargs: t.Any
    ) -> Expectation:
        """Call the trailing callback argument on every remaining call."""
        self._add_action(
            Invoker(cb_args, UNBOUNDED, owner=self, cb_kwargs=cb_kwargs)
        )
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def is_matching(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> bool:
        """Return ``True`` if the matcher accepts the call arguments."""
        return self.matcher.check(args, kwargs)

    def is_saturated(self) -> bool:
        """Return ``True`` once no further call is allowed."""
        return not self.cardinality.available()

    def validate(self) -> bool:
        """Return ``True`` when the observed call count is within bounds."""
        return self.cardinality.validate()

    def execute(
        self, args: t.Sequence[t.Any], kwargs: t.Mapping[str, t.Any] | None = None
    ) -> t.Any:
        """Consume one call and run the first available action, if any."""
        if not self.cardinality.use():
            msg = f"Expectation on {self.name!r} oversaturated"
            raise CardinalityExceededError(msg)
        if not self.actions:
            return None
        for action in self.actions:
            if action.available():
                return action.execute(args, kwargs)
        msg = f"Unable to find a valid action for {self.name!r}"
        raise NoAvailableActionError(msg)

    def describe(self) -> str:
        """Return a readable summary for failure messages."""
        card = self.cardinality
        return (
            f"{self.name}({self.matcher.describe()}) expected "
            f"{card.describe()}, called {card.counter}"
        )

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"<Expectation {self.describe()}>"
