"""Capture, substitute and restore callable members of a target object."""

from __future__ import annotations

import dataclasses as dc
import enum
import functools
import inspect
import logging
import typing as t

from .errors import UnknownCallError

logger = logging.getLogger(__name__)

ShimFactory = t.Callable[["Member"], t.Callable[..., t.Any]]


class MemberKind(enum.StrEnum):
    """How a member is stored on its owner."""

    PLAIN = "plain"
    FUNCTION = "function"
    STATIC = "staticmethod"
    CLASS = "classmethod"


@dc.dataclass(slots=True)
class Member:
    """Snapshot of one callable member as found on the target."""

    name: str
    raw: t.Any
    own: bool
    kind: MemberKind
    callable: t.Callable[..., t.Any]


def _public_callables(target: object) -> list[str]:
    names: list[str] = []
    for name in dir(target):
        if name.startswith("_"):
            continue
        if isinstance(inspect.getattr_static(target, name, None), property):
            continue
        if callable(getattr(target, name, None)):
            names.append(name)
    return names


def _capture(target: object, name: str) -> Member:
    if isinstance(inspect.getattr_static(target, name, None), property):
        msg = f"{name!r} is a property of {target!r}, not a callable member"
        raise UnknownCallError(msg)
    try:
        bound = getattr(target, name)
    except AttributeError:
        msg = f"{target!r} has no member named {name!r}"
        raise UnknownCallError(msg) from None
    if not callable(bound):
        msg = f"Member {name!r} of {target!r} is not callable"
        raise UnknownCallError(msg)

    namespace = getattr(target, "__dict__", {})
    own = name in namespace
    raw = namespace[name] if own else bound
    kind = MemberKind.PLAIN
    if isinstance(target, type):
        raw_static = inspect.getattr_static(target, name)
        if isinstance(raw_static, staticmethod):
            kind = MemberKind.STATIC
        elif isinstance(raw_static, classmethod):
            kind = MemberKind.CLASS
        elif inspect.isfunction(raw_static):
            kind = MemberKind.FUNCTION
    return Member(name=name, raw=raw, own=own, kind=kind, callable=bound)


class MemberTable:
    """Explicit name-to-original table for one target.

    Members are snapshotted on construction. :meth:`install` replaces each
    of them with a shim built by a factory and :meth:`restore` replays the
    snapshot, either setting the original back or deleting the shim so that
    attribute lookup reaches the class again.
    """

    def __init__(self, target: object, names: t.Iterable[str] | None = None) -> None:
        self.target = target
        selected = _public_callables(target) if names is None else list(names)
        self.members: dict[str, Member] = {
            name: _capture(target, name) for name in selected
        }
        self.shims: dict[str, t.Callable[..., t.Any]] = {}
        self._installed = False

    def __contains__(self, name: object) -> bool:
        """Return ``True`` if *name* was captured."""
        return name in self.members

    @property
    def names(self) -> tuple[str, ...]:
        """Return the captured member names in capture order."""
        return tuple(self.members)

    @property
    def installed(self) -> bool:
        """Return ``True`` while shims are in place."""
        return self._installed

    def install(
        self, factory: ShimFactory, *, preserve_binding: bool = False
    ) -> None:
        """Replace every captured member with ``factory(member)``.

        On class targets shims are installed as static methods so that
        callers see only the call arguments. With *preserve_binding* plain
        instance methods stay plain functions, so ``self`` reaches the shim.
        """
        try:
            for name, member in self.members.items():
                shim = factory(member)
                functools.update_wrapper(shim, member.callable, updated=())
                self.shims[name] = shim
                setattr(self.target, name, self._wrap(member, shim, preserve_binding))
        except Exception:
            self._installed = True
            self.restore()
            raise
        self._installed = True
        logger.debug("Installed %d shims on %r", len(self.members), self.target)

    def _wrap(
        self,
        member: Member,
        shim: t.Callable[..., t.Any],
        preserve_binding: bool,  # noqa: FBT001
    ) -> t.Any:
        if not isinstance(self.target, type):
            return shim
        if preserve_binding and member.kind is MemberKind.FUNCTION:
            return shim
        return staticmethod(shim)

    def restore(self) -> None:
        """Put every original member back; safe to call repeatedly."""
        if not self._installed:
            return
        for name, member in self.members.items():
            if member.own:
                setattr(self.target, name, member.raw)
            elif name in getattr(self.target, "__dict__", {}):
                delattr(self.target, name)
        self.shims.clear()
        self._installed = False
        logger.debug("Restored %d members on %r", len(self.members), self.target)
