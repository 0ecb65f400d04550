"""Call records shared by mocks and spies."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .formatting import format_call


@dc.dataclass(slots=True)
class Call:
    """A single intercepted call."""

    name: str
    args: tuple[t.Any, ...] = ()
    kwargs: dict[str, t.Any] = dc.field(default_factory=dict)

    def __str__(self) -> str:
        """Return the call rendered as ``name(arg1,arg2,...)``."""
        return format_call(self.name, self.args, self.kwargs)


@dc.dataclass(slots=True)
class SpyCall(Call):
    """A call forwarded to the original member, with its outcome."""

    result: t.Any = None
    error: BaseException | None = None
