"""CallMox controller aggregating mocks and spies for one test."""

from __future__ import annotations

import enum
import logging
import typing as t

from .errors import LifecycleError, UnresolvedExpectationsError
from .formatting import format_sections
from .mock import Mock
from .spy import Spy

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    import types

logger = logging.getLogger(__name__)


class Phase(enum.StrEnum):
    """Lifecycle phases for :class:`CallMox`."""

    ACTIVE = "ACTIVE"
    VERIFIED = "VERIFIED"
    CLOSED = "CLOSED"


class CallMox:
    """Create doubles, verify them together and restore every target."""

    def __init__(self, *, verify_on_exit: bool = True) -> None:
        """Create a new controller.

        Parameters
        ----------
        verify_on_exit:
            When ``True`` (the default), :meth:`__exit__` calls :meth:`verify`
            if the ``with`` block finished without an exception. Cleanup
            happens either way.
        """
        self._verify_on_exit = verify_on_exit
        self._phase = Phase.ACTIVE
        self._mocks: list[Mock] = []
        self._spies: list[Spy] = []
        self._doubles: list[Mock | Spy] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        """Return the current lifecycle phase."""
        return self._phase

    @property
    def mocks(self) -> list[Mock]:
        """Return all mocks in creation order."""
        return list(self._mocks)

    @property
    def spies(self) -> list[Spy]:
        """Return all spies in creation order."""
        return list(self._spies)

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------
    def __enter__(self) -> CallMox:
        """Enter the context."""
        self._require_open("__enter__")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Optionally verify, then restore every target."""
        try:
            if (
                self._verify_on_exit
                and exc_type is None
                and self._phase is Phase.ACTIVE
            ):
                self.verify()
        finally:
            self.cleanup()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def _require_open(self, action: str) -> None:
        if self._phase is Phase.CLOSED:
            msg = f"Cannot call {action}(): controller already cleaned up"
            raise LifecycleError(msg)

    def mock(self, target: object, names: t.Iterable[str] | None = None) -> Mock:
        """Create a :class:`Mock` over *target* owned by this controller."""
        self._require_open("mock")
        double = Mock(target, names)
        self._mocks.append(double)
        self._doubles.append(double)
        self._phase = Phase.ACTIVE
        return double

    def spy(self, target: object, names: t.Iterable[str] | None = None) -> Spy:
        """Create a :class:`Spy` over *target* owned by this controller."""
        self._require_open("spy")
        double = Spy(target, names)
        self._spies.append(double)
        self._doubles.append(double)
        return double

    def verify(self) -> None:
        """Verify every mock, raising one error naming all unresolved calls."""
        self._require_open("verify")
        errors: list[UnresolvedExpectationsError] = []

        def collect(err: UnresolvedExpectationsError | None) -> None:
            if err is not None:
                errors.append(err)

        for double in self._mocks:
            double.verify(collect)
        self._phase = Phase.VERIFIED
        if not errors:
            return
        names = [name for err in errors for name in err.names]
        details = format_sections(
            "Unsatisfied mocks:",
            [(f"Mock {index}", str(err)) for index, err in enumerate(errors, 1)],
        )
        raise UnresolvedExpectationsError(names, details)

    def cleanup(self) -> None:
        """Restore every target in reverse creation order."""
        if self._phase is Phase.CLOSED:
            return
        failures: list[Exception] = []
        for double in reversed(self._doubles):
            try:
                double.cleanup()
            except Exception as exc:  # noqa: BLE001 - restore the rest first
                logger.exception("Failed to restore %r", double.target)
                failures.append(exc)
        self._phase = Phase.CLOSED
        if failures:
            raise failures[0]
