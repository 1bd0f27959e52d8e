"""Clock capability for elapsed-time measurement.

Time loggers never read the system clock directly. They receive a `Clock`
so that elapsed time can be driven deterministically in tests.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that reports a monotonic instant in nanoseconds."""

    def now_ns(self) -> int:
        ...


class MonotonicClock:
    """Clock backed by `time.monotonic_ns`."""

    def now_ns(self) -> int:
        return time.monotonic_ns()

    def __repr__(self) -> str:
        return "MonotonicClock()"


class ManualClock:
    """Clock that only moves when told to.

    Example:
        >>> clock = ManualClock()
        >>> clock.advance(seconds=2)
        >>> clock.now_ns()
        2000000000
    """

    def __init__(self, start_ns: int = 0) -> None:
        self._now_ns = start_ns

    def now_ns(self) -> int:
        return self._now_ns

    def advance(
        self,
        *,
        minutes: float = 0,
        seconds: float = 0,
        microseconds: float = 0,
        nanoseconds: int = 0,
    ) -> None:
        """Move the clock forward.

        Raises:
            ValueError: If the total step is negative
        """
        step = (
            round(minutes * 60_000_000_000)
            + round(seconds * 1_000_000_000)
            + round(microseconds * 1_000)
            + nanoseconds
        )
        if step < 0:
            raise ValueError(f"A monotonic clock cannot move backwards, got step of {step} ns")
        self._now_ns += step

    def __repr__(self) -> str:
        return f"ManualClock(now_ns={self._now_ns})"


__all__ = ["Clock", "ManualClock", "MonotonicClock"]
