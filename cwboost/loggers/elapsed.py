"""Elapsed time logger for cwboost."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from cwboost.clock import Clock, MonotonicClock
from cwboost.exceptions import ConfigurationError
from cwboost.loggers.base import FIXED_STATUS_WIDTH, Logger

if TYPE_CHECKING:
    from cwboost.protocol import BaseLearner


class TimeUnit(str, Enum):
    """Granularity of the elapsed time recorded by `TimeLogger`."""

    MINUTES = "minutes"
    SECONDS = "seconds"
    MICROSECONDS = "microseconds"

    @property
    def nanoseconds(self) -> int:
        """Length of one unit in nanoseconds."""
        return _UNIT_NANOSECONDS[self]

    @classmethod
    def parse(cls, value: TimeUnit | str) -> TimeUnit:
        """Resolve a unit from its name.

        Raises:
            ConfigurationError: If value is not a known unit
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(repr(u.value) for u in cls)
            raise ConfigurationError(
                f"Time unit has to be one of {allowed}, got {value!r}"
            ) from None


_UNIT_NANOSECONDS = {
    TimeUnit.MINUTES: 60_000_000_000,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.MICROSECONDS: 1_000,
}


class TimeLogger(Logger):
    """Track the time elapsed since the first logged round.

    The clock starts on the first `log_step`, so that round logs zero
    (or the time spent inside the first call, which truncates to zero for
    any unit but microseconds). Elapsed time is truncated to whole units.

    Example:
        >>> logger = TimeLogger(is_a_stopper=True, max_time=120, time_unit="seconds")
    """

    def __init__(
        self,
        is_a_stopper: bool,
        max_time: int,
        time_unit: TimeUnit | str = TimeUnit.SECONDS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the time logger.

        Args:
            is_a_stopper: Use the time budget as stopping criterion
            max_time: Budget in `time_unit` after which training stops
            time_unit: One of "minutes", "seconds" or "microseconds"
            clock: Source of monotonic instants, defaults to
                `MonotonicClock`

        Raises:
            ConfigurationError: If time_unit is unknown or max_time negative
        """
        super().__init__(is_a_stopper)
        self.time_unit = TimeUnit.parse(time_unit)
        if max_time < 0:
            raise ConfigurationError(f"max_time must be non-negative, got {max_time}")
        self.max_time = int(max_time)
        self.clock = clock if clock is not None else MonotonicClock()

        self._start_ns: int | None = None
        self.elapsed_samples: list[int] = []

    def log_step(
        self,
        current_iteration: int,
        response: np.ndarray,
        prediction: np.ndarray,
        used_learner: BaseLearner,
        offset: float,
        learning_rate: float,
    ) -> None:
        now = self.clock.now_ns()
        if self._start_ns is None:
            self._start_ns = now
        self.elapsed_samples.append((now - self._start_ns) // self.time_unit.nanoseconds)

    def reached_stop_criteria(self) -> bool:
        if not self.is_a_stopper or not self.elapsed_samples:
            return False
        return self.elapsed_samples[-1] >= self.max_time

    def get_logged_data(self) -> np.ndarray:
        return np.asarray(self.elapsed_samples, dtype=np.float64)

    def clear_logger_data(self) -> None:
        self.elapsed_samples.clear()
        self._start_ns = None

    def _discard_last_step(self) -> None:
        self.elapsed_samples.pop()
        if not self.elapsed_samples:
            self._start_ns = None

    @property
    def status_width(self) -> int:
        return FIXED_STATUS_WIDTH

    def print_logger_status(self) -> str:
        self._require_entries()
        return self._format_fixed(self.elapsed_samples[-1])

    def __len__(self) -> int:
        return len(self.elapsed_samples)

    def __repr__(self) -> str:
        return (
            f"TimeLogger(is_a_stopper={self.is_a_stopper}, max_time={self.max_time}, "
            f"time_unit={self.time_unit.value!r})"
        )
