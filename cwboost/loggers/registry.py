"""Logger registry for cwboost.

The registry is the only thing the boosting loop talks to. It fans every
round out to its loggers, combines their stop criteria and assembles the
status line and the logged table.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from cwboost.exceptions import ConfigurationError, LoggerStateError
from cwboost.loggers.base import Logger

if TYPE_CHECKING:
    from cwboost.protocol import BaseLearner

_logger = logging.getLogger(__name__)

# Separator between columns of the status line and its header
COLUMN_SEPARATOR = " | "


@dataclass
class LoggedTable:
    """Logged series of all loggers, one column per logger.

    Attributes:
        names: Logger names in registration order
        data: Array of shape (num_rounds, len(names))
    """

    names: list[str]
    data: np.ndarray

    @property
    def num_rounds(self) -> int:
        return self.data.shape[0]

    def column(self, name: str) -> np.ndarray:
        """Series logged by the logger registered as `name`."""
        try:
            index = self.names.index(name)
        except ValueError:
            raise KeyError(f"No logger named {name!r}, available: {self.names}") from None
        return self.data[:, index]

    def to_dict(self) -> dict[str, list[float]]:
        return {name: self.data[:, i].tolist() for i, name in enumerate(self.names)}

    def to_csv(self, path: str | Path) -> None:
        """Write the table with a header row of logger names."""
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(self.names)
            writer.writerows(self.data.tolist())


class LoggerRegistry:
    """Insertion-ordered collection of named loggers.

    By default training stops as soon as any stopper reached its criterion.
    With `stop_if_all_stoppers_fulfilled=True` every stopper has to agree.
    Loggers that are not stoppers never influence the decision; without
    any stopper the registry never asks to stop.

    Example:
        >>> registry = LoggerRegistry()
        >>> registry.add("iterations", IterationLogger(True, max_iterations=500))
        >>> registry.add("train_risk", TrainRiskLogger(False, QuadraticLoss(), 0.0))
        >>> for k in range(1, 10_000):
        ...     ...  # fit and select a base learner, update prediction
        ...     registry.log_step(k, y, prediction, learner, offset, learning_rate)
        ...     if registry.should_stop():
        ...         break
    """

    def __init__(
        self,
        loggers: dict[str, Logger] | None = None,
        stop_if_all_stoppers_fulfilled: bool = False,
    ) -> None:
        self._loggers: dict[str, Logger] = {}
        self.stop_if_all_stoppers_fulfilled = stop_if_all_stoppers_fulfilled
        if loggers:
            for name, logger in loggers.items():
                self.add(name, logger)

    def add(self, name: str, logger: Logger) -> None:
        """Register a logger under a unique name.

        Raises:
            ConfigurationError: If the name is empty or taken, or logger is
                not a `Logger`
        """
        if not name:
            raise ConfigurationError("Logger name must be a non-empty string")
        if name in self._loggers:
            raise ConfigurationError(f"A logger named {name!r} is already registered")
        if not isinstance(logger, Logger):
            raise ConfigurationError(
                f"Expected a Logger for {name!r}, got {type(logger).__name__}"
            )
        self._loggers[name] = logger

    def remove(self, name: str) -> Logger:
        """Unregister and return the logger registered as `name`."""
        return self._loggers.pop(name)

    def __getitem__(self, name: str) -> Logger:
        return self._loggers[name]

    def __contains__(self, name: object) -> bool:
        return name in self._loggers

    def __iter__(self) -> Iterator[str]:
        return iter(self._loggers)

    def __len__(self) -> int:
        return len(self._loggers)

    def items(self) -> list[tuple[str, Logger]]:
        return list(self._loggers.items())

    def stoppers(self) -> list[str]:
        """Names of the loggers that take part in the stop decision."""
        return [name for name, logger in self._loggers.items() if logger.is_a_stopper]

    # ==================== Per-round hooks ====================

    def log_step(
        self,
        current_iteration: int,
        response: np.ndarray,
        prediction: np.ndarray,
        used_learner: BaseLearner,
        offset: float,
        learning_rate: float,
    ) -> None:
        """Log the current round with every logger in registration order.

        A round is all-or-nothing: if any logger raises, the loggers that
        already logged this round are rolled back before the error
        propagates, so all series keep the same length.
        """
        logged: list[Logger] = []
        for logger in self._loggers.values():
            length_before = len(logger)
            try:
                logger.log_step(
                    current_iteration, response, prediction, used_learner, offset, learning_rate
                )
            except Exception:
                if len(logger) > length_before:
                    logged.append(logger)
                for done in reversed(logged):
                    done._discard_last_step()
                _logger.debug(
                    "Round %d failed, rolled back %d loggers", current_iteration, len(logged)
                )
                raise
            logged.append(logger)

    def should_stop(self) -> bool:
        """Combine the stop criteria of all stoppers."""
        stoppers = [(n, lg) for n, lg in self._loggers.items() if lg.is_a_stopper]
        if not stoppers:
            return False

        fulfilled = [name for name, logger in stoppers if logger.reached_stop_criteria()]
        if self.stop_if_all_stoppers_fulfilled:
            stop = len(fulfilled) == len(stoppers)
        else:
            stop = bool(fulfilled)

        if stop:
            _logger.debug("Stop criteria reached by %s", ", ".join(fulfilled))
        return stop

    # ==================== Output ====================

    def column_widths(self) -> dict[str, int]:
        """Width of every column of the status line, keyed by logger name."""
        return {
            name: max(logger.status_width, len(name)) for name, logger in self._loggers.items()
        }

    def print_status_line(self) -> str:
        """Latest status of all loggers as one line, aligned with the header."""
        widths = self.column_widths()
        return COLUMN_SEPARATOR.join(
            logger.print_logger_status().rjust(widths[name])
            for name, logger in self._loggers.items()
        )

    def get_logged_table(self) -> LoggedTable:
        """Collect the logged series of all loggers into one table.

        Raises:
            LoggerStateError: If the loggers logged different numbers of rounds
        """
        names = list(self._loggers)
        series = [logger.get_logged_data() for logger in self._loggers.values()]

        lengths = {name: len(s) for name, s in zip(names, series)}
        if len(set(lengths.values())) > 1:
            raise LoggerStateError(f"Loggers logged different numbers of rounds: {lengths}")

        if not series:
            return LoggedTable(names=[], data=np.empty((0, 0), dtype=np.float64))
        return LoggedTable(names=names, data=np.column_stack(series))

    def clear_logger_data(self) -> None:
        """Clear every logger before the registry is reused for retraining."""
        for logger in self._loggers.values():
            logger.clear_logger_data()
        _logger.debug("Cleared data of %d loggers", len(self._loggers))

    def __repr__(self) -> str:
        entries = ", ".join(f"{name!r}: {logger!r}" for name, logger in self._loggers.items())
        return f"LoggerRegistry({{{entries}}})"


__all__ = ["COLUMN_SEPARATOR", "LoggedTable", "LoggerRegistry"]
