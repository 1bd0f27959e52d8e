"""Iteration logger for cwboost."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from cwboost.exceptions import ConfigurationError
from cwboost.loggers.base import Logger

if TYPE_CHECKING:
    from cwboost.protocol import BaseLearner


class IterationLogger(Logger):
    """Count boosting rounds and optionally stop after a fixed number.

    Example:
        >>> logger = IterationLogger(is_a_stopper=True, max_iterations=100)
        >>> registry.add("iterations", logger)
    """

    def __init__(self, is_a_stopper: bool, max_iterations: int) -> None:
        """Initialize the iteration logger.

        Args:
            is_a_stopper: Use the iteration budget as stopping criterion
            max_iterations: Number of rounds after which training stops

        Raises:
            ConfigurationError: If max_iterations is negative
        """
        super().__init__(is_a_stopper)
        if max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be non-negative, got {max_iterations}")
        self.max_iterations = int(max_iterations)
        self.iterations: list[int] = []

    def log_step(
        self,
        current_iteration: int,
        response: np.ndarray,
        prediction: np.ndarray,
        used_learner: BaseLearner,
        offset: float,
        learning_rate: float,
    ) -> None:
        self.iterations.append(int(current_iteration))

    def reached_stop_criteria(self) -> bool:
        if not self.is_a_stopper or not self.iterations:
            return False
        return self.iterations[-1] >= self.max_iterations

    def get_logged_data(self) -> np.ndarray:
        return np.asarray(self.iterations, dtype=np.float64)

    def clear_logger_data(self) -> None:
        self.iterations.clear()

    def _discard_last_step(self) -> None:
        self.iterations.pop()

    @property
    def status_width(self) -> int:
        return 2 * len(str(self.max_iterations)) + 1

    def print_logger_status(self) -> str:
        """Render `round/max_iterations` right-justified to `status_width`.

        The width only holds while the round has no more digits than
        `max_iterations`. A logger that is not a stopper and keeps logging
        past its budget (e.g. round 10 of 5) returns a wider string, and
        the status line is no longer aligned with its header.
        """
        self._require_entries()
        status = f"{self.iterations[-1]}/{self.max_iterations}"
        return status.rjust(self.status_width)

    def __len__(self) -> int:
        return len(self.iterations)

    def __repr__(self) -> str:
        return (
            f"IterationLogger(is_a_stopper={self.is_a_stopper}, "
            f"max_iterations={self.max_iterations})"
        )
