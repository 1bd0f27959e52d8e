"""Base logger class for cwboost.

A logger records one value per boosting round and, if it is a stopper,
decides whether the training loop should halt. The training loop never talks
to concrete loggers; it goes through a `LoggerRegistry` that only relies on
the interface defined here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cwboost.exceptions import LoggerStateError

if TYPE_CHECKING:
    import numpy as np

    from cwboost.protocol import BaseLearner

# Width of the status field for loggers that print a fixed point value
FIXED_STATUS_WIDTH = 17


class Logger(ABC):
    """Base class for all loggers in cwboost.

    Subclasses must append exactly one entry per `log_step` call and must
    not look further back than the last two entries to decide on stopping.

    Example:
        >>> class OffsetLogger(Logger):
        ...     def __init__(self):
        ...         super().__init__(is_a_stopper=False)
        ...         self.offsets = []
        ...
        ...     def log_step(self, current_iteration, response, prediction,
        ...                  used_learner, offset, learning_rate):
        ...         self.offsets.append(offset)
        ...     ...
    """

    def __init__(self, is_a_stopper: bool) -> None:
        self._is_a_stopper = bool(is_a_stopper)

    @property
    def is_a_stopper(self) -> bool:
        """Whether this logger's criterion takes part in the stop decision."""
        return self._is_a_stopper

    @abstractmethod
    def log_step(
        self,
        current_iteration: int,
        response: np.ndarray,
        prediction: np.ndarray,
        used_learner: BaseLearner,
        offset: float,
        learning_rate: float,
    ) -> None:
        """Log the current boosting round.

        Args:
            current_iteration: Index of the current round, starting at 1
            response: Response vector used for training
            prediction: Prediction of the boosting model at this round
            used_learner: Base learner selected in this round (borrowed)
            offset: Overall offset of the model
            learning_rate: Learning rate applied in this round
        """
        pass

    @abstractmethod
    def reached_stop_criteria(self) -> bool:
        """Whether training should stop.

        Always `False` if the logger is not a stopper or nothing has been
        logged yet.
        """
        pass

    @abstractmethod
    def get_logged_data(self) -> np.ndarray:
        """Return the logged series as a float64 vector in round order."""
        pass

    @abstractmethod
    def clear_logger_data(self) -> None:
        """Forget everything logged so far.

        Must be called before a logger is reused to retrain a model,
        otherwise the new rounds are appended to the old ones.
        """
        pass

    @abstractmethod
    def print_logger_status(self) -> str:
        """Render the latest entry into exactly `status_width` characters."""
        pass

    @property
    @abstractmethod
    def status_width(self) -> int:
        """Width of the field produced by `print_logger_status`."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Number of rounds logged since construction or the last clear."""
        pass

    @abstractmethod
    def _discard_last_step(self) -> None:
        """Undo the most recent `log_step`.

        Used by `LoggerRegistry` to roll back a round that failed in a
        later logger. Only the last round ever needs to be undone.
        """
        pass

    def _require_entries(self) -> None:
        if len(self) == 0:
            raise LoggerStateError(
                f"{self.__class__.__name__} has not logged any round yet, nothing to print"
            )

    @staticmethod
    def _format_fixed(value: float) -> str:
        return f"{value:>{FIXED_STATUS_WIDTH}.2f}"
