"""Empirical risk loggers for cwboost.

Both loggers track the mean of a loss evaluator's elementwise loss once per
round. `TrainRiskLogger` uses the training response and the current model
prediction; `ValidationRiskLogger` keeps its own running prediction on
held-out data that it updates with the selected base learner of each round.

Both stop when the relative improvement of the risk between the last two
rounds,

    (risk[m-1] - risk[m]) / risk[m-1],

falls to `eps_for_break` or below. Averaging the elementwise loss means the
logged loss can differ from the one used for fitting; an evaluator returning
a single value per call (like `AUCLoss`) is logged as is.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING, Any

import numpy as np

from cwboost.exceptions import ConfigurationError, LoggerStateError, MissingFeatureError
from cwboost.loggers.base import FIXED_STATUS_WIDTH, Logger

if TYPE_CHECKING:
    from cwboost.protocol import BaseLearner, LossEvaluator

_logger = logging.getLogger(__name__)


def empirical_risk(loss: LossEvaluator, response: np.ndarray, prediction: np.ndarray) -> float:
    """Mean of the elementwise loss over a response/prediction pair."""
    return float(np.mean(loss.elementwise_loss(response, prediction)))


def relative_improvement(previous: float, current: float) -> float | None:
    """Fractional decrease of the risk from `previous` to `current`.

    A negative previous risk is taken by absolute value so that a decrease
    is still a positive improvement.

    Returns:
        The relative improvement, or None if `previous` is zero and the
        ratio is undefined
    """
    if previous == 0:
        return None
    return (previous - current) / abs(previous)


class _RiskLogger(Logger):
    """Shared bookkeeping of the training and validation risk loggers."""

    def __init__(self, is_a_stopper: bool, loss: LossEvaluator, eps_for_break: float) -> None:
        super().__init__(is_a_stopper)
        self.loss = loss
        self.eps_for_break = float(eps_for_break)
        self.tracked_risk: list[float] = []
        # Number of logged rounds when the undefined-ratio warning was last emitted
        self._warned_at: int | None = None

    def reached_stop_criteria(self) -> bool:
        if not self.is_a_stopper or len(self.tracked_risk) < 2:
            return False

        improvement = relative_improvement(self.tracked_risk[-2], self.tracked_risk[-1])
        if improvement is None:
            if self._warned_at != len(self.tracked_risk):
                _logger.warning(
                    "%s: previous risk is zero, relative improvement is undefined; not stopping",
                    self.__class__.__name__,
                )
                self._warned_at = len(self.tracked_risk)
            return False
        return improvement <= self.eps_for_break

    def get_logged_data(self) -> np.ndarray:
        return np.asarray(self.tracked_risk, dtype=np.float64)

    def clear_logger_data(self) -> None:
        self.tracked_risk.clear()
        self._warned_at = None

    def _discard_last_step(self) -> None:
        self.tracked_risk.pop()
        self._warned_at = None

    @property
    def status_width(self) -> int:
        return FIXED_STATUS_WIDTH

    def print_logger_status(self) -> str:
        self._require_entries()
        return self._format_fixed(self.tracked_risk[-1])

    def __len__(self) -> int:
        return len(self.tracked_risk)


class TrainRiskLogger(_RiskLogger):
    """Track the empirical risk on the training data.

    Example:
        >>> logger = TrainRiskLogger(is_a_stopper=True, loss=QuadraticLoss(), eps_for_break=1e-4)
    """

    def __init__(self, is_a_stopper: bool, loss: LossEvaluator, eps_for_break: float) -> None:
        """Initialize the training risk logger.

        Args:
            is_a_stopper: Use the relative improvement as stopping criterion
            loss: Loss evaluator used for the risk (borrowed, must outlive
                the logger)
            eps_for_break: Stop once the relative improvement is at or
                below this value
        """
        super().__init__(is_a_stopper, loss, eps_for_break)

    def log_step(
        self,
        current_iteration: int,
        response: np.ndarray,
        prediction: np.ndarray,
        used_learner: BaseLearner,
        offset: float,
        learning_rate: float,
    ) -> None:
        self.tracked_risk.append(empirical_risk(self.loss, response, prediction))

    def __repr__(self) -> str:
        return (
            f"TrainRiskLogger(is_a_stopper={self.is_a_stopper}, loss={self.loss!r}, "
            f"eps_for_break={self.eps_for_break})"
        )


class ValidationRiskLogger(_RiskLogger):
    """Track the empirical risk on held-out data.

    The logger rebuilds the model prediction on the held-out data round by
    round: it starts at the offset and adds the selected base learner's
    prediction, shrunk by the learning rate. The base learner is matched to
    its held-out feature data through `get_data_identifier()`.

    Example:
        >>> logger = ValidationRiskLogger(
        ...     is_a_stopper=True,
        ...     loss=QuadraticLoss(),
        ...     eps_for_break=0.0,
        ...     held_out_data={"x1": x1_test, "x2": x2_test},
        ...     held_out_response=y_test,
        ... )
    """

    def __init__(
        self,
        is_a_stopper: bool,
        loss: LossEvaluator,
        eps_for_break: float,
        held_out_data: Mapping[Hashable, Any],
        held_out_response: np.ndarray,
    ) -> None:
        """Initialize the validation risk logger.

        Args:
            is_a_stopper: Use the relative improvement as stopping criterion
            loss: Loss evaluator used for the risk (borrowed)
            eps_for_break: Stop once the relative improvement is at or
                below this value
            held_out_data: Feature data keyed by base learner data
                identifier (borrowed, never modified)
            held_out_response: Response of the held-out observations

        Raises:
            ConfigurationError: If held_out_response is empty or not a vector
        """
        super().__init__(is_a_stopper, loss, eps_for_break)

        response = np.array(held_out_response, dtype=np.float64)
        if response.ndim != 1 or response.size == 0:
            raise ConfigurationError(
                f"held_out_response must be a non-empty vector, got shape {response.shape}"
            )
        response.setflags(write=False)

        self.held_out_data = held_out_data
        self.held_out_response = response
        self._held_out_prediction = np.zeros_like(response)
        self._anchored = False
        # State before the latest round, restored by _discard_last_step
        self._previous: tuple[np.ndarray, bool] | None = None

    @property
    def held_out_prediction(self) -> np.ndarray:
        """Copy of the current model prediction on the held-out data."""
        return self._held_out_prediction.copy()

    def log_step(
        self,
        current_iteration: int,
        response: np.ndarray,
        prediction: np.ndarray,
        used_learner: BaseLearner,
        offset: float,
        learning_rate: float,
    ) -> None:
        identifier = used_learner.get_data_identifier()
        try:
            learner_data = self.held_out_data[identifier]
        except KeyError:
            raise MissingFeatureError(identifier, list(self.held_out_data)) from None

        learner_prediction = np.asarray(used_learner.predict(learner_data), dtype=np.float64)
        learner_prediction = learner_prediction.reshape(-1)
        if learner_prediction.shape != self.held_out_response.shape:
            raise ValueError(
                f"Base learner for {identifier!r} predicted {learner_prediction.size} values "
                f"for {self.held_out_response.size} held-out observations"
            )

        # Work on a copy so a failing loss leaves the running prediction untouched
        if self._anchored:
            updated = self._held_out_prediction.copy()
        else:
            updated = np.full_like(self.held_out_response, offset)
        updated += learning_rate * learner_prediction

        risk = empirical_risk(self.loss, self.held_out_response, updated)

        self._previous = (self._held_out_prediction, self._anchored)
        self._held_out_prediction = updated
        self._anchored = True
        self.tracked_risk.append(risk)

    def clear_logger_data(self) -> None:
        super().clear_logger_data()
        self._held_out_prediction = np.zeros_like(self.held_out_response)
        self._anchored = False
        self._previous = None

    def _discard_last_step(self) -> None:
        if self._previous is None:
            raise LoggerStateError("ValidationRiskLogger has no round to discard")
        super()._discard_last_step()
        self._held_out_prediction, self._anchored = self._previous
        self._previous = None

    def __repr__(self) -> str:
        return (
            f"ValidationRiskLogger(is_a_stopper={self.is_a_stopper}, loss={self.loss!r}, "
            f"eps_for_break={self.eps_for_break}, "
            f"held_out_identifiers={list(self.held_out_data)}, "
            f"n_held_out={self.held_out_response.size})"
        )
