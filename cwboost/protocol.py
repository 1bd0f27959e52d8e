"""Protocol definitions for cwboost collaborators.

The loggers only need a small slice of the surrounding boosting system: a loss
that can be evaluated per observation and a base learner that can predict new
data and tell which feature data it was fitted on. Using protocols enables
structural subtyping (duck typing) so any object with these methods works.

Loggers borrow these objects. They never mutate them and never extend their
lifetime; the training session that owns them must outlive every logger.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class LossEvaluator(Protocol):
    """Protocol for losses used to compute an empirical risk.

    Example:
        >>> class SquaredError:
        ...     def elementwise_loss(self, response, prediction):
        ...         return (response - prediction) ** 2
    """

    def elementwise_loss(self, response: np.ndarray, prediction: np.ndarray) -> np.ndarray:
        """Evaluate the loss for every observation.

        Args:
            response: Observed response vector
            prediction: Model prediction with the same shape as response

        Returns:
            Loss per observation. Aggregating evaluators (e.g. AUC) may
            return a single-element array instead.
        """
        ...


@runtime_checkable
class BaseLearner(Protocol):
    """Protocol for the base learner selected in a boosting round."""

    def predict(self, data: Any) -> np.ndarray:
        """Predict the given feature data.

        Args:
            data: Feature data matching this learner's data identifier

        Returns:
            Prediction vector, one value per observation
        """
        ...

    def get_data_identifier(self) -> Hashable:
        """Key of the feature data this learner was fitted on."""
        ...


__all__ = ["BaseLearner", "LossEvaluator"]
