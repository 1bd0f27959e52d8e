"""Reference loss evaluators for risk logging.

Every class here implements the `LossEvaluator` protocol. Risk loggers
average whatever `elementwise_loss` returns, so a loss that aggregates
(like `AUCLoss`) simply returns a single-element array.
"""

from __future__ import annotations

import numpy as np


def _as_vectors(response: np.ndarray, prediction: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    response = np.asarray(response, dtype=np.float64)
    prediction = np.asarray(prediction, dtype=np.float64)
    if response.shape != prediction.shape:
        raise ValueError(
            f"response and prediction must have the same shape, "
            f"got {response.shape} and {prediction.shape}"
        )
    return response, prediction


class QuadraticLoss:
    """Squared error loss, `0.5 * (y - f)^2`."""

    def elementwise_loss(self, response: np.ndarray, prediction: np.ndarray) -> np.ndarray:
        response, prediction = _as_vectors(response, prediction)
        return 0.5 * (response - prediction) ** 2

    def __repr__(self) -> str:
        return "QuadraticLoss()"


class AbsoluteLoss:
    """Absolute error loss, `|y - f|`."""

    def elementwise_loss(self, response: np.ndarray, prediction: np.ndarray) -> np.ndarray:
        response, prediction = _as_vectors(response, prediction)
        return np.abs(response - prediction)

    def __repr__(self) -> str:
        return "AbsoluteLoss()"


class BinomialLoss:
    """Binomial loss for labels in {-1, 1}, `log(1 + exp(-2 y f))`.

    Uses `np.logaddexp` so large margins do not overflow.
    """

    def elementwise_loss(self, response: np.ndarray, prediction: np.ndarray) -> np.ndarray:
        response, prediction = _as_vectors(response, prediction)
        return np.logaddexp(0.0, -2.0 * response * prediction)

    def __repr__(self) -> str:
        return "BinomialLoss()"


class AUCLoss:
    """One minus the area under the ROC curve for labels in {-1, 1}.

    The AUC is computed from the Mann-Whitney U statistic with tied scores
    sharing their average rank. Returns a single-element array, so the
    tracked risk is exactly `1 - AUC`.
    """

    def elementwise_loss(self, response: np.ndarray, prediction: np.ndarray) -> np.ndarray:
        response, prediction = _as_vectors(response, prediction)

        positive = response > 0
        n_pos = int(positive.sum())
        n_neg = response.size - n_pos
        if n_pos == 0 or n_neg == 0:
            raise ValueError("AUC needs at least one positive and one negative label")

        order = np.argsort(prediction, kind="mergesort")
        _, inverse, counts = np.unique(prediction[order], return_inverse=True, return_counts=True)
        ends = np.cumsum(counts)
        average_rank = (ends - counts + 1 + ends) / 2.0

        ranks = np.empty(response.size, dtype=np.float64)
        ranks[order] = average_rank[inverse]

        u_statistic = ranks[positive].sum() - n_pos * (n_pos + 1) / 2.0
        auc = u_statistic / (n_pos * n_neg)
        return np.array([1.0 - auc])

    def __repr__(self) -> str:
        return "AUCLoss()"


__all__ = ["AUCLoss", "AbsoluteLoss", "BinomialLoss", "QuadraticLoss"]
