#!/usr/bin/env python3
"""Component-wise boosting example with loggers and early stopping.

This example fits a component-wise boosting model with one linear base
learner per feature on synthetic data. It shows how to:
- Register iteration, training risk, held-out risk and time loggers
- Stop on whichever stopper fires first
- Print an aligned progress table and export the logged table

Usage:
    # Stop after 500 rounds or on a held-out plateau
    python boosting_loop.py --rounds 500 --eps 1e-5

    # Add a 10 second time budget and save the log
    python boosting_loop.py --max-seconds 10 --csv boosting_log.csv
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from cwboost import LoggerRegistry, StatusPrinter
from cwboost.loggers import IterationLogger, TimeLogger, TrainRiskLogger, ValidationRiskLogger
from cwboost.losses import QuadraticLoss


class LinearBaseLearner:
    """Least squares line through the origin on one feature."""

    def __init__(self, feature: str, slope: float = 0.0) -> None:
        self.feature = feature
        self.slope = slope

    @classmethod
    def fit(cls, feature: str, x: np.ndarray, residuals: np.ndarray) -> LinearBaseLearner:
        return cls(feature, float(x @ residuals / (x @ x)))

    def predict(self, data: np.ndarray) -> np.ndarray:
        return self.slope * data

    def get_data_identifier(self) -> str:
        return self.feature


def make_data(n: int, seed: int) -> tuple[dict[str, np.ndarray], np.ndarray]:
    """Synthetic regression data where only x1 and x3 matter."""
    rng = np.random.default_rng(seed)
    features = {f"x{j}": rng.standard_normal(n) for j in range(1, 6)}
    response = 3.0 * features["x1"] - 2.0 * features["x3"] + rng.normal(scale=0.5, size=n) + 1.0
    return features, response


def train(
    registry: LoggerRegistry,
    features: dict[str, np.ndarray],
    response: np.ndarray,
    learning_rate: float,
    printer: StatusPrinter | None = None,
    max_rounds: int = 100_000,
) -> list[LinearBaseLearner]:
    """Run component-wise boosting until the registry asks to stop."""
    offset = float(response.mean())
    prediction = np.full_like(response, offset)
    selected: list[LinearBaseLearner] = []

    for k in range(1, max_rounds + 1):
        residuals = response - prediction
        candidates = [LinearBaseLearner.fit(name, x, residuals) for name, x in features.items()]
        best = min(
            candidates,
            key=lambda bl: np.sum((residuals - bl.predict(features[bl.feature])) ** 2),
        )
        prediction = prediction + learning_rate * best.predict(features[best.feature])
        selected.append(best)

        registry.log_step(k, response, prediction, best, offset, learning_rate)
        if printer is not None:
            printer.on_round(k)
        if registry.should_stop():
            if printer is not None:
                printer.on_stop(k)
            break

    return selected


def build_registry(
    held_out: dict[str, np.ndarray],
    held_out_response: np.ndarray,
    rounds: int,
    eps: float,
    max_seconds: int | None,
) -> LoggerRegistry:
    loss = QuadraticLoss()
    registry = LoggerRegistry()
    registry.add("iterations", IterationLogger(is_a_stopper=True, max_iterations=rounds))
    registry.add("train_risk", TrainRiskLogger(is_a_stopper=False, loss=loss, eps_for_break=0.0))
    registry.add(
        "held_out_risk",
        ValidationRiskLogger(
            is_a_stopper=True,
            loss=loss,
            eps_for_break=eps,
            held_out_data=held_out,
            held_out_response=held_out_response,
        ),
    )
    registry.add(
        "seconds",
        TimeLogger(
            is_a_stopper=max_seconds is not None,
            max_time=max_seconds or 0,
            time_unit="seconds",
        ),
    )
    return registry


def main() -> None:
    parser = argparse.ArgumentParser(description="Component-wise boosting with cwboost loggers")
    parser.add_argument("--rounds", type=int, default=500, help="Maximum number of rounds")
    parser.add_argument("--learning-rate", type=float, default=0.05)
    parser.add_argument("--eps", type=float, default=1e-5, help="Held-out plateau threshold")
    parser.add_argument("--max-seconds", type=int, default=None, help="Time budget")
    parser.add_argument("--refresh-rate", type=int, default=50)
    parser.add_argument("--csv", type=str, default=None, help="Write the logged table here")
    parser.add_argument("--verbose", action="store_true", help="Show debug log records")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    features, response = make_data(1000, seed=1)
    held_out, held_out_response = make_data(300, seed=2)

    registry = build_registry(held_out, held_out_response, args.rounds, args.eps, args.max_seconds)
    printer = StatusPrinter(registry, refresh_rate=args.refresh_rate)

    selected = train(registry, features, response, args.learning_rate, printer)

    counts: dict[str, int] = {}
    for learner in selected:
        counts[learner.feature] = counts.get(learner.feature, 0) + 1
    print(f"Selected base learners: {dict(sorted(counts.items()))}")

    if args.csv:
        registry.get_logged_table().to_csv(args.csv)
        print(f"Logged table written to {args.csv}")


if __name__ == "__main__":
    main()
