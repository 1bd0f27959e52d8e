"""Pytest configuration and fixtures for cwboost tests."""

from __future__ import annotations

import numpy as np
import pytest

from cwboost.clock import ManualClock
from cwboost.losses import QuadraticLoss
from tests.fakes import ConstantLearner

_TEST_SEED = 42


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(_TEST_SEED)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def quadratic_loss() -> QuadraticLoss:
    return QuadraticLoss()


@pytest.fixture
def round_args():
    """Arguments of one boosting round, minus the round index."""
    response = np.array([1.0, 2.0, 3.0])
    prediction = np.zeros(3)
    learner = ConstantLearner("x1", 1.0)
    return response, prediction, learner, 0.0, 0.1
