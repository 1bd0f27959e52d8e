"""Tests for the reference loss evaluators."""

from __future__ import annotations

import numpy as np
import pytest

from cwboost.losses import AbsoluteLoss, AUCLoss, BinomialLoss, QuadraticLoss
from cwboost.protocol import LossEvaluator


@pytest.mark.parametrize("loss", [QuadraticLoss(), AbsoluteLoss(), BinomialLoss(), AUCLoss()])
def test_losses_satisfy_protocol(loss):
    assert isinstance(loss, LossEvaluator)


class TestElementwiseLosses:
    """Tests for per-observation losses."""

    def test_quadratic(self):
        loss = QuadraticLoss().elementwise_loss(np.array([1.0, 2.0]), np.array([0.0, 4.0]))
        np.testing.assert_allclose(loss, [0.5, 2.0])

    def test_absolute(self):
        loss = AbsoluteLoss().elementwise_loss(np.array([1.0, 2.0]), np.array([0.0, 4.0]))
        np.testing.assert_allclose(loss, [1.0, 2.0])

    def test_binomial(self):
        loss = BinomialLoss().elementwise_loss(np.array([1.0, -1.0]), np.array([0.0, 0.5]))
        np.testing.assert_allclose(loss, [np.log(2.0), np.log(1.0 + np.e)])

    def test_binomial_large_margin_is_finite(self):
        loss = BinomialLoss().elementwise_loss(np.array([-1.0]), np.array([1000.0]))
        assert np.isfinite(loss).all()
        assert loss[0] == pytest.approx(2000.0)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="same shape"):
            QuadraticLoss().elementwise_loss(np.zeros(2), np.zeros(3))


class TestAUCLoss:
    """Tests for AUCLoss."""

    def test_perfect_ranking(self):
        loss = AUCLoss().elementwise_loss(np.array([-1.0, 1.0, 1.0]), np.array([0.1, 0.5, 0.9]))
        np.testing.assert_allclose(loss, [0.0])

    def test_inverted_ranking(self):
        loss = AUCLoss().elementwise_loss(np.array([1.0, -1.0]), np.array([0.1, 0.9]))
        np.testing.assert_allclose(loss, [1.0])

    def test_ties_count_half(self):
        loss = AUCLoss().elementwise_loss(np.array([-1.0, 1.0]), np.array([0.3, 0.3]))
        np.testing.assert_allclose(loss, [0.5])

    def test_single_class(self):
        with pytest.raises(ValueError, match="positive and one negative"):
            AUCLoss().elementwise_loss(np.ones(3), np.zeros(3))
