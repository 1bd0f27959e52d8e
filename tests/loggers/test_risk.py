"""Tests for TrainRiskLogger and the relative improvement rule."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from cwboost.exceptions import LoggerStateError
from cwboost.loggers import TrainRiskLogger
from cwboost.loggers.risk import empirical_risk, relative_improvement
from cwboost.losses import AUCLoss
from tests.fakes import ConstantLearner, ScriptedLoss


def _log_rounds(logger, n_rounds):
    learner = ConstantLearner("x1", 0.0)
    response = np.zeros(2)
    for k in range(1, n_rounds + 1):
        logger.log_step(k, response, np.zeros(2), learner, 0.0, 0.1)


class TestRelativeImprovement:
    """Tests for relative_improvement."""

    def test_decrease(self):
        assert relative_improvement(1.0, 0.9) == pytest.approx(0.1)

    def test_increase_is_negative(self):
        assert relative_improvement(1.0, 1.2) == pytest.approx(-0.2)

    def test_zero_previous_is_undefined(self):
        assert relative_improvement(0.0, 0.0) is None

    def test_negative_previous_uses_magnitude(self):
        """Test that a decrease from a negative risk is still an improvement."""
        assert relative_improvement(-2.0, -3.0) == pytest.approx(0.5)


class TestTrainRiskLogger:
    """Tests for TrainRiskLogger."""

    def test_logs_mean_elementwise_loss(self, quadratic_loss):
        """Test that the risk is the mean of the quadratic loss."""
        logger = TrainRiskLogger(is_a_stopper=False, loss=quadratic_loss, eps_for_break=0.0)
        response = np.array([1.0, 2.0, 3.0, 4.0])
        learner = ConstantLearner("x1", 0.0)

        logger.log_step(1, response, np.zeros(4), learner, 0.0, 0.1)
        logger.log_step(2, response, response - 1.0, learner, 0.0, 0.1)

        np.testing.assert_allclose(logger.get_logged_data(), [0.5 * 30 / 4, 0.5])

    def test_stops_on_plateau(self):
        """Test the stopping rule on risks [1.0, 0.9, 0.87] with eps 0.05."""
        logger = TrainRiskLogger(
            is_a_stopper=True, loss=ScriptedLoss([1.0, 0.9, 0.87]), eps_for_break=0.05
        )

        _log_rounds(logger, 1)
        assert not logger.reached_stop_criteria()

        _log_rounds(logger, 1)
        assert not logger.reached_stop_criteria()  # improvement 0.10

        _log_rounds(logger, 1)
        assert logger.reached_stop_criteria()  # improvement 0.0333

    def test_improvement_equal_to_eps_stops(self):
        logger = TrainRiskLogger(True, ScriptedLoss([1.0, 0.5]), eps_for_break=0.5)
        _log_rounds(logger, 2)
        assert logger.reached_stop_criteria()

    def test_increasing_risk_stops(self):
        """Test that a worse risk counts as no improvement."""
        logger = TrainRiskLogger(True, ScriptedLoss([1.0, 1.1]), eps_for_break=0.0)
        _log_rounds(logger, 2)
        assert logger.reached_stop_criteria()

    def test_non_stopper_never_stops(self):
        logger = TrainRiskLogger(False, ScriptedLoss([1.0, 1.0, 1.0]), eps_for_break=0.5)
        _log_rounds(logger, 3)
        assert not logger.reached_stop_criteria()

    def test_zero_previous_risk_does_not_stop(self, caplog):
        """Test the undefined ratio is reported and does not stop training."""
        logger = TrainRiskLogger(True, ScriptedLoss([0.0, 0.0]), eps_for_break=0.1)
        _log_rounds(logger, 2)

        with caplog.at_level(logging.WARNING, logger="cwboost.loggers.risk"):
            assert not logger.reached_stop_criteria()

        assert "relative improvement is undefined" in caplog.text

    def test_zero_previous_risk_warns_once_per_round(self, caplog):
        """Test that repeated stop queries on the same round warn only once."""
        logger = TrainRiskLogger(True, ScriptedLoss([0.0, 0.0, 0.0]), eps_for_break=0.1)
        _log_rounds(logger, 2)

        with caplog.at_level(logging.WARNING, logger="cwboost.loggers.risk"):
            for _ in range(3):
                assert not logger.reached_stop_criteria()
            assert len(caplog.records) == 1

            _log_rounds(logger, 1)
            assert not logger.reached_stop_criteria()
            assert len(caplog.records) == 2

    def test_discard_last_step(self):
        logger = TrainRiskLogger(True, ScriptedLoss([1.0, 0.99, 0.5]), eps_for_break=0.05)
        _log_rounds(logger, 2)
        assert logger.reached_stop_criteria()

        logger._discard_last_step()
        _log_rounds(logger, 1)

        np.testing.assert_array_equal(logger.get_logged_data(), [1.0, 0.5])
        assert not logger.reached_stop_criteria()

    def test_clear_resets_state(self):
        logger = TrainRiskLogger(True, ScriptedLoss([1.0, 1.0, 5.0]), eps_for_break=0.0)
        _log_rounds(logger, 2)
        assert logger.reached_stop_criteria()

        logger.clear_logger_data()

        assert len(logger) == 0
        assert not logger.reached_stop_criteria()
        _log_rounds(logger, 1)
        np.testing.assert_array_equal(logger.get_logged_data(), [5.0])

    def test_status_is_fixed_width(self):
        logger = TrainRiskLogger(False, ScriptedLoss([0.123456]), eps_for_break=0.0)
        _log_rounds(logger, 1)

        status = logger.print_logger_status()

        assert status == " " * 13 + "0.12"
        assert len(status) == logger.status_width == 17

    def test_status_without_rounds_raises(self, quadratic_loss):
        logger = TrainRiskLogger(False, quadratic_loss, eps_for_break=0.0)
        with pytest.raises(LoggerStateError):
            logger.print_logger_status()

    def test_scalar_loss_is_logged_as_is(self):
        """Test that an aggregating evaluator like AUC can be tracked."""
        response = np.array([-1.0, -1.0, 1.0, 1.0])
        prediction = np.array([0.1, 0.4, 0.35, 0.8])
        logger = TrainRiskLogger(False, AUCLoss(), eps_for_break=0.0)

        logger.log_step(1, response, prediction, ConstantLearner("x1", 0.0), 0.0, 0.1)

        assert logger.get_logged_data()[0] == pytest.approx(0.25)
        assert empirical_risk(AUCLoss(), response, prediction) == pytest.approx(0.25)

    def test_does_not_modify_inputs(self, quadratic_loss):
        response = np.array([1.0, 2.0])
        prediction = np.array([0.5, 0.5])
        logger = TrainRiskLogger(False, quadratic_loss, eps_for_break=0.0)

        logger.log_step(1, response, prediction, ConstantLearner("x1", 0.0), 0.0, 0.1)

        np.testing.assert_array_equal(response, [1.0, 2.0])
        np.testing.assert_array_equal(prediction, [0.5, 0.5])
