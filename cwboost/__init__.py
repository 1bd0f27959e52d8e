"""cwboost: monitoring and early stopping for component-wise boosting.

Loggers record one value per boosting round and may act as stoppers. A
`LoggerRegistry` combines them so the boosting loop only asks one question
per round: should training stop?

Example:
    >>> from cwboost import LoggerRegistry, StatusPrinter
    >>> from cwboost.loggers import IterationLogger, TrainRiskLogger, TimeLogger
    >>> from cwboost.losses import QuadraticLoss
    >>>
    >>> registry = LoggerRegistry()
    >>> registry.add("iterations", IterationLogger(is_a_stopper=True, max_iterations=1000))
    >>> registry.add("train_risk", TrainRiskLogger(False, QuadraticLoss(), eps_for_break=0.0))
    >>> registry.add("time", TimeLogger(is_a_stopper=True, max_time=60, time_unit="seconds"))
    >>> printer = StatusPrinter(registry)
    >>>
    >>> for k in range(1, 10_000):
    ...     learner = select_best_learner(pseudo_residuals)  # your boosting loop
    ...     prediction += learning_rate * learner.predict(train_data[learner.get_data_identifier()])
    ...     registry.log_step(k, y, prediction, learner, offset, learning_rate)
    ...     printer.on_round(k)
    ...     if registry.should_stop():
    ...         break
    >>> table = registry.get_logged_table()
"""

__version__ = "0.1.0"

from cwboost.clock import Clock, ManualClock, MonotonicClock
from cwboost.exceptions import (
    ConfigurationError,
    CwBoostError,
    LoggerStateError,
    MissingFeatureError,
)
from cwboost.loggers import Logger, LoggedTable, LoggerRegistry, StatusPrinter, format_header
from cwboost.protocol import BaseLearner, LossEvaluator

__all__ = [
    "__version__",
    "BaseLearner",
    "Clock",
    "ConfigurationError",
    "CwBoostError",
    "LoggedTable",
    "Logger",
    "LoggerRegistry",
    "LoggerStateError",
    "LossEvaluator",
    "ManualClock",
    "MissingFeatureError",
    "MonotonicClock",
    "StatusPrinter",
    "format_header",
]
