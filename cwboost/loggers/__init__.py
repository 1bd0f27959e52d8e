"""Loggers for cwboost."""

from cwboost.loggers.base import Logger
from cwboost.loggers.config import (
    LOGGER_TYPES,
    IterationLoggerConfig,
    LoggerConfig,
    TimeLoggerConfig,
    TrainRiskLoggerConfig,
    ValidationRiskLoggerConfig,
    build_logger,
    config_from_dict,
)
from cwboost.loggers.elapsed import TimeLogger, TimeUnit
from cwboost.loggers.iteration import IterationLogger
from cwboost.loggers.printer import StatusPrinter, format_header
from cwboost.loggers.registry import LoggedTable, LoggerRegistry
from cwboost.loggers.risk import TrainRiskLogger, ValidationRiskLogger

__all__ = [
    # Base
    "Logger",
    # Built-in loggers
    "IterationLogger",
    "TimeLogger",
    "TimeUnit",
    "TrainRiskLogger",
    "ValidationRiskLogger",
    # Composition and output
    "LoggedTable",
    "LoggerRegistry",
    "StatusPrinter",
    "format_header",
    # Configuration
    "LOGGER_TYPES",
    "IterationLoggerConfig",
    "LoggerConfig",
    "TimeLoggerConfig",
    "TrainRiskLoggerConfig",
    "ValidationRiskLoggerConfig",
    "build_logger",
    "config_from_dict",
]
