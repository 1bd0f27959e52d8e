"""Logger configurations for cwboost.

Each logger type has a dataclass holding its plain configuration values.
Collaborators that a logger borrows (loss evaluator, held-out data, clock)
are not part of the configuration; they are handed to `build_logger`.

Example:
    >>> config = config_from_dict({"type": "time", "is_a_stopper": True, "max_time": 60})
    >>> logger = build_logger(config)
    >>> logger
    TimeLogger(is_a_stopper=True, max_time=60, time_unit='seconds')
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any, ClassVar, Self

from cwboost.exceptions import ConfigurationError
from cwboost.loggers.elapsed import TimeLogger, TimeUnit
from cwboost.loggers.iteration import IterationLogger
from cwboost.loggers.risk import TrainRiskLogger, ValidationRiskLogger

if TYPE_CHECKING:
    import numpy as np

    from cwboost.clock import Clock
    from cwboost.loggers.base import Logger
    from cwboost.protocol import LossEvaluator


class LoggerConfig:
    """Base class for logger configurations.

    Subclasses are dataclasses and set `logger_type`, the name used in
    plain dictionaries to select the configuration class.
    """

    logger_type: ClassVar[str] = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Self:
        """Create a config from a dictionary.

        Only keys that correspond to fields are used, so a dictionary that
        also carries a "type" entry can be passed as is.
        """
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in valid_fields})

    def to_dict(self) -> dict[str, Any]:
        """Convert the config to a dictionary including its type name."""
        d = {"type": self.logger_type}
        d.update(asdict(self))
        return d


@dataclass
class IterationLoggerConfig(LoggerConfig):
    """Configuration of an `IterationLogger`."""

    logger_type: ClassVar[str] = "iteration"

    is_a_stopper: bool = True
    max_iterations: int = 100


@dataclass
class TrainRiskLoggerConfig(LoggerConfig):
    """Configuration of a `TrainRiskLogger`."""

    logger_type: ClassVar[str] = "train_risk"

    is_a_stopper: bool = False
    eps_for_break: float = 0.0


@dataclass
class ValidationRiskLoggerConfig(LoggerConfig):
    """Configuration of a `ValidationRiskLogger`."""

    logger_type: ClassVar[str] = "validation_risk"

    is_a_stopper: bool = False
    eps_for_break: float = 0.0


@dataclass
class TimeLoggerConfig(LoggerConfig):
    """Configuration of a `TimeLogger`.

    The unit is validated here already so that a bad value surfaces when
    the configuration is read, not when the logger is built.
    """

    logger_type: ClassVar[str] = "time"

    is_a_stopper: bool = False
    max_time: int = 0
    time_unit: str = "seconds"

    def __post_init__(self) -> None:
        self.time_unit = TimeUnit.parse(self.time_unit).value


LOGGER_TYPES: dict[str, type[LoggerConfig]] = {
    cfg.logger_type: cfg
    for cfg in (
        IterationLoggerConfig,
        TrainRiskLoggerConfig,
        ValidationRiskLoggerConfig,
        TimeLoggerConfig,
    )
}


def config_from_dict(d: dict[str, Any]) -> LoggerConfig:
    """Resolve a logger configuration from a dictionary with a "type" key.

    Raises:
        ConfigurationError: If the type is missing or unknown
    """
    logger_type = d.get("type")
    if logger_type not in LOGGER_TYPES:
        raise ConfigurationError(
            f"Unknown logger type {logger_type!r}, expected one of {sorted(LOGGER_TYPES)}"
        )
    return LOGGER_TYPES[logger_type].from_dict(d)


def build_logger(
    config: LoggerConfig,
    *,
    loss: LossEvaluator | None = None,
    held_out_data: Mapping[Hashable, Any] | None = None,
    held_out_response: np.ndarray | None = None,
    clock: Clock | None = None,
) -> Logger:
    """Build the logger described by `config`.

    Args:
        config: Logger configuration
        loss: Loss evaluator, required for risk loggers
        held_out_data: Held-out feature data, required for validation risk
        held_out_response: Held-out response, required for validation risk
        clock: Clock for time loggers, defaults to a monotonic clock

    Raises:
        ConfigurationError: If a collaborator the logger needs is missing
    """
    if isinstance(config, IterationLoggerConfig):
        return IterationLogger(config.is_a_stopper, config.max_iterations)

    if isinstance(config, TimeLoggerConfig):
        return TimeLogger(config.is_a_stopper, config.max_time, config.time_unit, clock=clock)

    if loss is None:
        raise ConfigurationError(
            f"A loss evaluator is required to build a {config.logger_type} logger"
        )

    if isinstance(config, TrainRiskLoggerConfig):
        return TrainRiskLogger(config.is_a_stopper, loss, config.eps_for_break)

    if isinstance(config, ValidationRiskLoggerConfig):
        if held_out_data is None or held_out_response is None:
            raise ConfigurationError(
                "held_out_data and held_out_response are required to build a validation_risk logger"
            )
        return ValidationRiskLogger(
            config.is_a_stopper, loss, config.eps_for_break, held_out_data, held_out_response
        )

    raise ConfigurationError(f"No logger for configuration {type(config).__name__}")


__all__ = [
    "LOGGER_TYPES",
    "IterationLoggerConfig",
    "LoggerConfig",
    "TimeLoggerConfig",
    "TrainRiskLoggerConfig",
    "ValidationRiskLoggerConfig",
    "build_logger",
    "config_from_dict",
]
