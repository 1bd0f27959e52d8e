"""Custom exception hierarchy for cwboost.

All cwboost specific exceptions inherit from CwBoostError,
making it easy to catch any library-specific error.
"""

from __future__ import annotations


class CwBoostError(Exception):
    """Base exception for all cwboost errors.

    Example:
        try:
            registry.log_step(k, y, pred, learner, offset, 0.05)
        except CwBoostError as e:
            print(f"cwboost error: {e}")
    """

    pass


class ConfigurationError(CwBoostError):
    """Invalid logger or registry configuration.

    Raised when:
        - Time unit is not one of 'seconds', 'minutes' or 'microseconds'
        - An iteration or time budget is negative
        - A logger name is registered twice
        - Held-out response is empty or not one-dimensional
    """

    pass


class MissingFeatureError(CwBoostError, LookupError):
    """Held-out data has no entry for the selected base learner.

    Raised when:
        - The identifier returned by `get_data_identifier()` of the
          selected base learner is not a key of the held-out data mapping

    The round is aborted and no logger state is changed.
    """

    def __init__(self, identifier: object, available: list[object]) -> None:
        self.identifier = identifier
        self.available = available
        super().__init__(
            f"No held-out data for base learner data identifier {identifier!r}. "
            f"Available identifiers: {available}"
        )


class LoggerStateError(CwBoostError):
    """Logger state does not satisfy an operation's precondition.

    Raised when:
        - A status is requested from a logger that has not logged a round
        - Logged series of different lengths are combined into one table
    """

    pass


__all__ = [
    "CwBoostError",
    "ConfigurationError",
    "MissingFeatureError",
    "LoggerStateError",
]
