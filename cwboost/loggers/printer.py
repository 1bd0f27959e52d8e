"""Console status output for cwboost.

`format_header` builds the column header matching
`LoggerRegistry.print_status_line`, and `StatusPrinter` prints both while a
model trains.
"""

from __future__ import annotations

import sys
from typing import TextIO

from cwboost.loggers.registry import COLUMN_SEPARATOR, LoggerRegistry


def format_header(registry: LoggerRegistry) -> str:
    """Logger names right-justified to the width of their status columns."""
    widths = registry.column_widths()
    return COLUMN_SEPARATOR.join(name.rjust(widths[name]) for name in registry)


class StatusPrinter:
    """Print training progress as an aligned table.

    The header is printed before the first status line. A status line is
    printed for round 1 and then every `refresh_rate` rounds.

    Example:
        >>> printer = StatusPrinter(registry, refresh_rate=20)
        >>> for k in range(1, max_rounds + 1):
        ...     registry.log_step(k, y, prediction, learner, offset, learning_rate)
        ...     printer.on_round(k)
        ...     if registry.should_stop():
        ...         printer.on_stop(k)
        ...         break

        Output:
         iterations |        train_risk
              1/100 |              0.52
             20/100 |              0.31
    """

    def __init__(
        self,
        registry: LoggerRegistry,
        refresh_rate: int = 20,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the status printer.

        Args:
            registry: Registry whose loggers are printed
            refresh_rate: Print a status line every N rounds
            stream: Output stream, defaults to stdout at print time
        """
        if refresh_rate < 1:
            raise ValueError(f"refresh_rate must be at least 1, got {refresh_rate}")
        self.registry = registry
        self.refresh_rate = refresh_rate
        self.stream = stream
        self._header_printed = False

    def on_round(self, current_iteration: int) -> None:
        """Print the status of a finished round if it is due."""
        if current_iteration != 1 and current_iteration % self.refresh_rate != 0:
            return
        if not self._header_printed:
            self._print(format_header(self.registry))
            self._header_printed = True
        self._print(self.registry.print_status_line())

    def on_stop(self, current_iteration: int) -> None:
        """Print a summary once the registry asked to stop."""
        stoppers = [
            name for name in self.registry.stoppers()
            if self.registry[name].reached_stop_criteria()
        ]
        self._print(
            f"\nTraining stopped after {current_iteration} rounds "
            f"(criteria reached: {', '.join(stoppers)})"
        )

    def reset(self) -> None:
        """Print the header again, e.g. before retraining."""
        self._header_printed = False

    def _print(self, line: str) -> None:
        print(line, file=self.stream if self.stream is not None else sys.stdout, flush=True)


__all__ = ["StatusPrinter", "format_header"]
