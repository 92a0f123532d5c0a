"""Point emitter."""

import json
import sys
from typing import TextIO

from btrfsmon.core.points import MetricPoint


FORMATS = ("line", "json")


class Output:
    """
    Writes metric points as they are emitted.

    Points are not buffered: each one is rendered and written as soon as it
    is handed over. Errors and warnings are recorded for the run summary.
    """

    def __init__(self, format: str = "line", stream: TextIO | None = None):
        if format not in FORMATS:
            raise ValueError(f"Unknown output format: {format}")
        self.format = format
        self.stream = stream
        self.emitted: int = 0
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def render(self, point: MetricPoint) -> str:
        """Render one point in the configured format."""
        if self.format == "json":
            return json.dumps(point.to_dict(), sort_keys=True)
        return point.to_line_protocol()

    def emit(self, point: MetricPoint) -> None:
        """Write one point."""
        stream = self.stream if self.stream is not None else sys.stdout
        print(self.render(point), file=stream)
        self.emitted += 1

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    @property
    def summary(self) -> str:
        """One-line summary of the run."""
        if self.errors:
            return f"Error: {self.errors[0]}"
        if self.warnings:
            return f"{self.emitted} points, warning: {self.warnings[0]}"
        return f"{self.emitted} points"
