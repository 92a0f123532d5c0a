"""JSONL structured logging."""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO


# Log level ordering
LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}


class Logger:
    """
    JSONL logger.

    Writes one structured entry per line, to stderr unless a log file is
    given. Extra keyword arguments become top-level keys of the entry, so
    callers pass context such as ``op``, ``family`` and ``mount``.
    """

    def __init__(
        self,
        name: str,
        log_path: Path | None = None,
        stream: TextIO | None = None,
        min_level: str = "info",
    ):
        """
        Initialize logger.

        Args:
            name: Logger name recorded in every entry
            log_path: Append entries to this file instead of the stream
            stream: Stream to write to (default: sys.stderr)
            min_level: Entries below this level are dropped
        """
        if min_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {min_level}")
        self.name = name
        self.log_path = log_path
        self.min_level = min_level
        self._stream = stream
        self._file = None

    def _ensure_stream(self) -> TextIO:
        """Open the log file on first use."""
        if self.log_path is not None:
            if self._file is None:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(self.log_path, "a")
            return self._file
        return self._stream if self._stream is not None else sys.stderr

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if LOG_LEVELS[level] < LOG_LEVELS[self.min_level]:
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "logger": self.name,
            "message": message,
            **extra,
        }
        stream = self._ensure_stream()
        stream.write(json.dumps(entry, default=str) + "\n")
        stream.flush()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
