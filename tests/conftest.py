"""Shared test fixtures."""

import io
import json
import subprocess
import sys
import time
from pathlib import Path

import pytest

# Add project root to path for package imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from btrfsmon.core.config import DEFAULTS  # noqa: E402
from btrfsmon.core.logging import Logger  # noqa: E402
from btrfsmon.core.output import Output  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DEVICE_STATS_TEMPLATE = DEFAULTS["template_device_stats"]
FILESYSTEM_USAGE_TEMPLATE = DEFAULTS["template_filesystem_usage"]
SCRUB_STATUS_TEMPLATE = DEFAULTS["template_scrub_status"]


class MockContext:
    """Mock Context for testing without real system access."""

    def __init__(
        self,
        command_outputs: dict[tuple, str | Exception] | None = None,
        file_contents: dict[str, str] | None = None,
    ):
        self.command_outputs = command_outputs or {}
        self.file_contents = file_contents or {}
        self.commands_run: list[list[str]] = []

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """Return mocked command output."""
        self.commands_run.append(cmd)
        key = tuple(cmd)
        if key not in self.command_outputs:
            raise KeyError(f"No mock output for command: {cmd}")

        output = self.command_outputs[key]
        if isinstance(output, Exception):
            raise output

        # Allow passing CompletedProcess directly (e.g., non-zero returncode)
        if isinstance(output, subprocess.CompletedProcess):
            return output

        return subprocess.CompletedProcess(
            cmd,
            returncode=0,
            stdout=output,
            stderr="",
        )

    def read_file(self, path: str) -> str:
        """Return mocked file content."""
        if path not in self.file_contents:
            raise FileNotFoundError(f"No mock content for: {path}")
        return self.file_contents[path]


class LogCapture:
    """Logger writing to memory, with the entries decoded for assertions."""

    def __init__(self, min_level: str = "debug"):
        self.stream = io.StringIO()
        self.logger = Logger("test", stream=self.stream, min_level=min_level)

    @property
    def entries(self) -> list[dict]:
        return [json.loads(line) for line in self.stream.getvalue().splitlines()]

    def at(self, level: str) -> list[dict]:
        return [e for e in self.entries if e["level"] == level]


@pytest.fixture
def mock_context():
    """Factory fixture for creating MockContext instances."""
    def _create(**kwargs) -> MockContext:
        return MockContext(**kwargs)
    return _create


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def log_capture() -> LogCapture:
    """In-memory JSONL logger."""
    return LogCapture()


@pytest.fixture
def emitter() -> Output:
    """Line protocol emitter writing to memory."""
    return Output(format="line", stream=io.StringIO())


@pytest.fixture
def utc(monkeypatch):
    """Run the test with the local time zone set to UTC."""
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def load_fixture(category: str, name: str) -> str:
    """Load a fixture file by category and name."""
    fixture_path = FIXTURES_DIR / category / name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture not found: {fixture_path}")
    return fixture_path.read_text()


def emitted_lines(emitter: Output) -> list[str]:
    """Lines written by an emitter built on a StringIO."""
    return emitter.stream.getvalue().splitlines()
