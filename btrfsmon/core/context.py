"""Execution context for testability."""

import subprocess
from pathlib import Path


class Context:
    """
    Wraps external calls for testability.

    In production: runs the real btrfs tool and reads the real mount table
    In tests: can be replaced with MockContext
    """

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = None,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and return result.

        btrfs subcommands are expected to terminate on their own, so no
        timeout is applied unless the caller asks for one.

        Args:
            cmd: Command and arguments as list
            check: Raise on non-zero exit code
            timeout: Timeout in seconds, None to wait indefinitely
            **kwargs: Additional subprocess.run arguments

        Returns:
            CompletedProcess with stdout, stderr, returncode
        """
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=check,
            timeout=timeout,
            **kwargs,
        )

    def read_file(self, path: str) -> str:
        """Read file contents."""
        return Path(path).read_text()
