"""Process utilities."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from btrfsmon.core.context import Context


class CommandError(Exception):
    """Error running a command."""

    pass


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
) -> str:
    """
    Run a command and return its output.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be started or exits non-zero
    """
    if context is None:
        from btrfsmon.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, check=False)
    except OSError as e:
        raise CommandError(f"Command failed: {cmd}: {e}") from e

    if result.returncode != 0:
        detail = (result.stderr or "").strip()
        raise CommandError(f"Command failed: {cmd}: exit {result.returncode} {detail}".rstrip())

    return result.stdout
