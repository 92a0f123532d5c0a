"""Helpers shared by the collectors."""

from btrfsmon.core.coerce import CoercionError
from btrfsmon.core.logging import Logger
from btrfsmon.core.output import Output


def skip_row(
    logger: Logger,
    emitter: Output,
    op: str,
    family: str,
    mount: str,
    error: CoercionError,
) -> None:
    """Record a row dropped because one of its fields did not convert."""
    logger.error(
        f"failed to convert {error.field}, skipping row",
        op=op,
        family=family,
        mount=mount,
        field=error.field,
        value=error.value,
        reason=error.reason,
    )
    emitter.warning(f"{family} {mount}: {error}")
