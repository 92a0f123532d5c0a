"""Capacity figures from `btrfs filesystem usage --raw`."""

import time

from btrfsmon.core.classify import StructuralError, classify_usage_row
from btrfsmon.core.coerce import CoercionError
from btrfsmon.core.logging import Logger
from btrfsmon.core.output import Output
from btrfsmon.core.pipeline import RowSource
from btrfsmon.core.points import assemble_point

from btrfsmon.collectors.common import skip_row


FAMILY = "filesystem_usage"
OP = "parse_filesystem_usage"
COMMAND = ["btrfs", "filesystem", "usage", "--raw"]


def parse_filesystem_usage(
    mount: str,
    output: str,
    template_path: str,
    emitter: Output,
    logger: Logger,
    timestamp: int | None = None,
) -> int:
    """
    Emit btrfs_filesystem points for the Overall block, each aspect summary
    and each device line under an aspect.

    Rows that populate none of the anchor columns are skipped.

    Returns:
        Number of points emitted

    Raises:
        SourceError: If the tokenizer fails
    """
    ts = timestamp if timestamp is not None else time.time_ns()
    emitted = 0

    with RowSource(template_path, output, family=FAMILY, mount=mount) as rows:
        for row in rows:
            try:
                variant = classify_usage_row(row)
            except StructuralError as e:
                logger.debug(
                    "row matches no record variant, skipping",
                    op=OP,
                    family=FAMILY,
                    mount=mount,
                    row=list(e.row),
                )
                continue

            try:
                record = variant.from_row(row)
            except CoercionError as e:
                skip_row(logger, emitter, OP, FAMILY, mount, e)
                continue

            emitter.emit(assemble_point(record, mount, ts))
            emitted += 1

    return emitted
