"""Per-device scrub results from `btrfs scrub status -d`."""

import time

from btrfsmon.core.classify import is_end_of_section
from btrfsmon.core.coerce import CoercionError
from btrfsmon.core.logging import Logger
from btrfsmon.core.output import Output
from btrfsmon.core.pipeline import RowSource
from btrfsmon.core.points import assemble_point
from btrfsmon.core.records import ScrubColumns, ScrubStatusRecord

from btrfsmon.collectors.common import skip_row


FAMILY = "scrub_status"
OP = "parse_scrub_status"
COMMAND = ["btrfs", "scrub", "status", "-d"]


def parse_scrub_status(
    mount: str,
    output: str,
    template_path: str,
    emitter: Output,
    logger: Logger,
    timestamp: int | None = None,
) -> int:
    """
    Emit one btrfs_scrub point per device.

    Consumption stops at the first row without a device id. Error counters
    missing from a device block read as zero.

    Returns:
        Number of points emitted

    Raises:
        SourceError: If the tokenizer fails
    """
    ts = timestamp if timestamp is not None else time.time_ns()
    emitted = 0

    with RowSource(template_path, output, family=FAMILY, mount=mount) as rows:
        for row in rows:
            if is_end_of_section(row, ScrubColumns.DEVICE_ID):
                break
            try:
                record = ScrubStatusRecord.from_row(row)
            except CoercionError as e:
                skip_row(logger, emitter, OP, FAMILY, mount, e)
                continue
            emitter.emit(assemble_point(record, mount, ts))
            emitted += 1

    return emitted
