"""Device error counters from `btrfs device stats`."""

import time

from btrfsmon.core.classify import is_end_of_section
from btrfsmon.core.coerce import CoercionError
from btrfsmon.core.logging import Logger
from btrfsmon.core.output import Output
from btrfsmon.core.pipeline import RowSource
from btrfsmon.core.points import assemble_point
from btrfsmon.core.records import DeviceErrorRecord, DeviceStatsColumns

from btrfsmon.collectors.common import skip_row


FAMILY = "device_stats"
OP = "parse_device_stats"
COMMAND = ["btrfs", "device", "stats"]


def parse_device_stats(
    mount: str,
    output: str,
    template_path: str,
    emitter: Output,
    logger: Logger,
    timestamp: int | None = None,
) -> int:
    """
    Emit one btrfs_device_errors point per device.

    Args:
        mount: Mount path the output belongs to
        output: stdout of `btrfs device stats <mount>`
        template_path: TextFSM template for the output
        emitter: Receives each assembled point
        logger: Structured logger
        timestamp: Shared nanosecond timestamp (default: now)

    Returns:
        Number of points emitted

    Raises:
        SourceError: If the tokenizer fails
    """
    ts = timestamp if timestamp is not None else time.time_ns()
    emitted = 0

    with RowSource(template_path, output, family=FAMILY, mount=mount) as rows:
        for row in rows:
            if is_end_of_section(row, DeviceStatsColumns.DEVICE):
                break
            try:
                record = DeviceErrorRecord.from_row(row)
            except CoercionError as e:
                skip_row(logger, emitter, OP, FAMILY, mount, e)
                continue
            emitter.emit(assemble_point(record, mount, ts))
            emitted += 1

    return emitted
