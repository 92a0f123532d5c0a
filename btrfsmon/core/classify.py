"""Row classification by anchor columns."""

from btrfsmon.core.records import (
    FilesystemAspectDeviceRecord,
    FilesystemAspectSummaryRecord,
    FilesystemOverallRecord,
    Row,
    UsageColumns,
    cell,
)


class StructuralError(Exception):
    """A row matches no known record variant."""

    def __init__(self, row: Row):
        self.row = tuple(row)
        super().__init__(f"row matches no record variant: {self.row!r}")


# Tested in order; the first non-empty anchor wins
USAGE_ANCHORS = (
    (UsageColumns.SIZE, FilesystemOverallRecord),
    (UsageColumns.TYPE, FilesystemAspectSummaryRecord),
    (UsageColumns.DEVICE, FilesystemAspectDeviceRecord),
)


def classify_usage_row(row: Row) -> type:
    """
    Decide which filesystem usage variant a row encodes.

    Args:
        row: Tokenized filesystem usage row

    Returns:
        The record class for the row

    Raises:
        StructuralError: If no anchor column is populated
    """
    for index, variant in USAGE_ANCHORS:
        if cell(row, index).strip():
            return variant
    raise StructuralError(row)


def is_end_of_section(row: Row, anchor: int) -> bool:
    """True when the anchor column is empty, marking the end of the rows."""
    return not cell(row, anchor).strip()
