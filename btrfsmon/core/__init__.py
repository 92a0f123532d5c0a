"""Core btrfsmon functionality."""

from btrfsmon.core.classify import StructuralError, classify_usage_row, is_end_of_section
from btrfsmon.core.coerce import CoercionError, STATUS_CODES, STATUS_UNKNOWN
from btrfsmon.core.context import Context
from btrfsmon.core.logging import Logger
from btrfsmon.core.output import Output
from btrfsmon.core.pipeline import RowSource, SourceError
from btrfsmon.core.points import MetricPoint, assemble_point

__all__ = [
    "CoercionError",
    "Context",
    "Logger",
    "MetricPoint",
    "Output",
    "RowSource",
    "STATUS_CODES",
    "STATUS_UNKNOWN",
    "SourceError",
    "StructuralError",
    "assemble_point",
    "classify_usage_row",
    "is_end_of_section",
]
