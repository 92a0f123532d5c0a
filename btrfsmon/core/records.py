"""
Record variants.

One frozen dataclass per kind of row. Each is populated from a tokenized row
by ``from_row``, which applies the coercion rules for that variant and
raises CoercionError naming the sub-field that failed.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Sequence

from btrfsmon.core.coerce import (
    CoercionError,
    parse_duration,
    parse_rate_to_bytes,
    parse_size_to_bytes,
    parse_timestamp,
    status_code,
    to_float,
    to_int,
    to_optional_int,
)

Row = Sequence[str]


def cell(row: Row, index: int) -> str:
    """Field at index, or "" when the row is shorter."""
    if index < len(row):
        value = row[index]
        return value if isinstance(value, str) else " ".join(value)
    return ""


class DeviceStatsColumns:
    """Column indices of the device stats template."""

    DEVICE = 0
    WRITE_IO_ERRS = 1
    READ_IO_ERRS = 2
    FLUSH_IO_ERRS = 3
    CORRUPTION_ERRS = 4
    GENERATION_ERRS = 5


class UsageColumns:
    """Column indices of the filesystem usage template."""

    SIZE = 0
    ALLOCATED = 1
    UNALLOCATED = 2
    MISSING = 3
    USED = 4
    FREE_ESTIMATED = 5
    FREE_ESTIMATED_MIN = 6
    DATA_RATIO = 7
    METADATA_RATIO = 8
    GLOBAL_RESERVE = 9
    GLOBAL_RESERVE_USED = 10
    ASPECT = 11
    TYPE = 12
    ASPECT_SIZE = 13
    ASPECT_USED = 14
    ASPECT_USED_PERCENT = 15
    DEVICE = 16
    DEVICE_SIZE = 17


class ScrubColumns:
    """Column indices of the scrub status template."""

    DEVICE = 0
    DEVICE_ID = 1
    START = 2
    STATUS = 3
    DURATION = 4
    TOTAL = 5
    RATE = 6
    READ_ERRORS = 7
    SUPER_ERRORS = 8
    VERIFY_ERRORS = 9
    CSUM_ERRORS = 10
    CORRECTED_ERRORS = 11
    UNCORRECTABLE_ERRORS = 12
    UNVERIFIED_ERRORS = 13


@dataclass(frozen=True)
class DeviceErrorRecord:
    """Error counters of one device."""

    measurement: ClassVar[str] = "btrfs_device_errors"

    device: str
    write_io_errors: int
    read_io_errors: int
    flush_io_errors: int
    corruption_io_errors: int
    generation_io_errors: int

    @classmethod
    def from_row(cls, row: Row) -> "DeviceErrorRecord":
        c = DeviceStatsColumns
        return cls(
            device=cell(row, c.DEVICE),
            write_io_errors=to_int("write_io_errors", cell(row, c.WRITE_IO_ERRS)),
            read_io_errors=to_int("read_io_errors", cell(row, c.READ_IO_ERRS)),
            flush_io_errors=to_int("flush_io_errors", cell(row, c.FLUSH_IO_ERRS)),
            corruption_io_errors=to_int("corruption_io_errors", cell(row, c.CORRUPTION_ERRS)),
            generation_io_errors=to_int("generation_io_errors", cell(row, c.GENERATION_ERRS)),
        )

    def tags(self) -> dict[str, str]:
        return {"device": self.device}

    def fields(self) -> dict[str, Any]:
        return {
            "write_io_errors": self.write_io_errors,
            "read_io_errors": self.read_io_errors,
            "flush_io_errors": self.flush_io_errors,
            "corruption_io_errors": self.corruption_io_errors,
            "generation_io_errors": self.generation_io_errors,
        }


@dataclass(frozen=True)
class FilesystemOverallRecord:
    """The "Overall" block of filesystem usage."""

    measurement: ClassVar[str] = "btrfs_filesystem"

    size: int
    allocated: int
    unallocated: int
    missing: int
    used: int
    free_estimated: int
    free_estimated_min: int
    data_ratio: float
    metadata_ratio: float
    global_reserve: int
    global_reserve_used: int

    @classmethod
    def from_row(cls, row: Row) -> "FilesystemOverallRecord":
        c = UsageColumns
        return cls(
            size=to_int("filesystem_size", cell(row, c.SIZE)),
            allocated=to_int("filesystem_allocated", cell(row, c.ALLOCATED)),
            unallocated=to_int("filesystem_unallocated", cell(row, c.UNALLOCATED)),
            missing=to_int("filesystem_missing", cell(row, c.MISSING)),
            used=to_int("filesystem_used", cell(row, c.USED)),
            free_estimated=to_int("filesystem_free_estimated", cell(row, c.FREE_ESTIMATED)),
            free_estimated_min=to_int(
                "filesystem_free_estimated_min", cell(row, c.FREE_ESTIMATED_MIN)
            ),
            data_ratio=to_float("filesystem_data_ratio", cell(row, c.DATA_RATIO)),
            metadata_ratio=to_float("filesystem_metadata_ratio", cell(row, c.METADATA_RATIO)),
            global_reserve=to_int("filesystem_global_reserve", cell(row, c.GLOBAL_RESERVE)),
            global_reserve_used=to_int(
                "filesystem_global_reserve_used", cell(row, c.GLOBAL_RESERVE_USED)
            ),
        )

    def tags(self) -> dict[str, str]:
        return {"aspect": "Overall"}

    def fields(self) -> dict[str, Any]:
        return {
            "filesystem_size": self.size,
            "filesystem_allocated": self.allocated,
            "filesystem_unallocated": self.unallocated,
            "filesystem_missing": self.missing,
            "filesystem_used": self.used,
            "filesystem_free_estimated": self.free_estimated,
            "filesystem_free_estimated_min": self.free_estimated_min,
            "filesystem_data_ratio": self.data_ratio,
            "filesystem_metadata_ratio": self.metadata_ratio,
            "filesystem_global_reserve": self.global_reserve,
            "filesystem_global_reserve_used": self.global_reserve_used,
        }


@dataclass(frozen=True)
class FilesystemAspectSummaryRecord:
    """Size and use of one aspect (Data, Metadata, System) and its profile."""

    measurement: ClassVar[str] = "btrfs_filesystem"

    aspect: str
    type: str
    size: int
    used: int
    used_percent: float

    @classmethod
    def from_row(cls, row: Row) -> "FilesystemAspectSummaryRecord":
        c = UsageColumns
        return cls(
            aspect=cell(row, c.ASPECT),
            type=cell(row, c.TYPE),
            size=to_int("filesystem_size", cell(row, c.ASPECT_SIZE)),
            used=to_int("filesystem_used", cell(row, c.ASPECT_USED)),
            used_percent=to_float("filesystem_used_percent", cell(row, c.ASPECT_USED_PERCENT)),
        )

    def tags(self) -> dict[str, str]:
        return {"aspect": self.aspect, "type": self.type}

    def fields(self) -> dict[str, Any]:
        return {
            "filesystem_size": self.size,
            "filesystem_used": self.used,
            "filesystem_used_percent": self.used_percent,
        }


@dataclass(frozen=True)
class FilesystemAspectDeviceRecord:
    """Space one device contributes to an aspect."""

    measurement: ClassVar[str] = "btrfs_filesystem"

    aspect: str
    device: str
    device_size: int

    @classmethod
    def from_row(cls, row: Row) -> "FilesystemAspectDeviceRecord":
        c = UsageColumns
        return cls(
            aspect=cell(row, c.ASPECT),
            device=cell(row, c.DEVICE),
            device_size=to_int("device_size", cell(row, c.DEVICE_SIZE)),
        )

    def tags(self) -> dict[str, str]:
        return {"aspect": self.aspect, "device": self.device}

    def fields(self) -> dict[str, Any]:
        return {"device_size": self.device_size}


@dataclass(frozen=True)
class ScrubStatusRecord:
    """Last scrub of one device."""

    measurement: ClassVar[str] = "btrfs_scrub"

    device: str
    device_id: str
    start: int
    status: int
    duration: int
    total: int
    rate: int
    read_errors: int
    super_errors: int
    verify_errors: int
    checksum_errors: int
    corrected_errors: int
    uncorrectable_errors: int
    unverified_errors: int

    @classmethod
    def from_row(cls, row: Row) -> "ScrubStatusRecord":
        c = ScrubColumns
        optional = {
            "read_errors": cell(row, c.READ_ERRORS),
            "super_errors": cell(row, c.SUPER_ERRORS),
            "verify_errors": cell(row, c.VERIFY_ERRORS),
            "checksum_errors": cell(row, c.CSUM_ERRORS),
        }
        mandatory = {
            "corrected_errors": cell(row, c.CORRECTED_ERRORS),
            "uncorrectable_errors": cell(row, c.UNCORRECTABLE_ERRORS),
            "unverified_errors": cell(row, c.UNVERIFIED_ERRORS),
        }

        counters = {name: to_optional_int(name, raw) for name, raw in optional.items()}

        # No error summary at all ("no errors found") reads as a zero cluster;
        # once any counter is reported the trailing three must be present.
        block_absent = not any(v.strip() for v in optional.values())
        if block_absent and not any(v.strip() for v in mandatory.values()):
            counters.update({name: 0 for name in mandatory})
        else:
            counters.update({name: to_int(name, raw) for name, raw in mandatory.items()})

        return cls(
            device=cell(row, c.DEVICE),
            device_id=cell(row, c.DEVICE_ID),
            start=parse_timestamp("start", cell(row, c.START)),
            status=status_code(cell(row, c.STATUS)),
            duration=parse_duration("duration", cell(row, c.DURATION)),
            total=parse_size_to_bytes("total", cell(row, c.TOTAL)),
            rate=parse_rate_to_bytes("rate", cell(row, c.RATE)),
            **counters,
        )

    def tags(self) -> dict[str, str]:
        return {"device": self.device, "device_id": self.device_id}

    def fields(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "status": self.status,
            "duration": self.duration,
            "total": self.total,
            "rate": self.rate,
            "read_errors": self.read_errors,
            "super_errors": self.super_errors,
            "verify_errors": self.verify_errors,
            "checksum_errors": self.checksum_errors,
            "corrected_errors": self.corrected_errors,
            "uncorrectable_errors": self.uncorrectable_errors,
            "unverified_errors": self.unverified_errors,
        }
