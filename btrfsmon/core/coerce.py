"""
Typed conversion of tokenized string fields.

Every coercer takes the field name along with the raw string so a failure
can say which sub-field was bad. Failures raise CoercionError; nothing here
returns a silent default except where a field is declared optional.
"""

import re
import time
from datetime import datetime, timedelta
from types import MappingProxyType


class CoercionError(Exception):
    """A sub-field failed its typed conversion."""

    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}: cannot convert {value!r}: {reason}")


STATUS_UNKNOWN = -1

STATUS_CODES = MappingProxyType({
    "running": 0,
    "finished": 1,
    "aborted": 2,
    "interrupted": 3,
})

# btrfs prints e.g. "Sun Jan 26 10:00:00 2025", padding single-digit days
SCRUB_TIME_FORMAT = "%a %b %d %H:%M:%S %Y"

# All multiples are binary, whatever the spelling
BYTE_UNITS = MappingProxyType({
    "B": 1,
    "K": 1024, "KB": 1024, "KIB": 1024,
    "M": 1024 ** 2, "MB": 1024 ** 2, "MIB": 1024 ** 2,
    "G": 1024 ** 3, "GB": 1024 ** 3, "GIB": 1024 ** 3,
    "T": 1024 ** 4, "TB": 1024 ** 4, "TIB": 1024 ** 4,
    "P": 1024 ** 5, "PB": 1024 ** 5, "PIB": 1024 ** 5,
    "E": 1024 ** 6, "EB": 1024 ** 6, "EIB": 1024 ** 6,
})

INTEGER = re.compile(r"[+-]?[0-9]+")


def to_int(field: str, value: str) -> int:
    """Parse a base-10 signed integer written in ASCII digits."""
    raw = value.strip()
    if not INTEGER.fullmatch(raw):
        raise CoercionError(field, value, "not a base-10 integer")
    return int(raw, 10)


def to_optional_int(field: str, value: str) -> int:
    """Parse an integer, reading an empty field as zero."""
    if not value.strip():
        return 0
    return to_int(field, value)


def to_float(field: str, value: str) -> float:
    """Parse a decimal floating point number."""
    try:
        return float(value.strip())
    except ValueError:
        raise CoercionError(field, value, "not a decimal number") from None


def parse_size_to_bytes(field: str, value: str) -> int:
    """
    Parse a human-readable byte quantity such as "12.34GiB" or "512M".

    A bare number is a count of bytes. The result is truncated to an int.
    """
    size_str = value.strip().upper()
    split = next((i for i, ch in enumerate(size_str) if ch.isalpha()), len(size_str))
    number, unit = size_str[:split].strip(), size_str[split:] or "B"

    multiplier = BYTE_UNITS.get(unit)
    if multiplier is None:
        raise CoercionError(field, value, f"unknown unit {unit!r}")

    try:
        quantity = float(number)
    except ValueError:
        raise CoercionError(field, value, "not a byte quantity") from None
    if quantity < 0:
        raise CoercionError(field, value, "negative byte quantity")

    return int(quantity * multiplier)


def parse_rate_to_bytes(field: str, value: str) -> int:
    """Parse a per-second byte rate such as "208.73MiB/s"."""
    raw = value.strip()
    if raw.endswith("/s"):
        raw = raw[:-2]
    return parse_size_to_bytes(field, raw)


def parse_duration(field: str, value: str) -> int:
    """Parse an "H:MM:SS" duration into whole seconds."""
    parts = value.strip().split(":")
    if len(parts) != 3:
        raise CoercionError(field, value, "expected H:MM:SS")
    try:
        hours, minutes, seconds = (int(p, 10) for p in parts)
    except ValueError:
        raise CoercionError(field, value, "expected H:MM:SS") from None
    if min(hours, minutes, seconds) < 0:
        raise CoercionError(field, value, "negative duration component")

    return int(timedelta(hours=hours, minutes=minutes, seconds=seconds).total_seconds())


def format_duration(seconds: int) -> str:
    """Render seconds in the H:MM:SS form btrfs prints."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def parse_timestamp(field: str, value: str) -> int:
    """Parse a scrub start time, in local time, to epoch seconds."""
    try:
        parsed = time.strptime(value.strip(), SCRUB_TIME_FORMAT)
    except ValueError:
        raise CoercionError(field, value, f"expected {SCRUB_TIME_FORMAT!r}") from None
    return int(time.mktime(parsed))


def format_timestamp(epoch: int) -> str:
    """Render epoch seconds in local time the way btrfs does."""
    moment = datetime.fromtimestamp(epoch)
    return f"{moment:%a %b} {moment.day} {moment:%H:%M:%S %Y}"


def status_code(value: str) -> int:
    """Map a scrub status word to its code."""
    return STATUS_CODES.get(value.strip(), STATUS_UNKNOWN)
