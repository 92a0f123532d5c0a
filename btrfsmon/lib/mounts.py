"""btrfs mount enumeration."""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from btrfsmon.core.context import Context


MOUNTS_FILE = "/proc/self/mounts"

# Field positions in a mounts(5) line
DEVICE_IDX = 0
MOUNT_IDX = 1
TYPE_IDX = 2

OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class MountError(Exception):
    """Error reading the mount table."""

    pass


def unescape_mount_field(value: str) -> str:
    """Decode the octal escapes (\\040 for space etc.) used in mounts(5)."""
    return OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), value)


def parse_btrfs_mounts(content: str) -> list[str]:
    """
    Extract btrfs mount points from mount table text.

    Only the first mount point of each device is kept, so subvolumes of
    one filesystem are collected once.
    """
    mounts = []
    seen_devices = set()

    for line in content.splitlines():
        fields = line.split()
        if len(fields) <= TYPE_IDX:
            continue
        if fields[TYPE_IDX] != "btrfs":
            continue

        device = unescape_mount_field(fields[DEVICE_IDX])
        if device in seen_devices:
            continue
        seen_devices.add(device)
        mounts.append(unescape_mount_field(fields[MOUNT_IDX]))

    return mounts


def get_btrfs_mounts(context: "Context | None" = None) -> list[str]:
    """
    List mounted btrfs filesystems, one mount point per device.

    Raises:
        MountError: If the mount table cannot be read
    """
    if context is None:
        from btrfsmon.core.context import Context
        context = Context()

    try:
        content = context.read_file(MOUNTS_FILE)
    except OSError as e:
        raise MountError(f"Failed to read {MOUNTS_FILE}: {e}") from e

    return parse_btrfs_mounts(content)
