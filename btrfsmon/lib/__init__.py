"""Shared utility library for btrfsmon."""

from btrfsmon.lib.mounts import MountError, get_btrfs_mounts, parse_btrfs_mounts
from btrfsmon.lib.process import CommandError, run_command

__all__ = [
    "CommandError",
    "MountError",
    "get_btrfs_mounts",
    "parse_btrfs_mounts",
    "run_command",
]
