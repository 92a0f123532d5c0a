"""One collector per btrfs output family."""

from btrfsmon.collectors import device_stats, filesystem_usage, scrub_status

# Collection order for every mount
COLLECTORS = (
    (device_stats.FAMILY, device_stats.COMMAND, device_stats.parse_device_stats),
    (filesystem_usage.FAMILY, filesystem_usage.COMMAND, filesystem_usage.parse_filesystem_usage),
    (scrub_status.FAMILY, scrub_status.COMMAND, scrub_status.parse_scrub_status),
)

__all__ = ["COLLECTORS", "device_stats", "filesystem_usage", "scrub_status"]
