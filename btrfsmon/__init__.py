"""btrfsmon - btrfs health and capacity metrics as time-series points."""

__version__ = "0.1.0"
