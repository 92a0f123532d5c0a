"""Command-line interface for btrfsmon."""

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from btrfsmon import __version__
from btrfsmon.collectors import COLLECTORS
from btrfsmon.core.config import resolve_settings
from btrfsmon.core.logging import LOG_LEVELS, Logger
from btrfsmon.core.output import FORMATS, Output
from btrfsmon.core.pipeline import SourceError
from btrfsmon.lib.mounts import MountError, get_btrfs_mounts
from btrfsmon.lib.process import CommandError, run_command

if TYPE_CHECKING:
    from btrfsmon.core.context import Context


EXIT_OK = 0
EXIT_MOUNTS = 1

# (command failed, parse failed) per family
EXIT_CODES = {
    "device_stats": (2, 3),
    "filesystem_usage": (4, 5),
    "scrub_status": (6, 7),
}

TEMPLATE_SETTINGS = {
    "device_stats": "template_device_stats",
    "filesystem_usage": "template_filesystem_usage",
    "scrub_status": "template_scrub_status",
}


class StageError(Exception):
    """A collection stage failed; carries the process exit code."""

    def __init__(self, message: str, exit_code: int):
        self.exit_code = exit_code
        super().__init__(message)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="btrfsmon",
        description="Print btrfs device, usage and scrub metrics as InfluxDB line protocol",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"btrfsmon {__version__}",
    )
    parser.add_argument(
        "--template-device-stats",
        help="TextFSM template for `btrfs device stats`",
    )
    parser.add_argument(
        "--template-filesystem-usage",
        help="TextFSM template for `btrfs filesystem usage --raw`",
    )
    parser.add_argument(
        "--template-scrub-status",
        help="TextFSM template for `btrfs scrub status -d`",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format (default: line)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: .btrfsmon.yaml, then ~/.config/btrfsmon/config.yaml)",
    )
    parser.add_argument(
        "--log-file",
        help="Append JSONL log entries to this file (default: stderr)",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        help="Minimum log level (default: info)",
    )
    return parser


def collect_mount(
    mount: str,
    settings: dict,
    output: Output,
    logger: Logger,
    context: "Context | None" = None,
) -> int:
    """
    Run every collector for one mount, in order.

    Returns:
        Number of points emitted

    Raises:
        StageError: On the first command or parse failure
    """
    emitted = 0
    for family, command, parse in COLLECTORS:
        exec_code, parse_code = EXIT_CODES[family]
        cmd = command + [mount]

        try:
            stdout = run_command(cmd, context=context)
        except CommandError as e:
            logger.error(
                f"failed to execute {' '.join(cmd)}",
                op="collect_mount",
                family=family,
                mount=mount,
                error=str(e),
            )
            raise StageError(str(e), exec_code) from e

        try:
            emitted += parse(mount, stdout, settings[TEMPLATE_SETTINGS[family]], output, logger)
        except SourceError as e:
            logger.error(
                f"failed to parse {family} output",
                op="collect_mount",
                family=e.family,
                mount=e.mount,
                error=str(e),
            )
            raise StageError(str(e), parse_code) from e

    return emitted


def main(argv: list[str] | None = None, context: "Context | None" = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = resolve_settings(
        {
            "template_device_stats": args.template_device_stats,
            "template_filesystem_usage": args.template_filesystem_usage,
            "template_scrub_status": args.template_scrub_status,
            "format": args.format,
            "log_file": args.log_file,
            "log_level": args.log_level,
        },
        config_path=args.config,
    )
    if settings["format"] not in FORMATS:
        parser.error(f"invalid format in config: {settings['format']}")
    if settings["log_level"] not in LOG_LEVELS:
        parser.error(f"invalid log level in config: {settings['log_level']}")

    log_path = Path(settings["log_file"]) if settings["log_file"] else None
    output = Output(format=settings["format"])

    with Logger("btrfsmon", log_path=log_path, min_level=settings["log_level"]) as logger:
        try:
            mounts = get_btrfs_mounts(context)
        except MountError as e:
            logger.error("failed to enumerate btrfs mounts", op="main", error=str(e))
            output.error(str(e))
            return EXIT_MOUNTS

        logger.debug("found btrfs mounts", op="main", mounts=mounts)

        for mount in mounts:
            try:
                collect_mount(mount, settings, output, logger, context=context)
            except StageError as e:
                output.error(str(e))
                return e.exit_code

        logger.info(
            "collection finished",
            op="main",
            mounts=len(mounts),
            points=output.emitted,
            summary=output.summary,
        )

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
