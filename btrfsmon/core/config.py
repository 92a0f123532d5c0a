"""Configuration loading with layered overrides."""

from pathlib import Path
from typing import Any

import yaml


TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

DEFAULTS: dict[str, Any] = {
    "template_device_stats": str(TEMPLATE_DIR / "btrfs_device_stats.textfsm"),
    "template_filesystem_usage": str(TEMPLATE_DIR / "btrfs_filesystem_usage.textfsm"),
    "template_scrub_status": str(TEMPLATE_DIR / "btrfs_scrub_status.textfsm"),
    "format": "line",
    "log_file": None,
    "log_level": "info",
}


def project_config_path() -> Path:
    """Config file in the current directory."""
    return Path(".btrfsmon.yaml")


def user_config_path() -> Path:
    """Per-user config file."""
    return Path.home() / ".config" / "btrfsmon" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def get_config_value(key: str, config_path: Path | None = None) -> Any:
    """
    Get config value.

    With an explicit config_path only that file is consulted. Otherwise the
    precedence is project -> user -> None.
    """
    if config_path is not None:
        return load_config_file(config_path).get(key)

    data = load_config_file(project_config_path())
    if key in data:
        return data[key]

    data = load_config_file(user_config_path())
    if key in data:
        return data[key]

    return None


def resolve_settings(
    overrides: dict[str, Any] | None = None,
    config_path: Path | None = None,
) -> dict[str, Any]:
    """
    Resolve every known setting.

    Args:
        overrides: Values given on the command line (None means unset)
        config_path: Explicit config file replacing the project/user lookup

    Returns:
        Dict with a value for every key in DEFAULTS
    """
    overrides = overrides or {}
    settings = {}
    for key, default in DEFAULTS.items():
        value = overrides.get(key)
        if value is None:
            value = get_config_value(key, config_path)
        if value is None:
            value = default
        settings[key] = value
    return settings
