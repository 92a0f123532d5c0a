"""Tests for btrfsmon.core.config module."""

from pathlib import Path

import pytest

from btrfsmon.core.config import (
    DEFAULTS,
    get_config_value,
    load_config_file,
    resolve_settings,
)


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Empty working directory and home."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    return tmp_path


def write_user_config(root: Path, text: str) -> None:
    config_dir = root / "home" / ".config" / "btrfsmon"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yaml").write_text(text)


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_returns_empty_dict_if_file_missing(self, tmp_path):
        assert load_config_file(tmp_path / "nonexistent.yaml") == {}

    def test_loads_yaml_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("format: json\nlog_level: debug\n")

        assert load_config_file(config_file) == {"format": "json", "log_level": "debug"}

    def test_returns_empty_dict_on_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("format: [unclosed")

        assert load_config_file(config_file) == {}

    def test_returns_empty_dict_for_non_mapping(self, tmp_path):
        """A YAML list is not a config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- format\n- json\n")

        assert load_config_file(config_file) == {}


class TestGetConfigValue:
    """Tests for get_config_value."""

    def test_returns_none_when_no_config(self, isolated):
        assert get_config_value("format") is None

    def test_project_config_takes_precedence(self, isolated):
        """Project config overrides user config."""
        write_user_config(isolated, "format: line")
        (isolated / ".btrfsmon.yaml").write_text("format: json")

        assert get_config_value("format") == "json"

    def test_falls_back_to_user_config(self, isolated):
        write_user_config(isolated, "log_level: debug")
        (isolated / ".btrfsmon.yaml").write_text("format: json")

        assert get_config_value("log_level") == "debug"

    def test_explicit_path_only(self, isolated):
        """An explicit config file replaces the project and user lookup."""
        (isolated / ".btrfsmon.yaml").write_text("format: json")
        explicit = isolated / "other.yaml"
        explicit.write_text("log_level: error")

        assert get_config_value("format", explicit) is None
        assert get_config_value("log_level", explicit) == "error"


class TestResolveSettings:
    """Tests for resolve_settings."""

    def test_defaults(self, isolated):
        assert resolve_settings() == DEFAULTS

    def test_default_templates_ship_with_package(self):
        for key in ("template_device_stats", "template_filesystem_usage", "template_scrub_status"):
            assert Path(DEFAULTS[key]).is_file()

    def test_override_beats_config(self, isolated):
        (isolated / ".btrfsmon.yaml").write_text("format: json\nlog_level: debug\n")

        settings = resolve_settings({"format": "line", "log_level": None})

        assert settings["format"] == "line"
        assert settings["log_level"] == "debug"

    def test_template_from_config(self, isolated):
        (isolated / ".btrfsmon.yaml").write_text("template_scrub_status: /etc/scrub.textfsm\n")

        settings = resolve_settings({})

        assert settings["template_scrub_status"] == "/etc/scrub.textfsm"
        assert settings["template_device_stats"] == DEFAULTS["template_device_stats"]
