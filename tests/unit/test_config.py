"""Unit tests for src/stackscout/config/ (settings and loader)."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from stackscout.config.loader import (
    CONFIG_FILENAMES,
    ConfigError,
    _deep_merge,
    find_config_file,
    load_config_file,
    load_settings,
)
from stackscout.config.settings import ScanSettings, StackScoutSettings


# ---------------------------------------------------------------------------
# Settings defaults
# ---------------------------------------------------------------------------


class TestScanSettings:
    def test_defaults(self):
        s = ScanSettings()
        assert s.max_depth == 3
        assert s.extra_ignore_dirs == []
        assert s.metadata_file == "agent/exports/project_metadata.json"
        assert s.write_metadata is True

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            ScanSettings(max_depth=-1)

    def test_blank_metadata_file_rejected(self):
        with pytest.raises(ValidationError):
            ScanSettings(metadata_file="  ")

    def test_comma_separated_ignore_dirs(self):
        s = ScanSettings(extra_ignore_dirs="legacy, tmp,,")
        assert s.extra_ignore_dirs == ["legacy", "tmp"]


class TestStackScoutSettings:
    def test_defaults(self):
        s = StackScoutSettings()
        assert isinstance(s.scan, ScanSettings)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestFindConfigFile:
    def test_none_when_absent(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None

    @pytest.mark.parametrize("name", CONFIG_FILENAMES)
    def test_each_filename(self, tmp_path: Path, name: str):
        (tmp_path / name).write_text("scan: {}\n")
        assert find_config_file(tmp_path) == tmp_path / name

    def test_walks_up(self, tmp_path: Path):
        (tmp_path / "stackscout.yaml").write_text("scan: {}\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == tmp_path / "stackscout.yaml"


class TestLoadConfigFile:
    def test_reads_mapping(self, tmp_path: Path):
        path = tmp_path / "stackscout.yaml"
        path.write_text(yaml.dump({"scan": {"max_depth": 5}}))
        assert load_config_file(path) == {"scan": {"max_depth": 5}}

    def test_non_mapping_is_empty(self, tmp_path: Path):
        path = tmp_path / "stackscout.yaml"
        path.write_text("- just\n- a list\n")
        assert load_config_file(path) == {}

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path):
        path = tmp_path / "stackscout.yaml"
        path.write_text("scan: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config_file(path)


class TestDeepMerge:
    def test_nested(self):
        base = {"scan": {"max_depth": 3, "write_metadata": True}}
        override = {"scan": {"max_depth": 5}}
        assert _deep_merge(base, override) == {"scan": {"max_depth": 5, "write_metadata": True}}

    def test_does_not_mutate_base(self):
        base = {"a": 1}
        _deep_merge(base, {"a": 2})
        assert base == {"a": 1}


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path):
        settings = load_settings(project_path=tmp_path)
        assert settings.scan.max_depth == 3

    def test_file_values(self, tmp_path: Path):
        (tmp_path / "stackscout.yaml").write_text(
            yaml.dump({"scan": {"max_depth": 5, "extra_ignore_dirs": ["legacy"]}})
        )
        settings = load_settings(project_path=tmp_path)
        assert settings.scan.max_depth == 5
        assert settings.scan.extra_ignore_dirs == ["legacy"]

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / "stackscout.yaml").write_text(yaml.dump({"scan": {"max_depth": 5}}))
        monkeypatch.setenv("STACKSCOUT_SCAN__MAX_DEPTH", "2")
        monkeypatch.setenv("STACKSCOUT_SCAN__WRITE_METADATA", "false")
        settings = load_settings(project_path=tmp_path)
        assert settings.scan.max_depth == 2
        assert settings.scan.write_metadata is False

    def test_overrides_win(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STACKSCOUT_SCAN__MAX_DEPTH", "2")
        settings = load_settings(project_path=tmp_path, overrides={"scan": {"max_depth": 7}})
        assert settings.scan.max_depth == 7

    def test_invalid_value_raises_config_error(self, tmp_path: Path):
        (tmp_path / "stackscout.yaml").write_text(yaml.dump({"scan": {"max_depth": -4}}))
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(project_path=tmp_path)

    def test_empty_scan_section(self, tmp_path: Path):
        (tmp_path / "stackscout.yaml").write_text("scan:\n")
        assert load_settings(project_path=tmp_path).scan.max_depth == 3

    def test_numeric_env_for_string_fields(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STACKSCOUT_SCAN__EXTRA_IGNORE_DIRS", "2024")
        monkeypatch.setenv("STACKSCOUT_SCAN__METADATA_FILE", "42")
        settings = load_settings(project_path=tmp_path)
        assert settings.scan.extra_ignore_dirs == ["2024"]
        assert settings.scan.metadata_file == "42"

    def test_boolean_words_for_list_field_stay_strings(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STACKSCOUT_SCAN__EXTRA_IGNORE_DIRS", "on,off")
        assert load_settings(project_path=tmp_path).scan.extra_ignore_dirs == ["on", "off"]

    def test_unsearchable_directory_raises_config_error(self, tmp_path: Path, monkeypatch):
        root = tmp_path.resolve()
        real_is_file = Path.is_file

        def is_file(self, *args, **kwargs):
            if self.parent == root:
                raise PermissionError(13, "Permission denied", str(self))
            return real_is_file(self, *args, **kwargs)

        monkeypatch.setattr(Path, "is_file", is_file)
        with pytest.raises(ConfigError, match="Could not search for a config file"):
            load_settings(project_path=tmp_path)
