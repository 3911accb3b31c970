"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- load_config() precedence: kwargs > env > .coverview.yaml > defaults
- validation errors surfaced as ConfigError
"""

from __future__ import annotations

from pathlib import Path

import pytest

from coverview.config.loader import CONFIG_FILE_NAME, _load_yaml, load_config
from coverview.config.models import CoverviewConfig
from coverview.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("report: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestLoadConfig:
    """Tests for load_config precedence."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("COVERVIEW__REPORT__WORKERS", "COVERVIEW__RESOLVER__TIMEOUT_SEC"):
            monkeypatch.delenv(key, raising=False)

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert isinstance(config, CoverviewConfig)
        assert config.report.workers == 1
        assert config.report.title == "Go Coverage Report"
        assert config.resolver.use_go_list is True
        assert config.resolver.timeout_sec == 60.0

    def test_yaml_file_overrides_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text(
            "report:\n  workers: 4\nresolver:\n  use_go_list: false\n"
        )

        config = load_config(tmp_path)

        assert config.report.workers == 4
        assert config.resolver.use_go_list is False

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("report:\n  workers: 4\n")
        monkeypatch.setenv("COVERVIEW__REPORT__WORKERS", "8")

        config = load_config(tmp_path)

        assert config.report.workers == 8

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVERVIEW__RESOLVER__TIMEOUT_SEC", "30")

        config = load_config(tmp_path, resolver={"timeout_sec": 5})

        assert config.resolver.timeout_sec == 5.0

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, report={"workers": 0})

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "workers" in exc_info.value.details["field"]
