"""Tests for sprig.config -- XDG paths, atomic writes, settings precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from sprig.config import (
    PLUGINS_ENV_VAR,
    _atomic_write,
    get_config_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from sprig.exceptions import SettingsError
from sprig.models import GlobalConfig, PluginsConfig, RenderConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestConfigDir:
    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sprig.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "sprig"
        assert result.is_dir()

    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("sprig.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "sprig"

    def test_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sprig.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".sprig"
        assert result.is_dir()


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        _atomic_write(target, "hello world")
        assert target.read_text(encoding="utf-8") == "hello world"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        target.write_text("old content", encoding="utf-8")
        _atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "test.txt"
        _atomic_write(target, "deep write")
        assert target.read_text(encoding="utf-8") == "deep write"

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        with patch("sprig.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                _atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_load_returns_defaults_when_missing(self, isolated_config: Path) -> None:
        cfg = load_global_config()
        assert cfg == GlobalConfig()
        assert cfg.plugins.enabled == []
        assert cfg.render.pixels_per_cell == 8

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        original = GlobalConfig(
            plugins=PluginsConfig(
                enabled=["trim", "rounded"],
                options={"trim": {"max_length": "20"}},
            ),
            render=RenderConfig(show_paths=True),
        )
        save_global_config(original)
        assert load_global_config() == original

    def test_load_invalid_json_raises(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "sprig" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text("{invalid json!!!", encoding="utf-8")

        with pytest.raises(SettingsError, match="Invalid global config"):
            load_global_config()

    def test_load_invalid_schema_raises(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "sprig" / "config.json",
            {"render": {"pixels_per_cell": 0}},
        )
        with pytest.raises(SettingsError):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_missing_returns_none(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_reads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sprig.json", {"plugins": ["tabs"]})
        assert load_project_config() == {"plugins": ["tabs"]}

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sprig.json", ["tabs"])
        with pytest.raises(SettingsError, match="must be a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults_to_empty_enabled_list(self, isolated_config: Path) -> None:
        assert resolve_config().plugins.enabled == []

    def test_global_config_used(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(plugins=PluginsConfig(enabled=["trim"])))
        assert resolve_config().plugins.enabled == ["trim"]

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(plugins=PluginsConfig(enabled=["trim"])))
        _write_json(isolated_config / "sprig.json", {"plugins": ["tabs", "accordion"]})
        assert resolve_config().plugins.enabled == ["tabs", "accordion"]

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "sprig.json", {"plugins": ["tabs"]})
        monkeypatch.setenv(PLUGINS_ENV_VAR, "submit, rounded,,")
        assert resolve_config().plugins.enabled == ["submit", "rounded"]

    def test_cli_overrides_everything(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(PLUGINS_ENV_VAR, "submit,rounded")
        config = resolve_config(cli_plugins=["background"])
        assert config.plugins.enabled == ["background"]

    def test_cli_format(self, isolated_config: Path) -> None:
        assert resolve_config(cli_format="json").output.format == "json"

    def test_options_survive_override(self, isolated_config: Path) -> None:
        save_global_config(
            GlobalConfig(plugins=PluginsConfig(options={"trim": {"max_length": "5"}}))
        )
        config = resolve_config(cli_plugins=["trim"])
        assert config.plugins.options == {"trim": {"max_length": "5"}}
