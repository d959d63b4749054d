"""Tests for specmcp.config -- XDG paths, atomic writes, default-spec precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from specmcp.config import (
    DEFAULT_SPEC,
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_default_spec,
    save_global_config,
)
from specmcp.exceptions import ConfigError
from specmcp.models import GlobalConfig, OutputConfig


def _write_json(path: Path, data: Any) -> None:
    """Write *data* as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_from_env(self, isolated_config: Path) -> None:
        path = get_config_dir()
        assert path == isolated_config / "config" / "specmcp"
        assert path.is_dir()

    def test_data_dir_from_env(self, isolated_config: Path) -> None:
        path = get_data_dir()
        assert path == isolated_config / "data" / "specmcp"
        assert path.is_dir()

    def test_config_dir_default_under_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specmcp.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "specmcp"

    def test_non_xdg_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specmcp.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".specmcp"
        assert get_data_dir() == tmp_path / ".specmcp"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_failure_leaves_no_temp_file(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        target.write_text("original", encoding="utf-8")
        with patch("specmcp.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                _atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_missing_file_gives_defaults(self, isolated_config: Path) -> None:
        config = load_global_config()
        assert config == GlobalConfig()
        assert config.output.line_width == 100
        assert config.server.transport == "stdio"

    def test_save_and_load(self, isolated_config: Path) -> None:
        config = GlobalConfig(default_spec="api.yaml", output=OutputConfig(line_width=80))
        save_global_config(config)
        assert load_global_config() == config

    def test_invalid_json(self, isolated_config: Path) -> None:
        (get_config_dir() / "config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_field(self, isolated_config: Path) -> None:
        _write_json(get_config_dir() / "config.json", {"output": {"line_width": "wide"}})
        with pytest.raises(ConfigError):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specmcp.json", {"default_spec": "docs/api.yaml"})
        assert load_project_config() == {"default_spec": "docs/api.yaml"}

    def test_rejects_non_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specmcp.json", ["api.yaml"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Default document precedence
# ---------------------------------------------------------------------------


class TestResolveDefaultSpec:
    def test_builtin_default(self, isolated_config: Path) -> None:
        assert resolve_default_spec() == DEFAULT_SPEC == "openapi.yaml"

    def test_cli_wins(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECMCP_SPEC", "env.yaml")
        _write_json(isolated_config / "specmcp.json", {"default_spec": "project.yaml"})
        assert resolve_default_spec("cli.yaml") == "cli.yaml"

    def test_env_over_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECMCP_SPEC", "env.yaml")
        _write_json(isolated_config / "specmcp.json", {"default_spec": "project.yaml"})
        assert resolve_default_spec() == "env.yaml"

    def test_project_over_global(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specmcp.json", {"default_spec": "project.yaml"})
        global_cfg = GlobalConfig(default_spec="global.yaml")
        assert resolve_default_spec(global_cfg=global_cfg) == "project.yaml"

    def test_global_from_argument(self, isolated_config: Path) -> None:
        assert resolve_default_spec(global_cfg=GlobalConfig(default_spec="g.yaml")) == "g.yaml"

    def test_global_from_disk(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(default_spec="saved.yaml"))
        assert resolve_default_spec() == "saved.yaml"
