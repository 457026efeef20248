"""Tests for notegraph.config.settings."""
from __future__ import annotations

from pathlib import Path

import pytest

from notegraph.config import Config
from notegraph.config.constants import (
    DEFAULT_ANALYSIS_MIN_RELATION,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_FUSION_STRATEGY,
    DEFAULT_HOST,
    DEFAULT_MAX_LEVEL,
    DEFAULT_PORT,
)


def _write_settings(data_dir: Path, body: str) -> Path:
    config_dir = data_dir / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    settings = config_dir / "settings.toml"
    settings.write_text(body, encoding="utf-8")
    return settings


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    path = tmp_path / "data"
    monkeypatch.setenv("NOTEGRAPH_DATA_DIR", str(path))
    return path


class TestConfigLoad:
    """Tests for Config.load precedence."""

    def test_explicit_missing_path_raises(self, tmp_path):
        missing = tmp_path / "nonexistent" / "settings.toml"
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(config_path=missing)

    def test_defaults_without_settings_file(self, data_dir):
        config = Config.load()
        assert config.analysis.min_relation == DEFAULT_ANALYSIS_MIN_RELATION
        assert config.analysis.max_level == DEFAULT_MAX_LEVEL
        assert config.analysis.layout_seed is None
        assert config.fusion.default_strategy == DEFAULT_FUSION_STRATEGY
        assert config.server.host == DEFAULT_HOST
        assert config.server.port == DEFAULT_PORT
        assert config.server.cors_origins == DEFAULT_CORS_ORIGINS
        assert config.logging.level == "INFO"

    def test_settings_file_values(self, data_dir):
        _write_settings(
            data_dir,
            """
[analysis]
min_relation = 0.5
max_level = 5
layout_seed = 11

[fusion]
default_strategy = "merge"
min_relation = 0.6

[server]
port = 9100
cors_origins = ["http://example.test"]

[logging]
level = "DEBUG"
use_rich_console = false
""",
        )
        config = Config.load()
        assert config.analysis.min_relation == 0.5
        assert config.analysis.max_level == 5
        assert config.analysis.layout_seed == 11
        assert config.fusion.default_strategy == "merge"
        assert config.fusion.min_relation == 0.6
        assert config.server.port == 9100
        assert config.server.cors_origins == ["http://example.test"]
        assert config.logging.level == "DEBUG"
        assert config.logging.use_rich_console is False

    def test_explicit_path(self, tmp_path):
        settings = _write_settings(tmp_path / "elsewhere", '[fusion]\ndefault_strategy = "add"\n')
        assert Config.load(config_path=settings).fusion.default_strategy == "add"

    def test_env_overrides_file(self, data_dir, monkeypatch):
        _write_settings(data_dir, "[analysis]\nmax_level = 5\n[fusion]\nmin_relation = 0.6\n")
        monkeypatch.setenv("NOTEGRAPH_MAX_LEVEL", "4")
        monkeypatch.setenv("NOTEGRAPH_FUSION_MIN_RELATION", "0.45")
        monkeypatch.setenv("NOTEGRAPH_FUSION_STRATEGY", "add")
        monkeypatch.setenv("NOTEGRAPH_LAYOUT_SEED", "3")
        monkeypatch.setenv("NOTEGRAPH_LOG_LEVEL", "WARNING")

        config = Config.load()
        assert config.analysis.max_level == 4
        assert config.analysis.layout_seed == 3
        assert config.fusion.min_relation == 0.45
        assert config.fusion.default_strategy == "add"
        assert config.logging.level == "WARNING"

    def test_invalid_numeric_env_falls_back(self, data_dir, monkeypatch):
        monkeypatch.setenv("NOTEGRAPH_PORT", "not-a-port")
        monkeypatch.setenv("NOTEGRAPH_ANALYSIS_MIN_RELATION", "lots")
        monkeypatch.setenv("NOTEGRAPH_LAYOUT_SEED", "x")
        config = Config.load()
        assert config.server.port == DEFAULT_PORT
        assert config.analysis.min_relation == DEFAULT_ANALYSIS_MIN_RELATION
        assert config.analysis.layout_seed is None

    def test_cors_origins_from_env(self, data_dir, monkeypatch):
        monkeypatch.setenv("NOTEGRAPH_CORS_ORIGINS", "http://a.test, http://b.test,")
        assert Config.load().server.cors_origins == ["http://a.test", "http://b.test"]

    def test_empty_host_env_ignored(self, data_dir, monkeypatch):
        monkeypatch.setenv("NOTEGRAPH_HOST", "")
        assert Config.load().server.host == DEFAULT_HOST
