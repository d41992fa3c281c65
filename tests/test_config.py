"""Tests for AMCP configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from amcp.config import Config, get_config_file, load_config


def write_config(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        config = load_config()
        assert config == Config()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 5250
        assert config.server.timeout == 5.0
        assert config.logging.level == "warning"

    def test_xdg_config_file(self, isolated_config):
        assert get_config_file() == isolated_config / "config.toml"
        write_config(
            isolated_config / "config.toml",
            '[server]\nhost = "10.0.0.5"\nport = 5251\n\n[logging]\nlevel = "debug"\n',
        )
        config = load_config()
        assert config.server.host == "10.0.0.5"
        assert config.server.port == 5251
        assert config.server.timeout == 5.0
        assert config.logging.level == "debug"

    def test_explicit_path(self, tmp_path):
        path = write_config(tmp_path / "amcp.toml", "[server]\ntimeout = 0\n")
        assert load_config(path).server.timeout == 0

    def test_amcp_config_env(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "other.toml", '[server]\nhost = "playout"\n')
        monkeypatch.setenv("AMCP_CONFIG", str(path))
        assert load_config().server.host == "playout"

    def test_env_overrides_file(self, isolated_config, monkeypatch):
        write_config(isolated_config / "config.toml", '[server]\nhost = "a"\nport = 1\n')
        monkeypatch.setenv("AMCP_HOST", "b")
        monkeypatch.setenv("AMCP_PORT", "2")
        monkeypatch.setenv("AMCP_TIMEOUT", "0.5")
        monkeypatch.setenv("AMCP_LOG_LEVEL", "info")
        config = load_config()
        assert config.server.host == "b"
        assert config.server.port == 2
        assert config.server.timeout == 0.5
        assert config.logging.level == "info"

    def test_unknown_key_rejected(self, isolated_config):
        write_config(isolated_config / "config.toml", "[server]\nhots = 1\n")
        with pytest.raises(ValueError, match="hots"):
            load_config()
