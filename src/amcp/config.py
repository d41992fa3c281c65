"""Configuration management for AMCP."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .protocol.client import DEFAULT_HOST
from .protocol.messages import DEFAULT_PORT


@dataclass
class ServerConfig:
    """Server connection settings."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = 5.0  # seconds, 0 disables


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "warning"


@dataclass
class Config:
    """Full AMCP configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the AMCP config directory."""
    if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config) / "amcp"
    return Path.home() / ".config" / "amcp"


def get_config_file() -> Path:
    """Get the config file path, honouring ``AMCP_CONFIG``."""
    if env_file := os.environ.get("AMCP_CONFIG"):
        return Path(env_file)
    return get_config_dir() / "config.toml"


def _section(cls: type, name: str, data: dict[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys in [{name}]: {', '.join(sorted(unknown))}")
    return cls(**data)


def _apply_env(config: Config) -> Config:
    """Apply ``AMCP_*`` environment overrides."""
    if host := os.environ.get("AMCP_HOST"):
        config.server.host = host
    if port := os.environ.get("AMCP_PORT"):
        config.server.port = int(port)
    if timeout := os.environ.get("AMCP_TIMEOUT"):
        config.server.timeout = float(timeout)
    if level := os.environ.get("AMCP_LOG_LEVEL"):
        config.logging.level = level
    return config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from file, then apply environment overrides."""
    config_file = path or get_config_file()

    if not config_file.exists():
        return _apply_env(Config())

    with open(config_file, "rb") as f:
        data = tomllib.load(f)

    config = Config(
        server=_section(ServerConfig, "server", data.get("server", {})),
        logging=_section(LoggingConfig, "logging", data.get("logging", {})),
    )
    return _apply_env(config)
