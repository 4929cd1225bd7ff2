from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import yaml


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from an optional YAML file and environment variables.

    Env vars (override values from the YAML file):
    - CONFIG_FILE: path to a YAML config file (optional)
    - SERVER_ADDRESS: bind address as 'host:port' or ':port'. Default ':8080'
    - APP_NAME / APP_VERSION: title and version shown in the OpenAPI docs
    - LOG_LEVEL: logging level name. Default 'INFO'
    - LOG_FILE: optional path of a log file
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default

    YAML layout:

        app:
          name: CRUD Backend
          version: 0.1.0
        server:
          address: ":8080"
          cors_allow_origins: "*"
        logging:
          level: INFO
          output: ./logs/app.log
    """

    server_address: str
    app_name: str
    app_version: str
    log_level: str
    log_file: Optional[str]
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Read a YAML config file and return its top-level mapping.

    Raises:
        ConfigError if the file is missing, unreadable, or not a YAML mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"error reading config file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"error parsing config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"error parsing config file: expected a mapping in {path}")
    return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"config section '{name}' must be a mapping")
    return section


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings from CONFIG_FILE (if set) overlaid with environment variables."""
    config_path = os.getenv("CONFIG_FILE")
    data = load_config_file(config_path) if config_path else {}
    app = _section(data, "app")
    server = _section(data, "server")
    logging_cfg = _section(data, "logging")

    address = _get_env("SERVER_ADDRESS", str(server.get("address", ":8080"))).strip()
    name = _get_env("APP_NAME", str(app.get("name", "CRUD Backend")))
    version = _get_env("APP_VERSION", str(app.get("version", "0.1.0")))
    level = _get_env("LOG_LEVEL", str(logging_cfg.get("level", "INFO"))).strip().upper()
    log_file = os.getenv("LOG_FILE") or logging_cfg.get("output") or None
    cors_raw = _get_env("CORS_ALLOW_ORIGINS", str(server.get("cors_allow_origins", "*")))

    return Settings(
        server_address=address,
        app_name=name,
        app_version=version,
        log_level=level,
        log_file=str(log_file) if log_file else None,
        cors_allow_origins=_parse_origins(cors_raw),
    )


# PUBLIC_INTERFACE
def parse_address(address: str) -> Tuple[str, int]:
    """
    Split a bind address into (host, port).

    ':8080' binds all interfaces; 'localhost:9000' binds one host.

    Raises:
        ConfigError if the port is missing or not an integer.
    """
    host, sep, port = address.strip().rpartition(":")
    if not sep:
        raise ConfigError(f"invalid server address {address!r}: expected 'host:port'")
    try:
        port_num = int(port)
    except ValueError as e:
        raise ConfigError(f"invalid server address {address!r}: port must be an integer") from e
    return host or "0.0.0.0", port_num
