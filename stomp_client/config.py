from __future__ import annotations

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

from stomp_shared.protocol.constants import DEFAULT_PORT

DEFAULT_CONFIG: Dict[str, Any] = {
    "broker_host": "127.0.0.1",
    "broker_port": DEFAULT_PORT,
    "vhost": "",
    "login": "",
    "passcode": "",
    "heart_beat_outgoing": 0,
    "heart_beat_incoming": 0,
    "log_level": "INFO",
    "inbox_size": 1000,
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        env_key = f"STOMP_{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = _coerce_type(value, type(default_value))

    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def _validate_config() -> None:
    if not (1 <= int(CLIENT_CONFIG["broker_port"]) <= 65535):
        raise ConfigError("broker_port must be between 1 and 65535")
    if CLIENT_CONFIG["heart_beat_outgoing"] < 0 or CLIENT_CONFIG["heart_beat_incoming"] < 0:
        raise ConfigError("heart beat intervals must not be negative")
    if CLIENT_CONFIG["inbox_size"] <= 0:
        raise ConfigError("inbox_size must be positive")
    if CLIENT_CONFIG["passcode"] and not CLIENT_CONFIG["login"]:
        raise ConfigError("passcode requires a login")


def get(key: str, default: Any = None) -> Any:
    return CLIENT_CONFIG.get(key, default)


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "get", "load_config"]
