"""Configuration management for Event Explorer."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

EXPLORER_HOME = Path(os.environ.get("EXPLORER_HOME", Path.home() / "event-explorer"))
CONFIG_FILE = EXPLORER_HOME / "config" / "explorer.conf"

BACKEND_URL_ENV = "EVENT_EXPLORER_BACKEND_URL"
TIMEOUT_ENV = "EVENT_EXPLORER_TIMEOUT"


@dataclass
class Config:
    """Event Explorer configuration."""

    backend_url: str = "http://localhost:8000"
    request_timeout: float = 10.0
    default_category: str = ""
    log_level: str = "WARNING"


def _parse_timeout(value: str, current: float) -> float:
    try:
        timeout = float(value)
    except ValueError:
        logger.warning(f"Invalid REQUEST_TIMEOUT {value!r}, keeping {current}")
        return current
    if timeout <= 0:
        logger.warning(f"REQUEST_TIMEOUT must be positive, keeping {current}")
        return current
    return timeout


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from explorer.conf, then apply environment overrides."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "backend_url":
                    config.backend_url = value
                case "request_timeout":
                    config.request_timeout = _parse_timeout(value, config.request_timeout)
                case "default_category":
                    config.default_category = value
                case "log_level":
                    config.log_level = value.upper()
                case _:
                    logger.debug(f"Ignoring unknown config key: {key}")

    if os.environ.get(BACKEND_URL_ENV):
        config.backend_url = os.environ[BACKEND_URL_ENV]
    if os.environ.get(TIMEOUT_ENV):
        config.request_timeout = _parse_timeout(os.environ[TIMEOUT_ENV], config.request_timeout)

    config.backend_url = config.backend_url.rstrip("/")
    return config
