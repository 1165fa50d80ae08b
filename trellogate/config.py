"""
Process configuration (env driven, CLI overridable).

Values come from environment variables. `--env KEY=VALUE` pairs passed on the
command line take precedence over the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

DEFAULT_TRELLO_API_URL = "https://api.trello.com/1"
_LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(Exception):
    """Raised when configuration is missing or malformed."""


def _lookup(name: str, overrides: Mapping[str, str]) -> Optional[str]:
    raw = overrides.get(name)
    if raw is None:
        raw = os.getenv(name)
    raw = (raw or "").strip()
    return raw or None


def _env_bool(name: str, overrides: Mapping[str, str], default: bool = False) -> bool:
    raw = (_lookup(name, overrides) or "").lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "y", "on")


def _env_int(name: str, overrides: Mapping[str, str], default: int) -> int:
    raw = _lookup(name, overrides)
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


def parse_env_pairs(pairs: Sequence[str]) -> Dict[str, str]:
    """Parse `KEY=VALUE` strings; malformed pairs (no `=`, empty key or value) are ignored."""
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if sep and key.strip() and value:
            out[key.strip()] = value
    return out


@dataclass(frozen=True)
class TrelloConfig:
    api_key: str
    token: str

    # Board access control (YAML file + group key)
    config_path: Optional[str] = None
    allowed_boards_key: Optional[str] = None

    api_url: str = DEFAULT_TRELLO_API_URL
    service_timeout_ms: int = 30000

    debug: bool = False
    log_level: str = "info"

    @property
    def timeout_seconds(self) -> float:
        return self.service_timeout_ms / 1000.0


def load_config(overrides: Optional[Mapping[str, str]] = None) -> TrelloConfig:
    """
    Load configuration from env vars plus optional CLI overrides.

    Vars:
    - TRELLO_API_KEY, TRELLO_TOKEN (required)
    - TRELLO_MCP_CONFIG_PATH, TRELLO_ALLOWED_BOARDS_KEY
    - TRELLO_API_URL=https://api.trello.com/1
    - SERVICE_TIMEOUT=30000 (milliseconds)
    - DEBUG=false
    - LOG_LEVEL=info

    Raises:
        ConfigError listing every missing required variable
    """
    ov: Mapping[str, str] = overrides or {}

    missing: List[str] = []
    api_key = _lookup("TRELLO_API_KEY", ov)
    if not api_key:
        missing.append("TRELLO_API_KEY")
    token = _lookup("TRELLO_TOKEN", ov)
    if not token:
        missing.append("TRELLO_TOKEN")
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    log_level = (_lookup("LOG_LEVEL", ov) or "info").lower()
    if log_level not in _LOG_LEVELS:
        log_level = "info"

    return TrelloConfig(
        api_key=api_key or "",
        token=token or "",
        config_path=_lookup("TRELLO_MCP_CONFIG_PATH", ov),
        allowed_boards_key=_lookup("TRELLO_ALLOWED_BOARDS_KEY", ov),
        api_url=(_lookup("TRELLO_API_URL", ov) or DEFAULT_TRELLO_API_URL).rstrip("/"),
        service_timeout_ms=max(1000, _env_int("SERVICE_TIMEOUT", ov, 30000)),
        debug=_env_bool("DEBUG", ov, False),
        log_level=log_level,
    )


# Singleton instance
_config: Optional[TrelloConfig] = None


def get_config() -> TrelloConfig:
    """Get process configuration (loaded from env on first use)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[TrelloConfig]) -> None:
    """Set process configuration (CLI startup and tests)."""
    global _config
    _config = config
