from __future__ import annotations

import pytest


@pytest.fixture
def trello_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRELLO_API_KEY", "k-123")
    monkeypatch.setenv("TRELLO_TOKEN", "t-456")
    for name in ("TRELLO_MCP_CONFIG_PATH", "TRELLO_ALLOWED_BOARDS_KEY", "SERVICE_TIMEOUT", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_load_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    from trellogate.config import ConfigError, load_config

    monkeypatch.delenv("TRELLO_API_KEY", raising=False)
    monkeypatch.delenv("TRELLO_TOKEN", raising=False)
    with pytest.raises(ConfigError, match="TRELLO_API_KEY, TRELLO_TOKEN"):
        load_config()


def test_load_config_defaults(trello_env: None) -> None:
    from trellogate.config import DEFAULT_TRELLO_API_URL, load_config

    cfg = load_config()
    assert cfg.api_key == "k-123"
    assert cfg.token == "t-456"
    assert cfg.config_path is None
    assert cfg.allowed_boards_key is None
    assert cfg.api_url == DEFAULT_TRELLO_API_URL
    assert cfg.timeout_seconds == 30.0
    assert cfg.debug is False
    assert cfg.log_level == "info"


def test_overrides_take_precedence_over_env(trello_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    from trellogate.config import load_config

    monkeypatch.setenv("TRELLO_ALLOWED_BOARDS_KEY", "env-group")
    cfg = load_config({"TRELLO_ALLOWED_BOARDS_KEY": "cli-group", "DEBUG": "true", "SERVICE_TIMEOUT": "5000"})
    assert cfg.allowed_boards_key == "cli-group"
    assert cfg.debug is True
    assert cfg.timeout_seconds == 5.0


def test_bad_numbers_and_levels_fall_back(trello_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    from trellogate.config import load_config

    monkeypatch.setenv("SERVICE_TIMEOUT", "soon")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    cfg = load_config()
    assert cfg.service_timeout_ms == 30000
    assert cfg.log_level == "info"


def test_parse_env_pairs_skips_malformed() -> None:
    from trellogate.config import parse_env_pairs

    pairs = ["DEBUG=true", "TRELLO_API_URL=http://x/?a=b", "broken", "=x", "K="]
    assert parse_env_pairs(pairs) == {"DEBUG": "true", "TRELLO_API_URL": "http://x/?a=b"}
