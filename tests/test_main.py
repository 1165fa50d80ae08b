from __future__ import annotations

import json
from pathlib import Path

import pytest

import main


def test_bootstrap_loads_policy_with_cli_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from trellogate.authz.policy import get_board_policy
    from trellogate.config import get_config

    cfg_file = tmp_path / "boards.yaml"
    cfg_file.write_text("work:\n  - name: Sprint\n    id: B1\n", encoding="utf-8")
    monkeypatch.setenv("TRELLO_API_KEY", "k")
    monkeypatch.setenv("TRELLO_TOKEN", "t")
    monkeypatch.setenv("TRELLO_ALLOWED_BOARDS_KEY", "ignored")

    main.bootstrap([f"TRELLO_MCP_CONFIG_PATH={cfg_file}", "TRELLO_ALLOWED_BOARDS_KEY=work", "DEBUG=1"])

    assert get_config().debug is True
    policy = get_board_policy()
    assert policy.allowed_board_ids == frozenset({"B1"})
    assert policy.verbose is True


def test_call_tool_prints_result(fake_trello, capsys: pytest.CaptureFixture[str]) -> None:
    from trellogate.authz.policy import BoardPolicy, set_board_policy

    set_board_policy(BoardPolicy(allowed_board_ids=frozenset({"B1"}), allowed_boards_key="work"))

    assert main.call_tool("get_card", '{"cardId": "C3"}') == 1
    out = json.loads(capsys.readouterr().out)
    assert out["ok"] is False
    assert out["errorKind"] == "access_denied"


def test_call_tool_rejects_bad_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main.call_tool("get_card", "{nope") == 2
    assert main.call_tool("get_card", "[1, 2]") == 2
