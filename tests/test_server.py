from __future__ import annotations

from fastapi.testclient import TestClient

import trellogate.api.server as srv
from trellogate.authz.policy import BoardPolicy, set_board_policy


def _client() -> TestClient:
    return TestClient(srv.app)


def test_healthz() -> None:
    r = _client().get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_tools_index() -> None:
    r = _client().get("/tools")
    assert r.status_code == 200
    names = [t["name"] for t in r.json()["tools"]]
    assert "get_card" in names


def test_permitted_call(fake_trello) -> None:
    set_board_policy(BoardPolicy(allowed_board_ids=frozenset({"B1"})))
    r = _client().post("/tools/get_list", json={"listId": "L1"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["result"]["idBoard"] == "B1"


def test_denied_call_is_403(fake_trello) -> None:
    set_board_policy(BoardPolicy(allowed_board_ids=frozenset({"B1"}), allowed_boards_key="work"))
    r = _client().post("/tools/archive_list", json={"listId": "L2"})
    assert r.status_code == 403
    body = r.json()
    assert body["ok"] is False
    assert body["errorKind"] == "access_denied"
    assert fake_trello.count("archive_list") == 0


def test_error_status_mapping(fake_trello) -> None:
    set_board_policy(BoardPolicy())
    c = _client()
    assert c.post("/tools/nope", json={}).status_code == 404
    assert c.post("/tools/get_card", json={}).status_code == 400
    assert c.post("/tools/get_card", json={"cardId": "missing"}).status_code == 404
    assert c.post("/tools/delete_card", json={"cardId": "C1"}).status_code == 400
