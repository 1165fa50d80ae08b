"""
Unit tests for the Trello provider with a mocked HTTP session.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from trellogate.config import TrelloConfig
from trellogate.providers.trello_provider import DefaultTrelloProvider, get_trello_provider, set_trello_provider


def _provider(session: MagicMock) -> DefaultTrelloProvider:
    cfg = TrelloConfig(api_key="k", token="t", api_url="https://trello.test/1/", service_timeout_ms=5000)
    return DefaultTrelloProvider(config=cfg, session=session)


def _response(payload=None, content=b"{}") -> MagicMock:  # type: ignore[no-untyped-def]
    resp = MagicMock()
    resp.content = content
    resp.json.return_value = payload
    resp.raise_for_status = MagicMock()
    return resp


def test_get_board_sends_credentials_and_timeout() -> None:
    session = MagicMock()
    session.request.return_value = _response({"id": "B1"})

    board = _provider(session).get_board("short1")

    assert board == {"id": "B1"}
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "GET"
    assert url == "https://trello.test/1/boards/short1"
    assert kwargs["params"] == {"key": "k", "token": "t"}
    assert kwargs["timeout"] == 5.0


def test_update_card_encodes_params() -> None:
    session = MagicMock()
    session.request.return_value = _response({"id": "C1"})

    _provider(session).update_card("C1", {"dueComplete": True, "idLabels": ["a", "b"], "desc": None})

    params = session.request.call_args.kwargs["params"]
    assert params["dueComplete"] == "true"
    assert params["idLabels"] == "a,b"
    assert "desc" not in params


def test_delete_ignores_empty_body() -> None:
    session = MagicMock()
    session.request.return_value = _response(content=b"")

    assert _provider(session).delete_card("C1") is None
    assert session.request.call_args.args == ("DELETE", "https://trello.test/1/cards/C1")


def test_http_errors_raise() -> None:
    session = MagicMock()
    resp = _response()
    resp.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    session.request.return_value = resp

    with pytest.raises(requests.HTTPError):
        _provider(session).get_card("missing")


def test_move_all_cards_params() -> None:
    session = MagicMock()
    session.request.return_value = _response(content=b"")

    _provider(session).move_all_cards("L1", "L2", "B1")

    assert session.request.call_args.args == ("POST", "https://trello.test/1/lists/L1/moveAllCards")
    assert session.request.call_args.kwargs["params"] == {"idBoard": "B1", "idList": "L2", "key": "k", "token": "t"}


def test_singleton_can_be_replaced() -> None:
    fake = object()
    set_trello_provider(fake)  # type: ignore[arg-type]
    assert get_trello_provider() is fake


def test_path_segments_are_escaped() -> None:
    session = MagicMock()
    session.request.return_value = _response(content=b"")

    _provider(session).delete_attachment("C1", "a/../b?x")

    _, url = session.request.call_args.args
    assert url == "https://trello.test/1/cards/C1/attachments/a%2F..%2Fb%3Fx"


@pytest.mark.parametrize("bad", ["", ".", ".."])
def test_dot_segments_are_rejected(bad: str) -> None:
    session = MagicMock()

    with pytest.raises(ValueError, match="invalid path segment"):
        _provider(session).remove_label_from_card("C1", bad)
    session.request.assert_not_called()
