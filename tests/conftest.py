"""
Pytest config.

Local imports like `import trellogate` rely on the repo root being on sys.path;
when invoking a global `pytest` entrypoint that doesn't happen reliably during
collection, so we pin it here.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
import requests


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


def _not_found(what: str) -> requests.HTTPError:
    resp = requests.Response()
    resp.status_code = 404
    return requests.HTTPError(f"404 Client Error: Not Found for {what}", response=resp)


class FakeTrello:
    """
    In-memory Trello provider.

    `boards` maps any accepted board id (short or canonical) to the canonical id.
    Every call is recorded in `calls` as (method, args) in call order.
    """

    def __init__(
        self,
        *,
        boards: Optional[Dict[str, str]] = None,
        cards: Optional[Dict[str, str]] = None,
        lists: Optional[Dict[str, str]] = None,
    ) -> None:
        self.boards: Dict[str, str] = dict(boards or {})
        self.cards: Dict[str, str] = dict(cards or {})  # card id -> idBoard
        self.lists: Dict[str, str] = dict(lists or {})  # list id -> idBoard
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.calls if m == method)

    def methods(self) -> List[str]:
        return [m for m, _ in self.calls]

    def get_board(self, board_id: str) -> Dict[str, Any]:
        self.calls.append(("get_board", (board_id,)))
        if board_id not in self.boards:
            raise _not_found(f"board {board_id}")
        return {"id": self.boards[board_id], "name": f"Board {board_id}"}

    def get_card(self, card_id: str) -> Dict[str, Any]:
        self.calls.append(("get_card", (card_id,)))
        if card_id not in self.cards:
            raise _not_found(f"card {card_id}")
        return {"id": card_id, "idBoard": self.cards[card_id], "name": f"Card {card_id}"}

    def get_list(self, list_id: str) -> Dict[str, Any]:
        self.calls.append(("get_list", (list_id,)))
        if list_id not in self.lists:
            raise _not_found(f"list {list_id}")
        return {"id": list_id, "idBoard": self.lists[list_id], "name": f"List {list_id}"}

    def __getattr__(self, name: str):  # type: ignore[no-untyped-def]
        if name.startswith("_"):
            raise AttributeError(name)

        def _call(*args: Any, **kwargs: Any) -> Dict[str, Any]:
            self.calls.append((name, args + tuple(kwargs.values())))
            return {"method": name, "args": list(args)}

        return _call


@pytest.fixture
def fake_trello() -> FakeTrello:
    from trellogate.providers.trello_provider import set_trello_provider

    fake = FakeTrello(
        boards={"B1": "B1", "B2": "B2", "B3": "B3", "short1": "B1", "short3": "B3"},
        cards={"C1": "B1", "C2": "B2", "C3": "B3"},
        lists={"L1": "B1", "L2": "B3", "L3": "B2"},
    )
    set_trello_provider(fake)
    return fake


@pytest.fixture(autouse=True)
def _reset_singletons() -> Any:
    """Process-wide singletons (config, policy, id cache, provider) start fresh per test."""
    import trellogate.authz.board_ids as board_ids
    from trellogate.authz.policy import set_board_policy
    from trellogate.config import set_config
    from trellogate.providers.trello_provider import set_trello_provider

    def _reset() -> None:
        set_config(None)
        set_board_policy(None)
        board_ids.set_board_id_cache(None)
        board_ids._inflight.clear()
        set_trello_provider(None)

    _reset()
    yield
    _reset()
