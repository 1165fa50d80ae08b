"""
Trello provider for board, list and card operations.

Authenticates with an API key + token passed as query parameters.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
from urllib.parse import quote

import requests

from trellogate.config import TrelloConfig, get_config


@runtime_checkable
class TrelloProvider(Protocol):
    """
    Protocol for Trello REST access.

    Every method raises on failure (HTTP error, timeout, connection error);
    access checks rely on lookups failing loudly rather than returning error dicts.
    """

    # Boards
    def get_board(self, board_id: str) -> Dict[str, Any]: ...

    def get_board_lists(self, board_id: str, filter: str = "open") -> List[Dict[str, Any]]: ...

    def get_board_cards(self, board_id: str, filter: str = "open") -> List[Dict[str, Any]]: ...

    def get_board_labels(self, board_id: str) -> List[Dict[str, Any]]: ...

    # Cards
    def get_card(self, card_id: str) -> Dict[str, Any]: ...

    def create_card(self, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def update_card(self, card_id: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def delete_card(self, card_id: str) -> None: ...

    def archive_card(self, card_id: str) -> Dict[str, Any]: ...

    def unarchive_card(self, card_id: str) -> Dict[str, Any]: ...

    def move_card_to_list(self, card_id: str, list_id: str) -> Dict[str, Any]: ...

    def add_comment(self, card_id: str, text: str) -> Dict[str, Any]: ...

    def get_comments(self, card_id: str) -> List[Dict[str, Any]]: ...

    def add_attachment(self, card_id: str, url: str, name: Optional[str] = None) -> Dict[str, Any]: ...

    def get_attachments(self, card_id: str) -> List[Dict[str, Any]]: ...

    def delete_attachment(self, card_id: str, attachment_id: str) -> None: ...

    def add_member(self, card_id: str, member_id: str) -> None: ...

    def remove_member(self, card_id: str, member_id: str) -> None: ...

    def add_label_to_card(self, card_id: str, label_id: str) -> None: ...

    def remove_label_from_card(self, card_id: str, label_id: str) -> None: ...

    # Lists
    def get_list(self, list_id: str) -> Dict[str, Any]: ...

    def create_list(self, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def update_list(self, list_id: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def archive_list(self, list_id: str) -> Dict[str, Any]: ...

    def unarchive_list(self, list_id: str) -> Dict[str, Any]: ...

    def move_list_to_board(self, list_id: str, board_id: str) -> Dict[str, Any]: ...

    def get_cards_in_list(self, list_id: str, filter: str = "open") -> List[Dict[str, Any]]: ...

    def archive_all_cards(self, list_id: str) -> None: ...

    def move_all_cards(self, source_list_id: str, destination_list_id: str, board_id: str) -> None: ...

    def update_list_position(self, list_id: str, position: Any) -> Dict[str, Any]: ...

    def update_list_name(self, list_id: str, name: str) -> Dict[str, Any]: ...

    def update_list_subscribed(self, list_id: str, subscribed: bool) -> Dict[str, Any]: ...


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def _path(*segments: str) -> str:
    """Join path segments, escaping each so an id can never add or climb path levels."""
    parts = []
    for seg in segments:
        s = str(seg)
        if not s or s in (".", ".."):
            raise ValueError(f"invalid path segment: {s!r}")
        parts.append(quote(s, safe=""))
    return "/" + "/".join(parts)


def _query_params(data: Dict[str, Any]) -> Dict[str, Any]:
    # Trello takes lowercase booleans and comma-separated id lists.
    out: Dict[str, Any] = {}
    for k, v in data.items():
        if v is None:
            continue
        if isinstance(v, bool):
            v = _bool_param(v)
        elif isinstance(v, (list, tuple)):
            v = ",".join(str(x) for x in v)
        out[k] = v
    return out


class DefaultTrelloProvider:
    """
    Default Trello provider using the public REST API (v1).

    Configuration comes from `TrelloConfig`:
    - api_key / token: query-string credentials
    - api_url: base URL (default https://api.trello.com/1)
    - timeout_seconds: applied to every request
    """

    def __init__(self, config: Optional[TrelloConfig] = None, session: Optional[requests.Session] = None) -> None:
        cfg = config or get_config()
        self.api_key = cfg.api_key
        self.token = cfg.token
        self.base_url = cfg.api_url.rstrip("/")
        self.timeout = cfg.timeout_seconds
        self._session = session or requests.Session()

    def _make_request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Make authenticated request to the Trello API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path relative to the base URL (e.g. "/cards/abc")
            **kwargs: Additional arguments for requests

        Raises:
            requests.RequestException on transport errors and non-2xx responses
        """
        params = dict(kwargs.pop("params", None) or {})
        params.update({"key": self.api_key, "token": self.token})
        kwargs["params"] = params
        kwargs.setdefault("timeout", self.timeout)

        response = self._session.request(method, f"{self.base_url}{path}", **kwargs)
        response.raise_for_status()
        return response

    def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._make_request(method, path, **kwargs)
        if not response.content:
            return None
        return response.json()

    # --------------------
    # boards
    # --------------------
    def get_board(self, board_id: str) -> Dict[str, Any]:
        return self._json("GET", _path("boards", board_id))

    def get_board_lists(self, board_id: str, filter: str = "open") -> List[Dict[str, Any]]:
        return self._json("GET", _path("boards", board_id, "lists"), params={"filter": filter}) or []

    def get_board_cards(self, board_id: str, filter: str = "open") -> List[Dict[str, Any]]:
        return self._json("GET", _path("boards", board_id, "cards", filter)) or []

    def get_board_labels(self, board_id: str) -> List[Dict[str, Any]]:
        return self._json("GET", _path("boards", board_id, "labels")) or []

    # --------------------
    # cards
    # --------------------
    def get_card(self, card_id: str) -> Dict[str, Any]:
        return self._json("GET", _path("cards", card_id))

    def create_card(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._json("POST", "/cards", params=_query_params(data))

    def update_card(self, card_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._json("PUT", _path("cards", card_id), params=_query_params(data))

    def delete_card(self, card_id: str) -> None:
        self._make_request("DELETE", _path("cards", card_id))

    def archive_card(self, card_id: str) -> Dict[str, Any]:
        return self.update_card(card_id, {"closed": _bool_param(True)})

    def unarchive_card(self, card_id: str) -> Dict[str, Any]:
        return self.update_card(card_id, {"closed": _bool_param(False)})

    def move_card_to_list(self, card_id: str, list_id: str) -> Dict[str, Any]:
        return self.update_card(card_id, {"idList": list_id})

    def add_comment(self, card_id: str, text: str) -> Dict[str, Any]:
        return self._json("POST", _path("cards", card_id, "actions", "comments"), params={"text": text})

    def get_comments(self, card_id: str) -> List[Dict[str, Any]]:
        return self._json("GET", _path("cards", card_id, "actions"), params={"filter": "commentCard"}) or []

    def add_attachment(self, card_id: str, url: str, name: Optional[str] = None) -> Dict[str, Any]:
        return self._json("POST", _path("cards", card_id, "attachments"), params=_query_params({"url": url, "name": name}))

    def get_attachments(self, card_id: str) -> List[Dict[str, Any]]:
        return self._json("GET", _path("cards", card_id, "attachments")) or []

    def delete_attachment(self, card_id: str, attachment_id: str) -> None:
        self._make_request("DELETE", _path("cards", card_id, "attachments", attachment_id))

    def add_member(self, card_id: str, member_id: str) -> None:
        self._make_request("POST", _path("cards", card_id, "idMembers"), params={"value": member_id})

    def remove_member(self, card_id: str, member_id: str) -> None:
        self._make_request("DELETE", _path("cards", card_id, "idMembers", member_id))

    def add_label_to_card(self, card_id: str, label_id: str) -> None:
        self._make_request("POST", _path("cards", card_id, "idLabels"), params={"value": label_id})

    def remove_label_from_card(self, card_id: str, label_id: str) -> None:
        self._make_request("DELETE", _path("cards", card_id, "idLabels", label_id))

    # --------------------
    # lists
    # --------------------
    def get_list(self, list_id: str) -> Dict[str, Any]:
        return self._json("GET", _path("lists", list_id))

    def create_list(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._json("POST", "/lists", params=_query_params(data))

    def update_list(self, list_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id), params=_query_params(data))

    def archive_list(self, list_id: str) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id, "closed"), params={"value": _bool_param(True)})

    def unarchive_list(self, list_id: str) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id, "closed"), params={"value": _bool_param(False)})

    def move_list_to_board(self, list_id: str, board_id: str) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id, "idBoard"), params={"value": board_id})

    def get_cards_in_list(self, list_id: str, filter: str = "open") -> List[Dict[str, Any]]:
        return self._json("GET", _path("lists", list_id, "cards"), params={"filter": filter}) or []

    def archive_all_cards(self, list_id: str) -> None:
        self._make_request("POST", _path("lists", list_id, "archiveAllCards"))

    def move_all_cards(self, source_list_id: str, destination_list_id: str, board_id: str) -> None:
        self._make_request(
            "POST",
            _path("lists", source_list_id, "moveAllCards"),
            params={"idBoard": board_id, "idList": destination_list_id},
        )

    def update_list_position(self, list_id: str, position: Any) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id, "pos"), params={"value": position})

    def update_list_name(self, list_id: str, name: str) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id, "name"), params={"value": name})

    def update_list_subscribed(self, list_id: str, subscribed: bool) -> Dict[str, Any]:
        return self._json("PUT", _path("lists", list_id, "subscribed"), params={"value": _bool_param(subscribed)})


# Singleton instance
_trello_provider: Optional[TrelloProvider] = None


def get_trello_provider() -> TrelloProvider:
    """
    Get Trello provider instance (singleton).

    Returns provider configured from the process configuration.
    """
    global _trello_provider
    if _trello_provider is None:
        _trello_provider = DefaultTrelloProvider()
    return _trello_provider


def set_trello_provider(provider: Optional[TrelloProvider]) -> None:
    """Set Trello provider instance (for testing)."""
    global _trello_provider
    _trello_provider = provider
