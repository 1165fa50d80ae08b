"""Board tool handlers (gated directly on the board id)."""

from __future__ import annotations

from typing import Any

from trellogate.authz.access import check_board_access
from trellogate.providers.trello_provider import TrelloProvider
from trellogate.tools.types import BoardArgs, BoardCardsArgs, BoardListsArgs


def get_board(args: BoardArgs, provider: TrelloProvider) -> Any:
    check_board_access(args.board_id, "get_board", provider=provider)
    return provider.get_board(args.board_id)


def get_board_lists(args: BoardListsArgs, provider: TrelloProvider) -> Any:
    check_board_access(args.board_id, "get_board_lists", provider=provider)
    return provider.get_board_lists(args.board_id, args.filter)


def get_board_cards(args: BoardCardsArgs, provider: TrelloProvider) -> Any:
    check_board_access(args.board_id, "get_board_cards", provider=provider)
    return provider.get_board_cards(args.board_id, args.filter)


def get_board_labels(args: BoardArgs, provider: TrelloProvider) -> Any:
    check_board_access(args.board_id, "get_board_labels", provider=provider)
    return provider.get_board_labels(args.board_id)
