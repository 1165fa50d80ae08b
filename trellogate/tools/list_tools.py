"""
List tool handlers.

Every handler checks access (list -> owning board, or the board directly for
create_list) before touching Trello.
"""

from __future__ import annotations

from typing import Any, Dict

from trellogate.authz.access import check_board_access, check_list_access
from trellogate.providers.trello_provider import TrelloProvider
from trellogate.tools.types import (
    CreateListArgs,
    ListArgs,
    ListCardsArgs,
    ListNameArgs,
    ListPositionArgs,
    ListSubscribeArgs,
    MoveAllCardsArgs,
    MoveListArgs,
    UpdateListArgs,
)


def _done(message: str) -> Dict[str, Any]:
    return {"success": True, "message": message}


def get_list(args: ListArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "get_list", provider=provider)
    return provider.get_list(args.list_id)


def create_list(args: CreateListArgs, provider: TrelloProvider) -> Any:
    check_board_access(args.id_board, "create_list", provider=provider)
    return provider.create_list(args.model_dump(by_alias=True, exclude_none=True))


def update_list(args: UpdateListArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "update_list", provider=provider)
    if args.id_board:
        check_board_access(args.id_board, "update_list (target board)", provider=provider)

    data = args.model_dump(by_alias=True, exclude_none=True, exclude={"list_id"})
    return provider.update_list(args.list_id, data)


def archive_list(args: ListArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "archive_list", provider=provider)
    return provider.archive_list(args.list_id)


def unarchive_list(args: ListArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "unarchive_list", provider=provider)
    return provider.unarchive_list(args.list_id)


def move_list_to_board(args: MoveListArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "move_list_to_board", provider=provider)
    check_board_access(args.board_id, "move_list_to_board (target board)", provider=provider)
    return provider.move_list_to_board(args.list_id, args.board_id)


def get_cards_in_list(args: ListCardsArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "get_cards_in_list", provider=provider)
    return provider.get_cards_in_list(args.list_id, args.filter)


def archive_all_cards(args: ListArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "archive_all_cards", provider=provider)
    provider.archive_all_cards(args.list_id)
    return _done("All cards in the list have been archived")


def move_all_cards(args: MoveAllCardsArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.source_list_id, "move_all_cards (source)", provider=provider)
    check_list_access(args.destination_list_id, "move_all_cards (destination)", provider=provider)
    if args.board_id:
        check_board_access(args.board_id, "move_all_cards (target board)", provider=provider)
        board_id = args.board_id
    else:
        # Trello requires idBoard; default to the destination list's board.
        board_id = str(provider.get_list(args.destination_list_id).get("idBoard") or "")

    provider.move_all_cards(args.source_list_id, args.destination_list_id, board_id)
    return _done("All cards have been moved to the destination list")


def update_list_position(args: ListPositionArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "update_list_position", provider=provider)
    return provider.update_list_position(args.list_id, args.position)


def update_list_name(args: ListNameArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "update_list_name", provider=provider)
    return provider.update_list_name(args.list_id, args.name)


def subscribe_to_list(args: ListSubscribeArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.list_id, "subscribe_to_list", provider=provider)
    return provider.update_list_subscribed(args.list_id, args.subscribed)
