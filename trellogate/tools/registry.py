from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

import requests
from pydantic import ValidationError

from trellogate.authz.errors import AccessControlError
from trellogate.authz.policy import redact_credentials
from trellogate.providers.trello_provider import TrelloProvider, get_trello_provider
from trellogate.tools import board_tools, card_tools, list_tools
from trellogate.tools import types as t
from trellogate.tools.types import ConfirmationRequired, ToolArgs, ToolResult

logger = logging.getLogger(__name__)

Handler = Callable[[Any, TrelloProvider], Any]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_model: Type[ToolArgs]
    handler: Handler


def _spec(name: str, description: str, args_model: Type[ToolArgs], handler: Handler) -> ToolSpec:
    return ToolSpec(name=name, description=description, args_model=args_model, handler=handler)


_SPECS: List[ToolSpec] = [
    # boards
    _spec("get_board", "Get a board by id", t.BoardArgs, board_tools.get_board),
    _spec("get_board_lists", "Get the lists on a board", t.BoardListsArgs, board_tools.get_board_lists),
    _spec("get_board_cards", "Get the cards on a board", t.BoardCardsArgs, board_tools.get_board_cards),
    _spec("get_board_labels", "Get the labels defined on a board", t.BoardArgs, board_tools.get_board_labels),
    # cards
    _spec("get_card", "Get a card by id", t.CardArgs, card_tools.get_card),
    _spec("create_card", "Create a card in a list", t.CreateCardArgs, card_tools.create_card),
    _spec("update_card", "Update card fields", t.UpdateCardArgs, card_tools.update_card),
    _spec("delete_card", "Delete a card (requires confirm: true)", t.DeleteCardArgs, card_tools.delete_card),
    _spec("archive_card", "Archive a card", t.CardArgs, card_tools.archive_card),
    _spec("unarchive_card", "Unarchive a card", t.CardArgs, card_tools.unarchive_card),
    _spec("move_card_to_list", "Move a card to another list", t.MoveCardArgs, card_tools.move_card_to_list),
    _spec("add_comment", "Add a comment to a card", t.CommentArgs, card_tools.add_comment),
    _spec("get_comments", "Get comments on a card", t.CardArgs, card_tools.get_comments),
    _spec("add_attachment", "Attach a URL to a card", t.AttachmentArgs, card_tools.add_attachment),
    _spec("get_attachments", "Get attachments on a card", t.CardArgs, card_tools.get_attachments),
    _spec("delete_attachment", "Delete an attachment", t.DeleteAttachmentArgs, card_tools.delete_attachment),
    _spec("add_member", "Add a member to a card", t.MemberArgs, card_tools.add_member),
    _spec("remove_member", "Remove a member from a card", t.MemberArgs, card_tools.remove_member),
    _spec("add_label", "Add a label to a card", t.LabelArgs, card_tools.add_label),
    _spec("remove_label", "Remove a label from a card", t.LabelArgs, card_tools.remove_label),
    _spec("set_due_date", "Set or clear a card's due date", t.DueDateArgs, card_tools.set_due_date),
    _spec("set_due_complete", "Mark a due date complete/incomplete", t.DueCompleteArgs, card_tools.set_due_complete),
    # lists
    _spec("get_list", "Get a list by id", t.ListArgs, list_tools.get_list),
    _spec("create_list", "Create a list on a board", t.CreateListArgs, list_tools.create_list),
    _spec("update_list", "Update list fields", t.UpdateListArgs, list_tools.update_list),
    _spec("archive_list", "Archive a list", t.ListArgs, list_tools.archive_list),
    _spec("unarchive_list", "Unarchive a list", t.ListArgs, list_tools.unarchive_list),
    _spec("move_list_to_board", "Move a list to another board", t.MoveListArgs, list_tools.move_list_to_board),
    _spec("get_cards_in_list", "Get the cards in a list", t.ListCardsArgs, list_tools.get_cards_in_list),
    _spec("archive_all_cards", "Archive every card in a list", t.ListArgs, list_tools.archive_all_cards),
    _spec("move_all_cards", "Move every card to another list", t.MoveAllCardsArgs, list_tools.move_all_cards),
    _spec("update_list_position", "Reposition a list", t.ListPositionArgs, list_tools.update_list_position),
    _spec("update_list_name", "Rename a list", t.ListNameArgs, list_tools.update_list_name),
    _spec("subscribe_to_list", "Subscribe/unsubscribe to a list", t.ListSubscribeArgs, list_tools.subscribe_to_list),
]

TOOLS: Dict[str, ToolSpec] = {s.name: s for s in _SPECS}


def _validation_summary(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "args"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def describe_tools() -> List[Dict[str, str]]:
    return [{"name": s.name, "description": s.description} for s in _SPECS]


def run_tool(
    tool: str,
    args: Optional[Dict[str, Any]] = None,
    *,
    provider: Optional[TrelloProvider] = None,
) -> ToolResult:
    """
    Execute a single tool call with access control.

    Args are validated against the tool's request model before any access check
    runs. Gate failures are returned with their own kind and message.
    """
    tool = (tool or "").strip()
    if not tool:
        return ToolResult(ok=False, error="tool_missing", error_kind="tool_missing")

    spec = TOOLS.get(tool)
    if spec is None:
        return ToolResult(ok=False, error=f"unknown_tool:{tool}", error_kind="unknown_tool")

    try:
        parsed = spec.args_model.model_validate(args or {})
    except ValidationError as e:
        return ToolResult(ok=False, error=f"invalid_args: {_validation_summary(e)}", error_kind="invalid_args")

    logger.info("Tool call: %s args=%s", tool, parsed.model_dump(by_alias=True, exclude_none=True))

    trello = provider or get_trello_provider()
    try:
        return ToolResult(ok=True, result=spec.handler(parsed, trello))
    except ConfirmationRequired as e:
        return ToolResult(ok=False, error=str(e), error_kind="confirmation_required")
    except AccessControlError as e:
        logger.warning("Tool %s blocked: %s", tool, e.kind)
        return ToolResult(ok=False, error=redact_credentials(str(e)), error_kind=e.kind)  # type: ignore[arg-type]
    except requests.RequestException as e:
        logger.warning("Tool %s failed: trello_error:%s", tool, type(e).__name__)
        return ToolResult(
            ok=False,
            error=f"trello_error:{type(e).__name__}: {redact_credentials(str(e))}",
            error_kind="trello_error",
        )
    except Exception as e:
        logger.exception("Tool %s failed unexpectedly", tool)
        return ToolResult(ok=False, error=f"internal_error:{type(e).__name__}", error_kind="internal_error")
