"""
Card tool handlers.

Every handler checks access (card -> owning board) before touching Trello.
Moves check the destination as well, source first.
"""

from __future__ import annotations

from typing import Any, Dict

from trellogate.authz.access import check_board_access, check_card_access, check_list_access
from trellogate.providers.trello_provider import TrelloProvider
from trellogate.tools.types import (
    AttachmentArgs,
    CardArgs,
    CommentArgs,
    ConfirmationRequired,
    CreateCardArgs,
    DeleteAttachmentArgs,
    DeleteCardArgs,
    DueCompleteArgs,
    DueDateArgs,
    LabelArgs,
    MemberArgs,
    MoveCardArgs,
    UpdateCardArgs,
)


def _done(message: str) -> Dict[str, Any]:
    return {"success": True, "message": message}


def get_card(args: CardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "get_card", provider=provider)
    return provider.get_card(args.card_id)


def create_card(args: CreateCardArgs, provider: TrelloProvider) -> Any:
    check_list_access(args.id_list, "create_card", provider=provider)
    return provider.create_card(args.model_dump(by_alias=True, exclude_none=True))


def update_card(args: UpdateCardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "update_card", provider=provider)
    # idList/idBoard in an update move the card, so the destination is gated too.
    if args.id_list:
        check_list_access(args.id_list, "update_card (target)", provider=provider)
    if args.id_board:
        check_board_access(args.id_board, "update_card (target board)", provider=provider)

    data = args.model_dump(by_alias=True, exclude_none=True, exclude={"card_id"})
    return provider.update_card(args.card_id, data)


def delete_card(args: DeleteCardArgs, provider: TrelloProvider) -> Any:
    if not args.confirm:
        raise ConfirmationRequired("Deletion requires confirmation. Set confirm: true to proceed.")

    check_card_access(args.card_id, "delete_card", provider=provider)
    provider.delete_card(args.card_id)
    return _done("Card deleted successfully")


def archive_card(args: CardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "archive_card", provider=provider)
    return provider.archive_card(args.card_id)


def unarchive_card(args: CardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "unarchive_card", provider=provider)
    return provider.unarchive_card(args.card_id)


def move_card_to_list(args: MoveCardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "move_card_to_list", provider=provider)
    check_list_access(args.list_id, "move_card_to_list (target)", provider=provider)
    return provider.move_card_to_list(args.card_id, args.list_id)


def add_comment(args: CommentArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "add_comment", provider=provider)
    return provider.add_comment(args.card_id, args.text)


def get_comments(args: CardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "get_comments", provider=provider)
    return provider.get_comments(args.card_id)


def add_attachment(args: AttachmentArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "add_attachment", provider=provider)
    return provider.add_attachment(args.card_id, args.url, args.name)


def get_attachments(args: CardArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "get_attachments", provider=provider)
    return provider.get_attachments(args.card_id)


def delete_attachment(args: DeleteAttachmentArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "delete_attachment", provider=provider)
    provider.delete_attachment(args.card_id, args.attachment_id)
    return _done("Attachment deleted successfully")


def add_member(args: MemberArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "add_member", provider=provider)
    provider.add_member(args.card_id, args.member_id)
    return _done("Member added to card successfully")


def remove_member(args: MemberArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "remove_member", provider=provider)
    provider.remove_member(args.card_id, args.member_id)
    return _done("Member removed from card successfully")


def add_label(args: LabelArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "add_label", provider=provider)
    provider.add_label_to_card(args.card_id, args.label_id)
    return _done("Label added to card successfully")


def remove_label(args: LabelArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "remove_label", provider=provider)
    provider.remove_label_from_card(args.card_id, args.label_id)
    return _done("Label removed from card successfully")


def set_due_date(args: DueDateArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "set_due_date", provider=provider)
    # Trello clears the due date when it is sent empty.
    return provider.update_card(args.card_id, {"due": args.due or ""})


def set_due_complete(args: DueCompleteArgs, provider: TrelloProvider) -> Any:
    check_card_access(args.card_id, "set_due_complete", provider=provider)
    return provider.update_card(args.card_id, {"dueComplete": args.due_complete})
