from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ToolErrorKind = Literal[
    "tool_missing",
    "unknown_tool",
    "invalid_args",
    "confirmation_required",
    "board_not_resolvable",
    "access_denied",
    "entity_lookup_failed",
    "trello_error",
    "internal_error",
]

Position = Union[Literal["top", "bottom"], float]

# Trello ids (canonical 24-hex and short links) are alphanumeric; ids end up in URL paths.
TRELLO_ID_PATTERN = r"^[A-Za-z0-9]+$"


class ConfirmationRequired(ValueError):
    """A destructive tool was called without `confirm: true`."""


@dataclass(frozen=True)
class ToolResult:
    ok: bool
    result: Any = None
    error: Optional[str] = None
    error_kind: Optional[ToolErrorKind] = None


class ToolArgs(BaseModel):
    # Tool args arrive camelCased (cardId, idList); fields are snake_case with aliases.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --------------------
# boards
# --------------------
class BoardArgs(ToolArgs):
    board_id: str = Field(alias="boardId", pattern=TRELLO_ID_PATTERN, min_length=1)


class BoardListsArgs(BoardArgs):
    filter: Literal["all", "closed", "none", "open"] = "open"


class BoardCardsArgs(BoardArgs):
    filter: Literal["all", "closed", "none", "open", "visible"] = "open"


# --------------------
# cards
# --------------------
class CardArgs(ToolArgs):
    card_id: str = Field(alias="cardId", pattern=TRELLO_ID_PATTERN, min_length=1)


class CreateCardArgs(ToolArgs):
    id_list: str = Field(alias="idList", pattern=TRELLO_ID_PATTERN, min_length=1)
    name: str = Field(min_length=1)
    desc: Optional[str] = None
    pos: Optional[Position] = None
    due: Optional[str] = None
    id_members: Optional[List[str]] = Field(default=None, alias="idMembers")
    id_labels: Optional[List[str]] = Field(default=None, alias="idLabels")


class UpdateCardArgs(CardArgs):
    name: Optional[str] = None
    desc: Optional[str] = None
    pos: Optional[Position] = None
    due: Optional[str] = None
    due_complete: Optional[bool] = Field(default=None, alias="dueComplete")
    closed: Optional[bool] = None
    id_list: Optional[str] = Field(default=None, alias="idList", pattern=TRELLO_ID_PATTERN)
    id_board: Optional[str] = Field(default=None, alias="idBoard", pattern=TRELLO_ID_PATTERN)
    id_members: Optional[List[str]] = Field(default=None, alias="idMembers")
    id_labels: Optional[List[str]] = Field(default=None, alias="idLabels")


class DeleteCardArgs(CardArgs):
    confirm: bool = False


class MoveCardArgs(CardArgs):
    list_id: str = Field(alias="listId", pattern=TRELLO_ID_PATTERN, min_length=1)


class CommentArgs(CardArgs):
    text: str = Field(min_length=1)


class AttachmentArgs(CardArgs):
    url: str = Field(min_length=1)
    name: Optional[str] = None


class DeleteAttachmentArgs(CardArgs):
    attachment_id: str = Field(alias="attachmentId", pattern=TRELLO_ID_PATTERN, min_length=1)


class MemberArgs(CardArgs):
    member_id: str = Field(alias="memberId", pattern=TRELLO_ID_PATTERN, min_length=1)


class LabelArgs(CardArgs):
    label_id: str = Field(alias="labelId", pattern=TRELLO_ID_PATTERN, min_length=1)


class DueDateArgs(CardArgs):
    # None clears the due date
    due: Optional[str] = None


class DueCompleteArgs(CardArgs):
    due_complete: bool = Field(alias="dueComplete")


# --------------------
# lists
# --------------------
class ListArgs(ToolArgs):
    list_id: str = Field(alias="listId", pattern=TRELLO_ID_PATTERN, min_length=1)


class CreateListArgs(ToolArgs):
    id_board: str = Field(alias="idBoard", pattern=TRELLO_ID_PATTERN, min_length=1)
    name: str = Field(min_length=1)
    pos: Optional[Position] = None


class UpdateListArgs(ListArgs):
    name: Optional[str] = None
    closed: Optional[bool] = None
    pos: Optional[Position] = None
    subscribed: Optional[bool] = None
    id_board: Optional[str] = Field(default=None, alias="idBoard", pattern=TRELLO_ID_PATTERN)


class MoveListArgs(ListArgs):
    board_id: str = Field(alias="boardId", pattern=TRELLO_ID_PATTERN, min_length=1)


class ListCardsArgs(ListArgs):
    filter: Literal["all", "closed", "none", "open"] = "open"


class MoveAllCardsArgs(ToolArgs):
    source_list_id: str = Field(alias="sourceListId", pattern=TRELLO_ID_PATTERN, min_length=1)
    destination_list_id: str = Field(alias="destinationListId", pattern=TRELLO_ID_PATTERN, min_length=1)
    board_id: Optional[str] = Field(default=None, alias="boardId", pattern=TRELLO_ID_PATTERN)


class ListPositionArgs(ListArgs):
    position: Position


class ListNameArgs(ListArgs):
    name: str = Field(min_length=1)


class ListSubscribeArgs(ListArgs):
    subscribed: bool
