"""Board, card and list access checks.

`check_board_access` is the single place where allow/deny is decided. Card and
list checks look up the entity's owning board on every call (entities can move
between boards) and delegate to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Collection, Dict, Literal, Optional

from trellogate.authz.board_ids import BoardIdCache, resolve_canonical_board_id
from trellogate.authz.errors import AccessDenied, EntityLookupFailed
from trellogate.authz.policy import BoardPolicy, get_board_policy, redact_credentials
from trellogate.providers.trello_provider import TrelloProvider, get_trello_provider

logger = logging.getLogger(__name__)

EntityKind = Literal["card", "list"]

# (operation, board_id, provenance, allowed_board_ids)
DenialSink = Callable[[str, str, str, Collection[str]], None]


@dataclass(frozen=True)
class AccessDecision:
    permitted: bool
    board_id: str
    operation: str
    allowed_boards_key: Optional[str] = None

    def to_error(self) -> AccessDenied:
        return AccessDenied(self.board_id, self.operation, self.allowed_boards_key)


def decide_board_access(board_id: str, operation: str, *, policy: BoardPolicy) -> AccessDecision:
    """Pure allow-list decision for a canonical board id."""
    return AccessDecision(
        permitted=policy.is_allowed(board_id),
        board_id=board_id,
        operation=operation,
        allowed_boards_key=policy.allowed_boards_key,
    )


def log_denial(operation: str, board_id: str, provenance: str, allowed_board_ids: Collection[str]) -> None:
    logger.warning(
        "[UNAUTHORIZED] Attempted %s on board %s which is not in the allowed list from %s.",
        operation,
        board_id,
        provenance,
    )
    logger.warning("[UNAUTHORIZED] Allowed board IDs: %s", ", ".join(sorted(allowed_board_ids)))


def _emit_denial(policy: BoardPolicy, decision: AccessDecision, sink: Optional[DenialSink]) -> None:
    if not policy.verbose:
        return
    try:
        (sink or log_denial)(
            decision.operation,
            decision.board_id,
            policy.provenance,
            policy.allowed_board_ids or frozenset(),
        )
    except Exception:
        # Diagnostics are best-effort; the denial itself still stands.
        pass


def check_board_access(
    board_id: str,
    operation: str,
    normalize: bool = True,
    *,
    policy: Optional[BoardPolicy] = None,
    provider: Optional[TrelloProvider] = None,
    cache: Optional[BoardIdCache] = None,
    sink: Optional[DenialSink] = None,
) -> bool:
    """
    Check a board against the configured allow-list.

    Args:
        board_id: Board id (short or canonical when normalize=True)
        operation: Operation label for messages and diagnostics
        normalize: Resolve board_id to its canonical form first

    Returns:
        True when the board is allowed

    Raises:
        BoardNotResolvable if normalization fails
        AccessDenied if the board is not in the allow-list
    """
    if normalize:
        board_id = resolve_canonical_board_id(board_id, operation=operation, provider=provider, cache=cache)

    pol = policy or get_board_policy()
    decision = decide_board_access(board_id, operation, policy=pol)
    if decision.permitted:
        return True

    _emit_denial(pol, decision, sink)
    raise decision.to_error()


def _entity_fetcher(kind: EntityKind, provider: TrelloProvider) -> Callable[[str], Dict[str, Any]]:
    if kind == "card":
        return provider.get_card
    if kind == "list":
        return provider.get_list
    raise ValueError(f"unsupported entity kind: {kind}")


def check_entity_access(
    kind: EntityKind,
    entity_id: str,
    operation: str,
    *,
    policy: Optional[BoardPolicy] = None,
    provider: Optional[TrelloProvider] = None,
    cache: Optional[BoardIdCache] = None,
    sink: Optional[DenialSink] = None,
) -> None:
    """
    Check a card or list via its owning board.

    Raises:
        EntityLookupFailed if the entity (or its board id) cannot be fetched
        AccessDenied / BoardNotResolvable from the board check, unchanged
        ValueError for a kind other than "card" or "list"
    """
    trello = provider or get_trello_provider()
    fetch = _entity_fetcher(kind, trello)
    try:
        entity = fetch(entity_id)
        board_id = str(entity.get("idBoard") or "").strip() if isinstance(entity, dict) else ""
        if not board_id:
            raise ValueError(f"{kind} has no idBoard")
    except Exception as e:
        logger.error(
            "Error checking %s access for %s (operation=%s): %s",
            kind,
            entity_id,
            operation,
            redact_credentials(str(e)),
        )
        raise EntityLookupFailed(kind, entity_id, operation, e) from e

    check_board_access(
        board_id,
        f"{operation} ({kind} {entity_id})",
        normalize=True,
        policy=policy,
        provider=trello,
        cache=cache,
        sink=sink,
    )


def check_card_access(card_id: str, operation: str, **kwargs: Any) -> None:
    check_entity_access("card", card_id, operation, **kwargs)


def check_list_access(list_id: str, operation: str, **kwargs: Any) -> None:
    check_entity_access("list", list_id, operation, **kwargs)
