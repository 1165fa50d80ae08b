"""Board identifier normalization.

Trello accepts either the short link id (e.g. "aBcD1234" from a board URL) or
the canonical 24-hex id for board lookups, but cards and lists always report
`idBoard` in canonical form and the allow-list is written in canonical form.
Every board id is therefore resolved through `resolve_canonical_board_id`
before it is compared against the allow-list.

Resolutions are memoized for the process lifetime. The cache is unbounded:
a deployment only ever touches a small, stable set of boards, and an input
always resolves to the same board, so entries are never evicted or updated.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Protocol, runtime_checkable

from trellogate.authz.errors import BoardNotResolvable
from trellogate.providers.trello_provider import TrelloProvider, get_trello_provider

logger = logging.getLogger(__name__)


@runtime_checkable
class BoardIdCache(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def insert_if_absent(self, key: str, value: str) -> str:
        """Store value unless key is present; return the stored value."""
        ...

    def __len__(self) -> int: ...


class InMemoryBoardIdCache:
    """Process-wide input id -> canonical id map."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def insert_if_absent(self, key: str, value: str) -> str:
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = value
            return value

    def __len__(self) -> int:
        return len(self._entries)


class _Flight:
    __slots__ = ("lock", "waiters")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.waiters = 0


# Per-key locks so concurrent misses for one id share a single remote lookup.
# An entry lives only while some caller holds or waits on it.
_inflight: Dict[str, _Flight] = {}
_inflight_guard = threading.Lock()


@contextmanager
def _single_flight(key: str) -> Iterator[None]:
    with _inflight_guard:
        flight = _inflight.get(key)
        if flight is None:
            flight = _Flight()
            _inflight[key] = flight
        flight.waiters += 1
    try:
        with flight.lock:
            yield
    finally:
        with _inflight_guard:
            flight.waiters -= 1
            if flight.waiters == 0:
                _inflight.pop(key, None)


def resolve_canonical_board_id(
    board_id: str,
    *,
    operation: str = "get_board",
    provider: Optional[TrelloProvider] = None,
    cache: Optional[BoardIdCache] = None,
) -> str:
    """
    Resolve a short or canonical board id to the canonical id.

    Args:
        board_id: Any id form Trello accepts for board lookup
        operation: Operation label carried on failure
        provider: Trello provider (default: process singleton)
        cache: Identifier cache (default: process singleton)

    Raises:
        BoardNotResolvable when the lookup fails; failures are never cached
    """
    cache = cache if cache is not None else get_board_id_cache()

    key = (board_id or "").strip()
    if not key:
        raise BoardNotResolvable(str(board_id or ""), operation, ValueError("board id is empty"))

    cached = cache.get(key)
    if cached is not None:
        return cached

    with _single_flight(key):
        cached = cache.get(key)
        if cached is not None:
            return cached

        trello = provider or get_trello_provider()
        try:
            board = trello.get_board(key)
        except Exception as e:
            logger.warning("Board lookup failed for %s (operation=%s): %s", key, operation, type(e).__name__)
            raise BoardNotResolvable(key, operation, e) from e

        canonical = str(board.get("id") or "").strip() if isinstance(board, dict) else ""
        if not canonical:
            raise BoardNotResolvable(key, operation, ValueError("board lookup returned no id"))

        if canonical != key:
            logger.debug("Resolved board id %s -> %s", key, canonical)
        return cache.insert_if_absent(key, canonical)


# Singleton instance
_board_id_cache: Optional[BoardIdCache] = None


def get_board_id_cache() -> BoardIdCache:
    """Get the process-wide board id cache (singleton)."""
    global _board_id_cache
    if _board_id_cache is None:
        _board_id_cache = InMemoryBoardIdCache()
    return _board_id_cache


def set_board_id_cache(cache: Optional[BoardIdCache]) -> None:
    """Set board id cache instance (process start/stop and testing)."""
    global _board_id_cache
    _board_id_cache = cache
