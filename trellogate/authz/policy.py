"""Board allow-list policy (YAML file driven).

The board config file maps a group key to a list of boards:

    work:
      - name: Sprint board
        id: 5f1e2d3c4b5a69788796a5b4

`TRELLO_MCP_CONFIG_PATH` points at the file and `TRELLO_ALLOWED_BOARDS_KEY`
selects the group. When either is unset there is no allow-list and every board
is reachable (open access).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, FrozenSet, List, Optional

import yaml

from trellogate.config import ConfigError, TrelloConfig, get_config

logger = logging.getLogger(__name__)

# Trello credentials travel as query params and show up in requests' error messages.
_CREDENTIAL_PARAM = re.compile(r"(?i)\b(key|token)=[^&\s'\"]+")


def redact_credentials(text: str) -> str:
    """Mask `key=` and `token=` values in error text before it is logged or returned."""
    if not text:
        return text
    return _CREDENTIAL_PARAM.sub(r"\1=[REDACTED]", text)


@dataclass(frozen=True)
class BoardPolicy:
    # None (or empty) means open access, not "deny everything".
    allowed_board_ids: Optional[FrozenSet[str]] = None

    # Provenance, used in operator-facing denial messages
    config_path: Optional[str] = None
    allowed_boards_key: Optional[str] = None

    # Verbose mode: denials are written to the diagnostics sink
    verbose: bool = False

    @property
    def open_access(self) -> bool:
        return not self.allowed_board_ids

    @property
    def provenance(self) -> str:
        if self.config_path and self.allowed_boards_key:
            return f"YAML config ({self.config_path}:{self.allowed_boards_key})"
        return "configuration"

    def is_allowed(self, board_id: str) -> bool:
        if self.open_access:
            return True
        return board_id in (self.allowed_board_ids or frozenset())


def _read_board_ids(config_path: str, allowed_boards_key: str) -> List[str]:
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        data: Any = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or data.get(allowed_boards_key) is None:
        raise ConfigError(f"Key '{allowed_boards_key}' not found in config file")

    boards = data[allowed_boards_key]
    if not isinstance(boards, list):
        raise ConfigError(f"Value for key '{allowed_boards_key}' must be an array")

    ids: List[str] = []
    for board in boards:
        board_id = board.get("id") if isinstance(board, dict) else None
        if not board_id:
            raise ConfigError(f"Board missing 'id' field in '{allowed_boards_key}' configuration")
        ids.append(str(board_id).strip())
    return ids


def load_board_policy(
    config_path: Optional[str],
    allowed_boards_key: Optional[str],
    *,
    verbose: bool = False,
) -> BoardPolicy:
    """
    Load the board allow-list from the YAML config file.

    Raises:
        ConfigError if the file or key is missing or malformed
    """
    if not config_path or not allowed_boards_key:
        return BoardPolicy(verbose=verbose)

    try:
        ids = _read_board_ids(config_path, allowed_boards_key)
    except (ConfigError, OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load board configuration: {e}") from e

    return BoardPolicy(
        allowed_board_ids=frozenset(ids),
        config_path=config_path,
        allowed_boards_key=allowed_boards_key,
        verbose=verbose,
    )


def load_board_policy_from_config(config: TrelloConfig) -> BoardPolicy:
    policy = load_board_policy(config.config_path, config.allowed_boards_key, verbose=config.debug)
    if policy.open_access:
        logger.warning("No board allow-list configured: all boards are accessible (open access)")
    else:
        logger.info(
            "Board allow-list loaded from %s (%d boards)",
            policy.provenance,
            len(policy.allowed_board_ids or ()),
        )
    return policy


# Singleton instance
_board_policy: Optional[BoardPolicy] = None


def get_board_policy() -> BoardPolicy:
    """
    Get the process board policy (singleton).

    Loaded once from the process configuration and treated as immutable afterwards.
    """
    global _board_policy
    if _board_policy is None:
        _board_policy = load_board_policy_from_config(get_config())
    return _board_policy


def set_board_policy(policy: Optional[BoardPolicy]) -> None:
    """Set board policy instance (for startup wiring and testing)."""
    global _board_policy
    _board_policy = policy
