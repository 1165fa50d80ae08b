from __future__ import annotations

from typing import Optional

from trellogate.authz.policy import redact_credentials


class AccessControlError(Exception):
    """Base class for gate failures surfaced to tool callers."""

    kind = "access_control_error"


class BoardNotResolvable(AccessControlError):
    """A board identifier could not be resolved to its canonical form."""

    kind = "board_not_resolvable"

    def __init__(self, board_id: str, operation: str, cause: Optional[BaseException] = None) -> None:
        self.board_id = board_id
        self.operation = operation
        self.cause = cause
        detail = f": {redact_credentials(str(cause))}" if cause is not None else ""
        super().__init__(f"Unable to resolve board '{board_id}' for operation '{operation}'{detail}")


class AccessDenied(AccessControlError):
    """The canonical board is not in the configured allow-list."""

    kind = "access_denied"

    def __init__(self, board_id: str, operation: str, allowed_boards_key: Optional[str]) -> None:
        self.board_id = board_id
        self.operation = operation
        self.allowed_boards_key = allowed_boards_key
        super().__init__(
            f"Access denied: Operation '{operation}' on board '{board_id}' is not allowed "
            f'by the configured access control group: "{allowed_boards_key}"'
        )


class EntityLookupFailed(AccessControlError):
    """The card or list being gated could not be fetched."""

    kind = "entity_lookup_failed"

    def __init__(self, entity_kind: str, entity_id: str, operation: str, cause: Optional[BaseException] = None) -> None:
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        self.operation = operation
        self.cause = cause
        detail = f"{type(cause).__name__}: {redact_credentials(str(cause))}" if cause is not None else "unknown error"
        super().__init__(f"Unable to verify access for {entity_kind} {entity_id}: {detail}")
