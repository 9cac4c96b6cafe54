"""Structured lifecycle events for repository reconciliation.

Events are emitted through femtologging as ``[event] key=value`` lines.
Create payloads are logged at DEBUG after redaction; sensitive attributes are
never written in clear.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

from reeve.common.secret import REDACTED
from reeve.logging import get_logger, log_debug, log_error, log_info, log_trace

if typ.TYPE_CHECKING:
    from reeve.logging import SupportsLog
    from reeve.repoflow.models import RepositoryOptions
    from reeve.repository.models import RepositoryState

logger = get_logger(__name__)

_SENSITIVE_WIRE_FIELDS = frozenset({"remoteRepositoryPassword"})


class RepositoryEventType(enum.StrEnum):
    """Structured log event types for repository lifecycle operations."""

    CREATE_REQUESTED = "repository.create.requested"
    CREATE_COMPLETED = "repository.create.completed"
    READ_COMPLETED = "repository.read.completed"
    UPDATE_COMPLETED = "repository.update.completed"
    DELETE_COMPLETED = "repository.delete.completed"
    IMPORT_COMPLETED = "repository.import.completed"
    OPERATION_FAILED = "repository.operation.failed"


def redact_request(request: RepositoryOptions) -> dict[str, typ.Any]:
    """Return the wire payload of ``request`` with secrets masked."""
    payload = typ.cast("dict[str, typ.Any]", msgspec.to_builtins(request))
    for key in _SENSITIVE_WIRE_FIELDS & payload.keys():
        if payload[key] is not None:
            payload[key] = REDACTED
    return payload


class RepositoryEventLogger:
    """Emit repository lifecycle events via femtologging."""

    def __init__(self, target: SupportsLog | None = None) -> None:
        """Log to ``target``, defaulting to this module's logger."""
        self._logger = target or logger

    def log_create_requested(
        self, *, workspace_id: str, variant: str, request: RepositoryOptions
    ) -> None:
        """Log the redacted create payload about to be sent."""
        log_debug(
            self._logger,
            "[%s] workspace_id=%s repository_type=%s options=%s",
            RepositoryEventType.CREATE_REQUESTED,
            workspace_id,
            variant,
            msgspec.json.encode(redact_request(request)).decode(),
        )

    def log_created(self, state: RepositoryState) -> None:
        """Log a successful create."""
        desired = state.desired
        log_info(
            self._logger,
            "[%s] id=%s repository_id=%s workspace_id=%s "
            "repository_type=%s package_type=%s",
            RepositoryEventType.CREATE_COMPLETED,
            state.composite_id,
            state.repository_id,
            state.workspace_id,
            desired.repository_type,
            desired.package_type,
        )

    def log_read(self, state: RepositoryState) -> None:
        """Log a refresh of tracked state."""
        log_trace(
            self._logger,
            "[%s] id=%s",
            RepositoryEventType.READ_COMPLETED,
            state.composite_id,
        )

    def log_updated(self, state: RepositoryState) -> None:
        """Log an in-place re-persist of unchanged declared state."""
        log_trace(
            self._logger,
            "[%s] id=%s",
            RepositoryEventType.UPDATE_COMPLETED,
            state.composite_id,
        )

    def log_deleted(self, *, workspace_id: str, repository_id: str) -> None:
        """Log a successful delete."""
        log_info(
            self._logger,
            "[%s] workspace_id=%s repository_id=%s",
            RepositoryEventType.DELETE_COMPLETED,
            workspace_id,
            repository_id,
        )

    def log_imported(self, state: RepositoryState) -> None:
        """Log a successful import."""
        log_info(
            self._logger,
            "[%s] id=%s workspace=%s",
            RepositoryEventType.IMPORT_COMPLETED,
            state.composite_id,
            state.desired.workspace,
        )

    def log_failed(self, *, operation: str, error: BaseException) -> None:
        """Log a failed lifecycle operation with the error attached."""
        log_error(
            self._logger,
            "[%s] operation=%s error_type=%s error_message=%s",
            RepositoryEventType.OPERATION_FAILED,
            operation,
            type(error).__name__,
            str(error),
            exc_info=error,
        )
