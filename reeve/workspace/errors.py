"""Errors specific to workspace reconciliation."""

from __future__ import annotations

from reeve.errors import NotFoundError, ReeveError


class WorkspaceNotFoundError(NotFoundError):
    """Raised when a workspace name or id does not resolve."""

    def __init__(self, ref: str) -> None:
        """Initialise with the unresolved workspace reference."""
        self.ref = ref
        super().__init__(f"Workspace not found: {ref}")


class WorkspaceOperationFailedError(ReeveError):
    """Raised when a RepoFlow workspace call fails."""

    def __init__(self, operation: str, ref: str, reason: str) -> None:
        """Initialise with the attempted operation, workspace and reason."""
        self.operation = operation
        self.ref = ref
        self.reason = reason
        super().__init__(f"Unable to {operation} workspace {ref}: {reason}")
