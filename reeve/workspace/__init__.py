"""Workspace reconciliation.

Workspaces own repositories but are created and deleted independently; a
repository references its workspace by name or id.
"""

from reeve.workspace.errors import (
    WorkspaceNotFoundError,
    WorkspaceOperationFailedError,
)
from reeve.workspace.models import WorkspaceDesired, WorkspaceState
from reeve.workspace.reconciler import WorkspaceReconciler

__all__ = [
    "WorkspaceDesired",
    "WorkspaceNotFoundError",
    "WorkspaceOperationFailedError",
    "WorkspaceReconciler",
    "WorkspaceState",
]
