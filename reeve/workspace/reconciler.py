"""Workspace lifecycle reconciler."""

from __future__ import annotations

import typing as typ

from reeve.errors import ReplacementRequiredError, ValidationError
from reeve.logging import get_logger, log_info, log_trace
from reeve.repoflow.errors import RepoFlowError, RepoFlowNotFoundError
from reeve.repoflow.models import WorkspaceOptions
from reeve.repository.schema import WORKSPACE_ATTRIBUTES, replacement_attributes
from reeve.workspace.errors import (
    WorkspaceNotFoundError,
    WorkspaceOperationFailedError,
)
from reeve.workspace.models import WorkspaceState

if typ.TYPE_CHECKING:
    from reeve.repoflow.client import RepoFlowGateway
    from reeve.repoflow.models import Workspace
    from reeve.workspace.models import WorkspaceDesired

logger = get_logger(__name__)


def _to_state(workspace: Workspace) -> WorkspaceState:
    return WorkspaceState(id=workspace.id, name=workspace.name)


class WorkspaceReconciler:
    """Create, read and delete RepoFlow workspaces.

    A workspace has a single declared attribute, ``name``, which cannot
    change in place.
    """

    def __init__(self, gateway: RepoFlowGateway) -> None:
        """Configure the reconciler with a RepoFlow gateway."""
        self._gateway = gateway

    def create(self, desired: WorkspaceDesired) -> WorkspaceState:
        """Create the workspace and return its tracked state."""
        if not desired.name.strip():
            msg = "'name' is required for workspaces"
            raise ValidationError(msg)
        try:
            workspace = self._gateway.create_workspace(
                WorkspaceOptions(name=desired.name)
            )
        except RepoFlowError as exc:
            raise WorkspaceOperationFailedError(
                "create", desired.name, str(exc)
            ) from exc
        state = _to_state(workspace)
        log_info(
            logger,
            "[workspace.create.completed] id=%s name=%s",
            state.id,
            state.name,
        )
        return state

    def read(self, workspace_id: str) -> WorkspaceState:
        """Refresh tracked state for ``workspace_id``.

        Raises
        ------
        WorkspaceNotFoundError
            If RepoFlow no longer has the workspace.

        """
        try:
            workspace = self._gateway.get_workspace(workspace_id)
        except RepoFlowNotFoundError as exc:
            raise WorkspaceNotFoundError(workspace_id) from exc
        except RepoFlowError as exc:
            raise WorkspaceOperationFailedError(
                "read", workspace_id, str(exc)
            ) from exc
        state = _to_state(workspace)
        log_trace(logger, "[workspace.read.completed] id=%s", state.id)
        return state

    def update(
        self, prior: WorkspaceState, desired: WorkspaceDesired
    ) -> WorkspaceState:
        """Re-persist ``desired``; a renamed workspace must be replaced."""
        changed = replacement_attributes(prior.desired, desired, WORKSPACE_ATTRIBUTES)
        if changed:
            raise ReplacementRequiredError(changed)
        return prior

    def delete(self, state: WorkspaceState) -> None:
        """Delete the workspace, addressing it by name."""
        try:
            self._gateway.delete_workspace(state.name)
        except RepoFlowNotFoundError as exc:
            raise WorkspaceNotFoundError(state.name) from exc
        except RepoFlowError as exc:
            raise WorkspaceOperationFailedError(
                "delete", state.name, str(exc)
            ) from exc
        log_info(
            logger,
            "[workspace.delete.completed] id=%s name=%s",
            state.id,
            state.name,
        )

    def import_state(self, workspace_id: str) -> WorkspaceState:
        """Adopt an existing workspace; the import id is its RepoFlow id."""
        return self.read(workspace_id)
