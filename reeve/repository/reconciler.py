"""Repository lifecycle reconciler.

Each public method runs one lifecycle operation to completion on the calling
thread. The reconciler keeps no state between calls, performs no locking and
never retries: a single gateway failure is a single operation failure.
"""

from __future__ import annotations

import contextlib
import dataclasses
import typing as typ

from reeve.common.identity import decode_composite_id, split_import_ref
from reeve.errors import ReeveError, ReplacementRequiredError
from reeve.repoflow.errors import RepoFlowError, RepoFlowNotFoundError
from reeve.repoflow.models import (
    LocalRepositoryOptions,
    RemoteRepositoryOptions,
    VirtualRepositoryOptions,
)
from reeve.repository.classification import classify, validate
from reeve.repository.errors import RemoteOperationFailedError, RepositoryNotFoundError
from reeve.repository.mapping import from_remote, to_create_request
from reeve.repository.observability import RepositoryEventLogger
from reeve.repository.schema import replacement_attributes
from reeve.workspace.errors import WorkspaceNotFoundError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from reeve.repoflow.client import RepoFlowGateway
    from reeve.repoflow.models import RemoteRepository, RepositoryOptions
    from reeve.repository.models import RepositoryDesired, RepositoryState


class RepositoryReconciler:
    """Drive RepoFlow repositories towards their declared state.

    Parameters
    ----------
    gateway:
        RepoFlow operations used for every remote call.
    event_logger:
        Optional structured event logger; a default femtologging-backed one
        is used otherwise.

    """

    def __init__(
        self,
        gateway: RepoFlowGateway,
        *,
        event_logger: RepositoryEventLogger | None = None,
    ) -> None:
        """Configure the reconciler with a gateway and event logger."""
        self._gateway = gateway
        self._events = event_logger or RepositoryEventLogger()

    @contextlib.contextmanager
    def _observe(self, operation: str) -> cabc.Iterator[None]:
        try:
            yield
        except ReeveError as exc:
            self._events.log_failed(operation=operation, error=exc)
            raise

    def _resolve_workspace(self, ref: str, *, operation: str) -> str:
        try:
            return self._gateway.resolve_workspace(ref)
        except RepoFlowNotFoundError as exc:
            raise WorkspaceNotFoundError(ref) from exc
        except RepoFlowError as exc:
            raise RemoteOperationFailedError(
                operation, f"cannot resolve workspace: {exc}", workspace=ref
            ) from exc

    def _get(
        self, workspace_id: str, repository_id: str, *, operation: str
    ) -> RemoteRepository:
        try:
            return self._gateway.get_repository(workspace_id, repository_id)
        except RepoFlowNotFoundError as exc:
            raise RepositoryNotFoundError(workspace_id, repository_id) from exc
        except RepoFlowError as exc:
            raise RemoteOperationFailedError(
                operation, str(exc), workspace=workspace_id
            ) from exc

    def _dispatch_create(
        self, workspace_id: str, request: RepositoryOptions
    ) -> RemoteRepository:
        match request:
            case LocalRepositoryOptions():
                return self._gateway.create_local_repository(workspace_id, request)
            case RemoteRepositoryOptions():
                return self._gateway.create_remote_repository(workspace_id, request)
            case VirtualRepositoryOptions():
                return self._gateway.create_virtual_repository(workspace_id, request)

    def create(self, desired: RepositoryDesired) -> RepositoryState:
        """Create the repository described by ``desired``.

        The record is classified and validated before RepoFlow is contacted;
        the workspace reference is then resolved to an id and the
        variant-specific create endpoint is called.

        Returns
        -------
        RepositoryState
            Declared state re-read from the RepoFlow response, keyed by the
            composite id of the resolved workspace and the new repository.

        Raises
        ------
        ValidationError
            If the record is invalid for its variant. No remote call is made.
        WorkspaceNotFoundError
            If the workspace reference does not resolve.
        RemoteOperationFailedError
            If RepoFlow rejects or fails the create call.

        """
        with self._observe("create"):
            variant = classify(desired)
            spec = validate(desired, variant)
            request = to_create_request(spec)

            workspace_id = self._resolve_workspace(spec.workspace, operation="create")
            self._events.log_create_requested(
                workspace_id=workspace_id, variant=variant, request=request
            )
            try:
                remote = self._dispatch_create(workspace_id, request)
            except RepoFlowError as exc:
                raise RemoteOperationFailedError(
                    "create", str(exc), workspace=workspace_id, variant=variant
                ) from exc

            state = from_remote(
                remote, workspace_id, workspace_ref=desired.workspace, prior=desired
            )
            self._events.log_created(state)
            return state

    def read(
        self, composite_id: str, *, prior: RepositoryDesired | None = None
    ) -> RepositoryState:
        """Refresh tracked state for ``composite_id``.

        Parameters
        ----------
        composite_id
            Tracked identity in ``workspaceId/repositoryId`` format.
        prior
            Previously declared record, used to keep the declared workspace
            reference and write-only attributes.

        Raises
        ------
        MalformedIdentityError
            If ``composite_id`` is not a valid composite id.
        RepositoryNotFoundError
            If RepoFlow no longer has the repository; callers should drop it
            from tracked state.

        """
        with self._observe("read"):
            workspace_id, repository_id = decode_composite_id(composite_id)
            remote = self._get(workspace_id, repository_id, operation="read")
            state = from_remote(
                remote,
                workspace_id,
                workspace_ref=prior.workspace if prior is not None else None,
                prior=prior,
            )
            self._events.log_read(state)
            return state

    def update(
        self, prior: RepositoryState, desired: RepositoryDesired
    ) -> RepositoryState:
        """Re-persist ``desired`` when no attribute needs replacement.

        RepoFlow has no in-place update for repositories, so nothing is sent
        remotely.

        Raises
        ------
        ReplacementRequiredError
            If any replace-on-change attribute differs from ``prior``.

        """
        with self._observe("update"):
            changed = replacement_attributes(prior.desired, desired)
            if changed:
                raise ReplacementRequiredError(changed)
            state = dataclasses.replace(prior, desired=desired)
            self._events.log_updated(state)
            return state

    def delete(self, composite_id: str) -> None:
        """Delete the repository tracked as ``composite_id``.

        Raises
        ------
        RepositoryNotFoundError
            If the repository is already gone; this is reported rather than
            ignored.
        RemoteOperationFailedError
            If RepoFlow fails the delete.

        """
        with self._observe("delete"):
            workspace_id, repository_id = decode_composite_id(composite_id)
            try:
                self._gateway.delete_repository(workspace_id, repository_id)
            except RepoFlowNotFoundError as exc:
                raise RepositoryNotFoundError(workspace_id, repository_id) from exc
            except RepoFlowError as exc:
                raise RemoteOperationFailedError(
                    "delete", str(exc), workspace=workspace_id
                ) from exc
            self._events.log_deleted(
                workspace_id=workspace_id, repository_id=repository_id
            )

    def import_state(self, ref: str) -> RepositoryState:
        """Adopt an existing repository from a ``workspace/repositoryId`` ref.

        The workspace side may be a name or an id and is resolved before the
        repository is fetched.

        Raises
        ------
        InvalidImportFormatError
            If ``ref`` is malformed. No remote call is made.
        WorkspaceNotFoundError
            If the workspace does not resolve.
        RepositoryNotFoundError
            If the repository does not exist in the workspace.

        """
        with self._observe("import"):
            workspace_ref, repository_id = split_import_ref(ref)
            workspace_id = self._resolve_workspace(workspace_ref, operation="import")
            remote = self._get(workspace_id, repository_id, operation="import")
            state = from_remote(remote, workspace_id, workspace_ref=workspace_ref)
            self._events.log_imported(state)
            return state
