"""RepoFlow REST client used by the reconcilers."""

from __future__ import annotations

import typing as typ
from urllib.parse import quote

import httpx
import msgspec

from .errors import RepoFlowAPIError, RepoFlowConfigError, RepoFlowResponseShapeError
from .models import (
    DeletedRepository,
    LocalRepositoryOptions,
    RemoteRepository,
    RemoteRepositoryOptions,
    VirtualRepositoryOptions,
    Workspace,
    WorkspaceOptions,
)

if typ.TYPE_CHECKING:
    from .config import RepoFlowConfig

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DETAIL_PREVIEW_LIMIT = 200

_T = typ.TypeVar("_T")


class RepoFlowGateway(typ.Protocol):
    """Remote operations the reconcilers depend on.

    Every method blocks until RepoFlow answers. Missing resources raise
    :class:`~reeve.repoflow.errors.RepoFlowNotFoundError`; any other failure
    raises :class:`~reeve.repoflow.errors.RepoFlowError`.
    """

    def resolve_workspace(self, ref: str) -> str:
        """Return the id of the workspace identified by name or id."""
        ...

    def create_local_repository(
        self, workspace_id: str, options: LocalRepositoryOptions
    ) -> RemoteRepository:
        """Create a local repository."""
        ...

    def create_remote_repository(
        self, workspace_id: str, options: RemoteRepositoryOptions
    ) -> RemoteRepository:
        """Create a remote repository."""
        ...

    def create_virtual_repository(
        self, workspace_id: str, options: VirtualRepositoryOptions
    ) -> RemoteRepository:
        """Create a virtual repository."""
        ...

    def get_repository(self, workspace_id: str, repository_id: str) -> RemoteRepository:
        """Fetch a repository."""
        ...

    def delete_repository(
        self, workspace_id: str, repository_id: str
    ) -> DeletedRepository:
        """Delete a repository."""
        ...

    def create_workspace(self, options: WorkspaceOptions) -> Workspace:
        """Create a workspace."""
        ...

    def get_workspace(self, ref: str) -> Workspace:
        """Fetch a workspace by name or id."""
        ...

    def delete_workspace(self, ref: str) -> Workspace:
        """Delete a workspace by name or id."""
        ...


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_detail(response: httpx.Response) -> str | None:
    text = response.text.strip()
    if not text:
        return None
    return text[:_DETAIL_PREVIEW_LIMIT]


class RepoFlowClient:
    """Synchronous ``httpx`` implementation of :class:`RepoFlowGateway`."""

    def __init__(
        self,
        config: RepoFlowConfig,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.api_key.strip():
            raise RepoFlowConfigError.empty_api_key()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "User-Agent": config.user_agent,
                "Accept": "application/json",
            },
        )

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> typ.Self:
        """Return the client for use as a context manager."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close owned HTTP resources on exit."""
        self.close()

    def resolve_workspace(self, ref: str) -> str:
        """Return the id of the workspace identified by name or id."""
        return self.get_workspace(ref).id

    def get_workspace(self, ref: str) -> Workspace:
        """Fetch a workspace by name or id."""
        response = self._request("GET", f"/workspaces/{_segment(ref)}")
        return self._decode(response, Workspace, what="workspace")

    def create_workspace(self, options: WorkspaceOptions) -> Workspace:
        """Create a workspace."""
        response = self._request("POST", "/workspaces", payload=options)
        return self._decode(response, Workspace, what="workspace")

    def delete_workspace(self, ref: str) -> Workspace:
        """Delete a workspace by name or id."""
        response = self._request("DELETE", f"/workspaces/{_segment(ref)}")
        return self._decode(response, Workspace, what="workspace")

    def create_local_repository(
        self, workspace_id: str, options: LocalRepositoryOptions
    ) -> RemoteRepository:
        """Create a local repository."""
        return self._create_repository(workspace_id, "local", options)

    def create_remote_repository(
        self, workspace_id: str, options: RemoteRepositoryOptions
    ) -> RemoteRepository:
        """Create a remote repository."""
        return self._create_repository(workspace_id, "remote", options)

    def create_virtual_repository(
        self, workspace_id: str, options: VirtualRepositoryOptions
    ) -> RemoteRepository:
        """Create a virtual repository."""
        return self._create_repository(workspace_id, "virtual", options)

    def get_repository(self, workspace_id: str, repository_id: str) -> RemoteRepository:
        """Fetch a repository."""
        response = self._request(
            "GET", self._repository_path(workspace_id, repository_id)
        )
        return self._decode(response, RemoteRepository, what="repository")

    def delete_repository(
        self, workspace_id: str, repository_id: str
    ) -> DeletedRepository:
        """Delete a repository.

        RepoFlow may answer with an empty body; the acknowledgement then
        echoes the requested id.
        """
        response = self._request(
            "DELETE", self._repository_path(workspace_id, repository_id)
        )
        if not response.content.strip():
            return DeletedRepository(repository_id=repository_id)
        return self._decode(response, DeletedRepository, what="repository delete")

    def _create_repository(
        self,
        workspace_id: str,
        kind: str,
        options: msgspec.Struct,
    ) -> RemoteRepository:
        response = self._request(
            "POST",
            f"/workspaces/{_segment(workspace_id)}/repositories/{kind}",
            payload=options,
        )
        return self._decode(response, RemoteRepository, what="repository")

    @staticmethod
    def _repository_path(workspace_id: str, repository_id: str) -> str:
        return (
            f"/workspaces/{_segment(workspace_id)}"
            f"/repositories/{_segment(repository_id)}"
        )

    def _request(
        self,
        method: str,
        path: str,
        *,
        payload: msgspec.Struct | None = None,
    ) -> httpx.Response:
        """Send a request and raise for transport or HTTP failures."""
        content = None if payload is None else msgspec.json.encode(payload)
        headers = None if content is None else {"Content-Type": "application/json"}
        try:
            response = self._client.request(
                method, path, content=content, headers=headers
            )
        except httpx.TimeoutException as exc:
            raise RepoFlowAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise RepoFlowAPIError.network_error(str(exc)) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise RepoFlowAPIError.http_error(
                response.status_code, _error_detail(response)
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[_T], *, what: str) -> _T:
        try:
            return msgspec.json.decode(response.content, type=model)
        except msgspec.DecodeError as exc:
            raise RepoFlowResponseShapeError.invalid(what, str(exc)) from exc
