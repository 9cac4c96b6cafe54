"""Unit tests for the RepoFlow REST client."""

from __future__ import annotations

import json
import secrets

import httpx
import pytest

from reeve.repoflow import (
    LocalRepositoryOptions,
    RemoteRepositoryOptions,
    RepoFlowAPIError,
    RepoFlowClient,
    RepoFlowConfig,
    RepoFlowConfigError,
    RepoFlowNotFoundError,
    RepoFlowResponseShapeError,
    VirtualRepositoryOptions,
    WorkspaceOptions,
)

_API_KEY = secrets.token_hex(8)
_HTTP_OK = 200
_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404


def _make_client(
    responses: list[httpx.Response],
) -> tuple[RepoFlowClient, list[httpx.Request]]:
    """Return a client backed by a mock transport and its request log."""
    requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responses[len(requests) - 1]

    http_client = httpx.Client(
        transport=httpx.MockTransport(_handler),
        base_url="https://repoflow.test/api",
    )
    client = RepoFlowClient(
        RepoFlowConfig(base_url="https://repoflow.test/api", api_key=_API_KEY),
        http_client=http_client,
    )
    return client, requests


def _json(payload: object, status: int = _HTTP_OK) -> httpx.Response:
    """Return a JSON response carrying `payload`."""
    return httpx.Response(status_code=status, json=payload)


def test_resolve_workspace_by_name_quotes_the_path_segment() -> None:
    """resolve_workspace percent-encodes workspace names in the URL path."""
    client, requests = _make_client([_json({"id": "ws-1", "name": "my team"})])

    assert client.resolve_workspace("my team") == "ws-1"
    assert requests[0].method == "GET"
    assert requests[0].url.raw_path == b"/api/workspaces/my%20team"


def test_create_local_posts_camel_case_payload() -> None:
    """create_local_repository posts a camelCase JSON body."""
    client, requests = _make_client(
        [
            _json(
                {
                    "id": "r1",
                    "name": "local-example",
                    "repositoryType": "local",
                    "packageType": "npm",
                }
            )
        ]
    )

    repository = client.create_local_repository(
        "ws-1", LocalRepositoryOptions(name="local-example", package_type="npm")
    )

    assert repository.id == "r1"
    assert repository.repository_type == "local"
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/workspaces/ws-1/repositories/local"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "name": "local-example",
        "packageType": "npm",
    }


def test_create_remote_sends_null_cache_durations() -> None:
    """Unset cache durations are sent as null while zero is kept."""
    client, requests = _make_client([_json({"id": "r2", "name": "npm-proxy"})])

    client.create_remote_repository(
        "ws-1",
        RemoteRepositoryOptions(
            name="npm-proxy",
            package_type="npm",
            remote_repository_url="https://registry.npmjs.org",
            file_cache_time_till_revalidation=0,
        ),
    )

    body = json.loads(requests[0].content)
    assert requests[0].url.path == "/api/workspaces/ws-1/repositories/remote"
    assert body["fileCacheTimeTillRevalidation"] == 0
    assert body["metadataCacheTimeTillRevalidation"] is None
    assert body["remoteRepositoryUrl"] == "https://registry.npmjs.org"


def test_create_virtual_decodes_child_repositories() -> None:
    """Virtual repository children decode as objects in response order."""
    client, requests = _make_client(
        [
            _json(
                {
                    "id": "r3",
                    "name": "all-npm",
                    "repositoryType": "virtual",
                    "childRepositories": [{"id": "a", "name": "A"}, {"id": "b"}],
                    "uploadLocalRepositoryId": "a",
                }
            )
        ]
    )

    repository = client.create_virtual_repository(
        "ws-1",
        VirtualRepositoryOptions(
            name="all-npm", package_type="npm", child_repository_ids=["a", "b"]
        ),
    )

    assert [child.id for child in repository.child_repositories or []] == ["a", "b"]
    assert json.loads(requests[0].content)["childRepositoryIds"] == ["a", "b"]


def test_requests_carry_bearer_token_and_user_agent() -> None:
    """The client authenticates with a bearer token and a reeve user agent."""
    client = RepoFlowClient(
        RepoFlowConfig(base_url="https://repoflow.test/api", api_key=_API_KEY)
    )
    try:
        headers = client._client.headers
        assert headers["Authorization"] == f"Bearer {_API_KEY}"
        assert headers["User-Agent"].startswith("reeve/")
    finally:
        client.close()


def test_not_found_is_distinguished() -> None:
    """A 404 response raises RepoFlowNotFoundError with the body text."""
    client, _ = _make_client([httpx.Response(_HTTP_NOT_FOUND, text="no such repo")])

    with pytest.raises(RepoFlowNotFoundError, match="no such repo"):
        client.get_repository("ws-1", "r404")


def test_http_errors_include_status_and_detail() -> None:
    """Other HTTP errors carry the status code and response detail."""
    client, _ = _make_client([httpx.Response(_HTTP_BAD_REQUEST, text="bad name")])

    with pytest.raises(RepoFlowAPIError) as excinfo:
        client.create_workspace(WorkspaceOptions(name=""))

    assert excinfo.value.status_code == _HTTP_BAD_REQUEST
    assert "bad name" in str(excinfo.value)
    assert not isinstance(excinfo.value, RepoFlowNotFoundError)


def test_transport_failures_become_api_errors() -> None:
    """Connection failures surface as RepoFlowAPIError."""
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = RepoFlowClient(
        RepoFlowConfig(base_url="https://repoflow.test/api", api_key=_API_KEY),
        http_client=httpx.Client(
            transport=httpx.MockTransport(_handler),
            base_url="https://repoflow.test/api",
        ),
    )

    with pytest.raises(RepoFlowAPIError, match="network error"):
        client.get_workspace("example")


def test_timeouts_become_api_errors() -> None:
    """Timeouts surface as RepoFlowAPIError."""
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = RepoFlowClient(
        RepoFlowConfig(base_url="https://repoflow.test/api", api_key=_API_KEY),
        http_client=httpx.Client(
            transport=httpx.MockTransport(_handler),
            base_url="https://repoflow.test/api",
        ),
    )

    with pytest.raises(RepoFlowAPIError, match="timed out"):
        client.get_workspace("example")


def test_unexpected_body_raises_shape_error() -> None:
    """Bodies missing required fields raise RepoFlowResponseShapeError."""
    client, _ = _make_client([_json({"unexpected": True})])

    with pytest.raises(RepoFlowResponseShapeError):
        client.get_repository("ws-1", "r1")


def test_delete_with_empty_body_echoes_requested_id() -> None:
    """An empty delete response acknowledges the requested id."""
    client, requests = _make_client([httpx.Response(_HTTP_OK, content=b"")])

    deleted = client.delete_repository("ws-1", "r1")

    assert deleted.repository_id == "r1"
    assert requests[0].method == "DELETE"
    assert requests[0].url.path == "/api/workspaces/ws-1/repositories/r1"


def test_delete_decodes_acknowledgement() -> None:
    """A delete acknowledgement body is decoded."""
    client, _ = _make_client([_json({"repositoryId": "r1"})])

    assert client.delete_repository("ws-1", "r1").repository_id == "r1"


def test_blank_api_key_is_rejected() -> None:
    """A whitespace-only API key is rejected before any request."""
    with pytest.raises(RepoFlowConfigError):
        RepoFlowClient(RepoFlowConfig(base_url="https://repoflow.test", api_key=" "))


def test_injected_client_is_not_closed() -> None:
    """Leaving the context does not close an injected httpx client."""
    client, _ = _make_client([])
    http_client = client._client

    with client:
        pass

    assert not http_client.is_closed


def test_get_repository_accepts_null_type_and_cache_fields() -> None:
    """Null type fields and a null cache flag decode as unset."""
    client, requests = _make_client(
        [
            _json(
                {
                    "id": "r1",
                    "name": "local-example",
                    "repositoryType": None,
                    "packageType": None,
                    "isRemoteCacheEnabled": None,
                    "childRepositories": None,
                }
            )
        ]
    )

    repository = client.get_repository("ws-1", "r1")

    assert requests[0].url.path == "/api/workspaces/ws-1/repositories/r1"
    assert repository.repository_type is None
    assert repository.package_type is None
    assert repository.is_remote_cache_enabled is None
    assert repository.child_repositories is None
