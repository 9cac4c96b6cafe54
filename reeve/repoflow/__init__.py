"""RepoFlow REST gateway: configuration, wire models and the HTTP client."""

from __future__ import annotations

from .client import RepoFlowClient, RepoFlowGateway
from .config import RepoFlowConfig
from .errors import (
    RepoFlowAPIError,
    RepoFlowConfigError,
    RepoFlowError,
    RepoFlowNotFoundError,
    RepoFlowResponseShapeError,
)
from .models import (
    ChildRepository,
    DeletedRepository,
    LocalRepositoryOptions,
    RemoteRepository,
    RemoteRepositoryOptions,
    RepositoryOptions,
    VirtualRepositoryOptions,
    Workspace,
    WorkspaceOptions,
)

__all__ = [
    "ChildRepository",
    "DeletedRepository",
    "LocalRepositoryOptions",
    "RemoteRepository",
    "RemoteRepositoryOptions",
    "RepoFlowAPIError",
    "RepoFlowClient",
    "RepoFlowConfig",
    "RepoFlowConfigError",
    "RepoFlowError",
    "RepoFlowGateway",
    "RepoFlowNotFoundError",
    "RepoFlowResponseShapeError",
    "RepositoryOptions",
    "VirtualRepositoryOptions",
    "Workspace",
    "WorkspaceOptions",
]
