"""Typed manifest structures declaring workspaces and repositories."""

from __future__ import annotations

import msgspec


class WorkspaceEntry(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Workspace declaration.

    Attributes
    ----------
    name : str
        Workspace name to create.

    """

    name: str


class RepositoryEntry(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Repository declaration.

    Attribute names match :class:`reeve.repository.RepositoryDesired`. Only
    the attributes of the declared ``repository_type`` should be set.
    """

    name: str
    workspace: str
    repository_type: str
    package_type: str
    remote_url: str | None = None
    remote_username: str | None = None
    remote_password: str | None = None
    remote_cache_enabled: bool = False
    file_cache_ttl_ms: int | None = None
    metadata_cache_ttl_ms: int | None = None
    child_repository_ids: list[str] | None = None
    upload_local_repository_id: str | None = None


class Manifest(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Top-level manifest.

    Attributes
    ----------
    version
        Manifest format version; only ``1`` is understood.
    workspaces
        Workspaces to create before any repository.
    repositories
        Repositories, in the order they should be created.

    """

    version: int
    workspaces: list[WorkspaceEntry] = msgspec.field(default_factory=list)
    repositories: list[RepositoryEntry] = msgspec.field(default_factory=list)
