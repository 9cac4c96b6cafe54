"""Wire models for the RepoFlow REST API.

RepoFlow speaks camelCase JSON; the structs rename fields accordingly and
ignore any attributes they do not declare.
"""

from __future__ import annotations

import msgspec


class Workspace(msgspec.Struct, kw_only=True, rename="camel"):
    """Workspace as returned by RepoFlow."""

    id: str
    name: str


class WorkspaceOptions(msgspec.Struct, kw_only=True, rename="camel"):
    """Payload for creating a workspace."""

    name: str


class ChildRepository(msgspec.Struct, kw_only=True, rename="camel"):
    """Child entry of a virtual repository.

    RepoFlow returns full objects here; only ``id`` crosses into declared
    state.
    """

    id: str
    name: str | None = None


class RemoteRepository(msgspec.Struct, kw_only=True, rename="camel"):
    """Repository as created or fetched from RepoFlow.

    RepoFlow may send ``null`` or an empty string for the type fields and
    ``null`` for the cache flag; consumers treat both as unset.
    """

    id: str
    name: str
    repository_type: str | None = None
    package_type: str | None = None
    remote_repository_url: str | None = None
    remote_repository_username: str | None = None
    remote_repository_password: str | None = None
    is_remote_cache_enabled: bool | None = None
    file_cache_time_till_revalidation: int | None = None
    metadata_cache_time_till_revalidation: int | None = None
    child_repositories: list[ChildRepository] | None = None
    upload_local_repository_id: str | None = None


class DeletedRepository(msgspec.Struct, kw_only=True, rename="camel"):
    """Acknowledgement returned when a repository is deleted."""

    repository_id: str


class LocalRepositoryOptions(msgspec.Struct, kw_only=True, rename="camel"):
    """Payload for creating a local repository."""

    name: str
    package_type: str


class RemoteRepositoryOptions(msgspec.Struct, kw_only=True, rename="camel"):
    """Payload for creating a remote (proxy) repository.

    ``None`` cache durations are sent as JSON ``null``, which RepoFlow treats
    as "cache indefinitely".
    """

    name: str
    package_type: str
    remote_repository_url: str
    remote_repository_username: str | None = None
    remote_repository_password: str | None = None
    is_remote_cache_enabled: bool = False
    file_cache_time_till_revalidation: int | None = None
    metadata_cache_time_till_revalidation: int | None = None


class VirtualRepositoryOptions(msgspec.Struct, kw_only=True, rename="camel"):
    """Payload for creating a virtual repository."""

    name: str
    package_type: str
    child_repository_ids: list[str]
    upload_local_repository_id: str | None = None


type RepositoryOptions = (
    LocalRepositoryOptions | RemoteRepositoryOptions | VirtualRepositoryOptions
)
