"""Declared-state types for RepoFlow repositories.

``RepositoryDesired`` is the wide record a caller declares: one shape for all
variants, with the attributes of other variants left unset. The classifier
narrows it into exactly one of the variant specs, which is what the rest of
the pipeline works with.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from reeve.common.identity import check_composite_parts, encode_composite_id

if typ.TYPE_CHECKING:
    from pydantic import SecretStr


class RepositoryType(enum.StrEnum):
    """Structural repository variants supported by RepoFlow."""

    LOCAL = "local"
    REMOTE = "remote"
    VIRTUAL = "virtual"


class PackageType(enum.StrEnum):
    """Registry formats a RepoFlow repository can store."""

    CARGO = "cargo"
    COMPOSER = "composer"
    DEBIAN = "debian"
    DOCKER = "docker"
    GEMS = "gems"
    GO = "go"
    HELM = "helm"
    MAVEN = "maven"
    NPM = "npm"
    NUGET = "nuget"
    PYPI = "pypi"
    RPM = "rpm"
    UNIVERSAL = "universal"


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class RepositoryDesired:
    """Caller-declared repository, regardless of variant.

    Attributes
    ----------
    name
        Repository name.
    workspace
        Workspace name or id the repository belongs to.
    repository_type
        ``local``, ``remote`` or ``virtual``. ``None`` when unknown, for
        example after reading a record whose type RepoFlow left blank.
    package_type
        Registry format, one of :class:`PackageType`.
    remote_url
        Upstream URL proxied by a remote repository.
    remote_username
        Optional upstream username.
    remote_password
        Optional upstream password, wrapped so it never renders.
    remote_cache_enabled
        Whether a remote repository caches upstream artefacts.
    file_cache_ttl_ms
        Milliseconds before cached files are revalidated. ``None`` caches
        indefinitely, which is distinct from ``0``.
    metadata_cache_ttl_ms
        Same as ``file_cache_ttl_ms`` for package metadata.
    child_repository_ids
        Ordered ids of the repositories aggregated by a virtual repository.
    upload_local_repository_id
        Child repository receiving uploads to a virtual repository.

    """

    name: str
    workspace: str
    repository_type: str | None = None
    package_type: str | None = None
    remote_url: str | None = None
    remote_username: str | None = None
    remote_password: SecretStr | None = None
    remote_cache_enabled: bool = False
    file_cache_ttl_ms: int | None = None
    metadata_cache_ttl_ms: int | None = None
    child_repository_ids: tuple[str, ...] | None = None
    upload_local_repository_id: str | None = None


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class LocalRepositorySpec:
    """Validated local repository."""

    variant: typ.ClassVar[RepositoryType] = RepositoryType.LOCAL

    name: str
    workspace: str
    package_type: PackageType


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class RemoteRepositorySpec:
    """Validated remote (proxy) repository."""

    variant: typ.ClassVar[RepositoryType] = RepositoryType.REMOTE

    name: str
    workspace: str
    package_type: PackageType
    url: str
    username: str | None = None
    password: SecretStr | None = None
    cache_enabled: bool = False
    file_cache_ttl_ms: int | None = None
    metadata_cache_ttl_ms: int | None = None


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class VirtualRepositorySpec:
    """Validated virtual repository aggregating child repositories."""

    variant: typ.ClassVar[RepositoryType] = RepositoryType.VIRTUAL

    name: str
    workspace: str
    package_type: PackageType
    child_repository_ids: tuple[str, ...]
    upload_local_repository_id: str | None = None


type RepositorySpec = LocalRepositorySpec | RemoteRepositorySpec | VirtualRepositorySpec


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class RepositoryState:
    """Tracked state of a repository after a successful lifecycle operation.

    The composite id is derived on every access rather than stored, so it
    always reflects the workspace id that was actually resolved. Ids that
    cannot form a composite id are rejected on construction.
    """

    desired: RepositoryDesired
    workspace_id: str
    repository_id: str

    def __post_init__(self) -> None:
        """Reject ids that cannot be encoded as a composite id."""
        check_composite_parts(self.workspace_id, self.repository_id)

    @property
    def composite_id(self) -> str:
        """Return ``workspaceId/repositoryId``."""
        return encode_composite_id(self.workspace_id, self.repository_id)
