"""Translation between declared repositories and RepoFlow wire records.

Both directions are pure functions: no network access and no logging, so the
round trip ``RemoteRepository -> RepositoryDesired -> create request`` can be
checked in isolation.
"""

from __future__ import annotations

import typing as typ

from pydantic import SecretStr

from reeve.repoflow.models import (
    LocalRepositoryOptions,
    RemoteRepositoryOptions,
    VirtualRepositoryOptions,
)
from reeve.repository.models import (
    LocalRepositorySpec,
    RemoteRepositorySpec,
    RepositoryDesired,
    RepositoryState,
    RepositoryType,
    VirtualRepositorySpec,
)

if typ.TYPE_CHECKING:
    from reeve.repoflow.models import (
        ChildRepository,
        RemoteRepository,
        RepositoryOptions,
    )
    from reeve.repository.models import RepositorySpec


def to_create_request(spec: RepositorySpec) -> RepositoryOptions:
    """Build the variant-shaped RepoFlow create payload for ``spec``.

    Cache durations of ``None`` are kept as ``None`` so they reach RepoFlow as
    JSON ``null`` (cache indefinitely) rather than ``0``.
    """
    match spec:
        case LocalRepositorySpec():
            return LocalRepositoryOptions(
                name=spec.name, package_type=str(spec.package_type)
            )
        case RemoteRepositorySpec():
            return RemoteRepositoryOptions(
                name=spec.name,
                package_type=str(spec.package_type),
                remote_repository_url=spec.url,
                remote_repository_username=spec.username,
                remote_repository_password=(
                    None if spec.password is None else spec.password.get_secret_value()
                ),
                is_remote_cache_enabled=spec.cache_enabled,
                file_cache_time_till_revalidation=spec.file_cache_ttl_ms,
                metadata_cache_time_till_revalidation=spec.metadata_cache_ttl_ms,
            )
        case VirtualRepositorySpec():
            return VirtualRepositoryOptions(
                name=spec.name,
                package_type=str(spec.package_type),
                child_repository_ids=list(spec.child_repository_ids),
                upload_local_repository_id=spec.upload_local_repository_id,
            )


def child_ids(children: list[ChildRepository] | None) -> tuple[str, ...]:
    """Project RepoFlow child repository objects onto their ids.

    Only ``id`` is carried over, in the order RepoFlow returned the children;
    an absent list projects to an empty tuple.
    """
    if children is None:
        return ()
    return tuple(child.id for child in children)


def _variant_of(value: str | None) -> RepositoryType | None:
    try:
        return RepositoryType(value)
    except ValueError:
        return None


def _remote_attributes(
    remote: RemoteRepository, prior: RepositoryDesired | None
) -> dict[str, typ.Any]:
    raw_password = remote.remote_repository_password
    password = None if raw_password is None else SecretStr(raw_password)
    if password is None and prior is not None:
        # RepoFlow does not echo the password back.
        password = prior.remote_password
    return {
        "remote_url": remote.remote_repository_url,
        "remote_username": remote.remote_repository_username,
        "remote_password": password,
        "remote_cache_enabled": bool(remote.is_remote_cache_enabled),
        "file_cache_ttl_ms": remote.file_cache_time_till_revalidation,
        "metadata_cache_ttl_ms": remote.metadata_cache_time_till_revalidation,
    }


def _virtual_attributes(remote: RemoteRepository) -> dict[str, typ.Any]:
    return {
        "child_repository_ids": child_ids(remote.child_repositories),
        "upload_local_repository_id": remote.upload_local_repository_id,
    }


def _unclassified_attributes(
    remote: RemoteRepository, prior: RepositoryDesired | None
) -> dict[str, typ.Any]:
    attributes = _remote_attributes(remote, prior)
    attributes["child_repository_ids"] = (
        None
        if remote.child_repositories is None
        else child_ids(remote.child_repositories)
    )
    attributes["upload_local_repository_id"] = remote.upload_local_repository_id
    return attributes


def from_remote(
    remote: RemoteRepository,
    workspace_id: str,
    *,
    workspace_ref: str | None = None,
    prior: RepositoryDesired | None = None,
) -> RepositoryState:
    """Convert a RepoFlow repository into tracked declared state.

    Parameters
    ----------
    remote
        Repository returned by RepoFlow.
    workspace_id
        Resolved id of the owning workspace.
    workspace_ref
        Workspace name or id as the caller declared it. Defaults to
        ``workspace_id``.
    prior
        Previously declared record. Supplies ``repository_type`` and
        ``package_type`` when RepoFlow returns them blank, and the password
        RepoFlow never returns.

    Returns
    -------
    RepositoryState
        State whose declared record only carries the attributes of the
        repository's own variant. Virtual repositories always carry a tuple of
        child ids; other variants always carry ``None``.

    Raises
    ------
    MalformedIdentityError
        If the ids cannot form a composite id; the check is made when the
        returned state is constructed.

    """
    repository_type = remote.repository_type or (
        prior.repository_type if prior is not None else None
    )
    package_type = remote.package_type or (
        prior.package_type if prior is not None else None
    )

    match _variant_of(repository_type):
        case RepositoryType.LOCAL:
            variant_attributes: dict[str, typ.Any] = {}
        case RepositoryType.REMOTE:
            variant_attributes = _remote_attributes(remote, prior)
        case RepositoryType.VIRTUAL:
            variant_attributes = _virtual_attributes(remote)
        case None:
            variant_attributes = _unclassified_attributes(remote, prior)

    desired = RepositoryDesired(
        name=remote.name,
        workspace=workspace_ref or workspace_id,
        repository_type=repository_type or None,
        package_type=package_type or None,
        **variant_attributes,
    )
    return RepositoryState(
        desired=desired,
        workspace_id=workspace_id,
        repository_id=remote.id,
    )
