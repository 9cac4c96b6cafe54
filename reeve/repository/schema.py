"""Attribute capability table for the declared-state boundary.

RepoFlow offers no in-place update for any repository or workspace attribute,
so every declared attribute is tagged replace-on-change. Orchestration layers
read these tags to decide between re-persisting and re-creating a resource.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from reeve.repository.models import RepositoryType

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class AttributeKind(enum.StrEnum):
    """How an attribute is populated."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    COMPUTED = "computed"


@dataclasses.dataclass(frozen=True, slots=True)
class AttributeSpec:
    """Capabilities of a single declared-state attribute."""

    name: str
    kind: AttributeKind
    description: str
    replace_on_change: bool = True
    sensitive: bool = False
    default: object = None
    variants: frozenset[RepositoryType] | None = None

    def applies_to(self, variant: RepositoryType) -> bool:
        """Return True when the attribute belongs to ``variant``."""
        return self.variants is None or variant in self.variants


_REMOTE = frozenset({RepositoryType.REMOTE})
_VIRTUAL = frozenset({RepositoryType.VIRTUAL})

REPOSITORY_ATTRIBUTES: tuple[AttributeSpec, ...] = (
    AttributeSpec("name", AttributeKind.REQUIRED, "Repository name to create."),
    AttributeSpec(
        "workspace",
        AttributeKind.REQUIRED,
        "Workspace used to create it (name or id).",
    ),
    AttributeSpec(
        "repository_type",
        AttributeKind.REQUIRED,
        "Repository variant: local, remote or virtual.",
    ),
    AttributeSpec(
        "package_type", AttributeKind.REQUIRED, "Package type stored by the repository."
    ),
    AttributeSpec(
        "remote_url",
        AttributeKind.OPTIONAL,
        "URL of the upstream repository (required for remote repositories).",
        variants=_REMOTE,
    ),
    AttributeSpec(
        "remote_username",
        AttributeKind.OPTIONAL,
        "Username for the upstream repository.",
        variants=_REMOTE,
    ),
    AttributeSpec(
        "remote_password",
        AttributeKind.OPTIONAL,
        "Password for the upstream repository.",
        sensitive=True,
        variants=_REMOTE,
    ),
    AttributeSpec(
        "remote_cache_enabled",
        AttributeKind.OPTIONAL,
        "Whether upstream artefacts are cached.",
        default=False,
        variants=_REMOTE,
    ),
    AttributeSpec(
        "file_cache_ttl_ms",
        AttributeKind.OPTIONAL,
        "Milliseconds before cached files require revalidation "
        "(null for indefinite caching).",
        variants=_REMOTE,
    ),
    AttributeSpec(
        "metadata_cache_ttl_ms",
        AttributeKind.OPTIONAL,
        "Milliseconds before cached metadata requires revalidation "
        "(null for indefinite caching).",
        variants=_REMOTE,
    ),
    AttributeSpec(
        "child_repository_ids",
        AttributeKind.OPTIONAL,
        "Ids of repositories included in the virtual repository "
        "(required for virtual repositories).",
        variants=_VIRTUAL,
    ),
    AttributeSpec(
        "upload_local_repository_id",
        AttributeKind.OPTIONAL,
        "Id of a local repository receiving uploads "
        "(must also be in child_repository_ids).",
        variants=_VIRTUAL,
    ),
    AttributeSpec(
        "repository_id",
        AttributeKind.COMPUTED,
        "Repository identifier assigned by RepoFlow.",
        replace_on_change=False,
    ),
    AttributeSpec(
        "workspace_id",
        AttributeKind.COMPUTED,
        "Workspace identifier resolved from the workspace attribute.",
        replace_on_change=False,
    ),
    AttributeSpec(
        "id",
        AttributeKind.COMPUTED,
        "Tracked identity in workspaceId/repositoryId format.",
        replace_on_change=False,
    ),
)

WORKSPACE_ATTRIBUTES: tuple[AttributeSpec, ...] = (
    AttributeSpec("name", AttributeKind.REQUIRED, "Workspace name to create."),
    AttributeSpec(
        "id",
        AttributeKind.COMPUTED,
        "Workspace identifier assigned by RepoFlow.",
        replace_on_change=False,
    ),
)


def declared_attributes(
    attributes: cabc.Iterable[AttributeSpec] = REPOSITORY_ATTRIBUTES,
) -> tuple[AttributeSpec, ...]:
    """Return the attributes a caller declares, excluding computed ones."""
    return tuple(spec for spec in attributes if spec.kind is not AttributeKind.COMPUTED)


def foreign_attributes(variant: RepositoryType) -> tuple[AttributeSpec, ...]:
    """Return the repository attributes that belong only to other variants."""
    return tuple(
        spec for spec in declared_attributes() if not spec.applies_to(variant)
    )


def replacement_attributes(
    prior: object,
    desired: object,
    attributes: cabc.Iterable[AttributeSpec] = REPOSITORY_ATTRIBUTES,
) -> tuple[str, ...]:
    """List replace-on-change attributes whose values differ.

    Parameters
    ----------
    prior
        Previously applied declared record.
    desired
        Newly declared record of the same type.
    attributes
        Capability table describing the record.

    Returns
    -------
    tuple[str, ...]
        Attribute names in table order; empty when the record can be
        re-persisted as is.

    """
    return tuple(
        spec.name
        for spec in declared_attributes(attributes)
        if spec.replace_on_change
        and getattr(prior, spec.name) != getattr(desired, spec.name)
    )
