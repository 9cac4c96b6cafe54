"""Variant classification and validation for desired repositories.

Validation is purely local and always completes before the reconciler talks
to RepoFlow, so a rejected record never causes a partial remote mutation.
"""

from __future__ import annotations

import collections
import typing as typ

from reeve.repository.errors import (
    InvalidReferenceError,
    MissingRequiredFieldError,
    UnknownVariantError,
    UnsupportedPackageTypeError,
    VariantMismatchError,
)
from reeve.repository.models import (
    LocalRepositorySpec,
    PackageType,
    RemoteRepositorySpec,
    RepositoryType,
    VirtualRepositorySpec,
)
from reeve.repository.schema import foreign_attributes

if typ.TYPE_CHECKING:
    from reeve.repository.models import RepositoryDesired, RepositorySpec


def classify(desired: RepositoryDesired) -> RepositoryType:
    """Return the variant declared by ``repository_type``.

    Raises
    ------
    UnknownVariantError
        If the value is missing or not ``local``, ``remote`` or ``virtual``.

    """
    try:
        return RepositoryType(desired.repository_type)
    except ValueError as exc:
        raise UnknownVariantError(desired.repository_type) from exc


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise MissingRequiredFieldError(field)
    return value


def _package_type(value: str | None) -> PackageType:
    raw = _require_text(value, "package_type")
    try:
        return PackageType(raw)
    except ValueError as exc:
        raise UnsupportedPackageTypeError(raw) from exc


def _reject_foreign_attributes(
    desired: RepositoryDesired, variant: RepositoryType
) -> None:
    populated = [
        spec.name
        for spec in foreign_attributes(variant)
        if getattr(desired, spec.name) != spec.default
    ]
    if populated:
        raise VariantMismatchError(variant, populated)


def _child_repository_ids(desired: RepositoryDesired) -> tuple[str, ...]:
    children = desired.child_repository_ids
    if not children:
        raise MissingRequiredFieldError("child_repository_ids", RepositoryType.VIRTUAL)

    duplicates = sorted(
        child for child, count in collections.Counter(children).items() if count > 1
    )
    if duplicates:
        raise InvalidReferenceError(
            "child_repository_ids", f"duplicate ids {', '.join(duplicates)}"
        )

    upload = desired.upload_local_repository_id
    if upload is not None and upload not in children:
        raise InvalidReferenceError(
            "upload_local_repository_id",
            f"{upload!r} must also be listed in child_repository_ids",
        )
    return tuple(children)


def validate(desired: RepositoryDesired, variant: RepositoryType) -> RepositorySpec:
    """Validate ``desired`` for ``variant`` and return the narrowed spec.

    Parameters
    ----------
    desired
        Wide declared record.
    variant
        Variant returned by :func:`classify`.

    Returns
    -------
    RepositorySpec
        ``LocalRepositorySpec``, ``RemoteRepositorySpec`` or
        ``VirtualRepositorySpec`` carrying only the attributes of ``variant``.

    Raises
    ------
    MissingRequiredFieldError
        If a common or variant-required attribute is absent.
    UnsupportedPackageTypeError
        If ``package_type`` is not a supported registry format.
    VariantMismatchError
        If attributes of another variant are populated.
    InvalidReferenceError
        If a virtual repository's child list has duplicates or does not
        contain the upload target.

    """
    name = _require_text(desired.name, "name")
    workspace = _require_text(desired.workspace, "workspace")
    package_type = _package_type(desired.package_type)
    _reject_foreign_attributes(desired, variant)

    match variant:
        case RepositoryType.LOCAL:
            return LocalRepositorySpec(
                name=name, workspace=workspace, package_type=package_type
            )
        case RepositoryType.REMOTE:
            if desired.remote_url is None or not desired.remote_url.strip():
                raise MissingRequiredFieldError("remote_url", variant)
            return RemoteRepositorySpec(
                name=name,
                workspace=workspace,
                package_type=package_type,
                url=desired.remote_url,
                username=desired.remote_username,
                password=desired.remote_password,
                cache_enabled=desired.remote_cache_enabled,
                file_cache_ttl_ms=desired.file_cache_ttl_ms,
                metadata_cache_ttl_ms=desired.metadata_cache_ttl_ms,
            )
        case RepositoryType.VIRTUAL:
            return VirtualRepositorySpec(
                name=name,
                workspace=workspace,
                package_type=package_type,
                child_repository_ids=_child_repository_ids(desired),
                upload_local_repository_id=desired.upload_local_repository_id,
            )


def narrow(desired: RepositoryDesired) -> RepositorySpec:
    """Classify and validate ``desired`` in one step."""
    return validate(desired, classify(desired))
