"""Composite identity helpers.

A repository is tracked by the composite id ``<workspaceId>/<repositoryId>``.
Ids are opaque strings issued by RepoFlow; no escaping is performed, so a
literal ``/`` inside either id is a format violation. Like repository slugs,
composite ids are not filesystem paths and must not be parsed with ``pathlib``.
"""

from __future__ import annotations

from reeve.errors import InvalidImportFormatError, MalformedIdentityError

SEPARATOR = "/"


def encode_composite_id(workspace_id: str, repository_id: str) -> str:
    """Build the composite id for a repository.

    Parameters
    ----------
    workspace_id:
        Resolved RepoFlow workspace id.
    repository_id:
        RepoFlow repository id.

    Returns
    -------
    str
        Identifier in ``workspaceId/repositoryId`` format.

    Raises
    ------
    MalformedIdentityError
        If either id is empty or contains the separator.

    Examples
    --------
    >>> encode_composite_id("ws-1", "r1")
    'ws-1/r1'

    """
    check_composite_parts(workspace_id, repository_id)
    return f"{workspace_id}{SEPARATOR}{repository_id}"


def check_composite_parts(workspace_id: str, repository_id: str) -> None:
    """Raise ``MalformedIdentityError`` unless both ids can form a composite id.

    Each id must be non-empty and free of the separator.
    """
    joined = f"{workspace_id}{SEPARATOR}{repository_id}"
    for part in (workspace_id, repository_id):
        if not part:
            raise MalformedIdentityError(joined, "ids must be non-empty")
        if SEPARATOR in part:
            raise MalformedIdentityError(joined, f"ids must not contain {SEPARATOR!r}")


def _split_pair(value: str) -> tuple[str, str] | None:
    if value.count(SEPARATOR) != 1:
        return None
    left, right = value.split(SEPARATOR)
    if not left or not right:
        return None
    return left, right


def decode_composite_id(composite_id: str) -> tuple[str, str]:
    """Split a composite id into ``(workspace_id, repository_id)``.

    Raises
    ------
    MalformedIdentityError
        If the value is not exactly two non-empty parts.

    Examples
    --------
    >>> decode_composite_id("ws-1/r1")
    ('ws-1', 'r1')

    """
    pair = _split_pair(composite_id)
    if pair is None:
        raise MalformedIdentityError(
            composite_id, "expected exactly two non-empty parts"
        )
    return pair


def split_import_ref(ref: str) -> tuple[str, str]:
    """Split an import reference into ``(workspace_ref, repository_id)``.

    The workspace side may be a name or an id; it is resolved against RepoFlow
    by the caller, so this deliberately does not go through
    :func:`decode_composite_id`.

    Raises
    ------
    InvalidImportFormatError
        If the reference does not contain exactly one separator between two
        non-empty segments.

    """
    pair = _split_pair(ref)
    if pair is None:
        raise InvalidImportFormatError(ref)
    return pair
