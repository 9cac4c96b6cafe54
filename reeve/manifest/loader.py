"""YAML loader for reeve manifests."""

from __future__ import annotations

from pathlib import Path

import msgspec
from pydantic import SecretStr
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from reeve.errors import ReeveError
from reeve.repository.models import RepositoryDesired
from reeve.workspace.models import WorkspaceDesired

from .models import Manifest, RepositoryEntry, WorkspaceEntry

YAML_VERSION = (1, 2)
SUPPORTED_VERSION = 1


class ManifestError(ReeveError):
    """Raised when a manifest cannot be parsed or fails its schema."""

    def __init__(self, issues: list[str]) -> None:
        """Capture the issues whilst preserving the aggregated message."""
        super().__init__("\n".join(issues))
        self.issues = issues


def load_manifest(path: Path | str) -> Manifest:
    """Parse a YAML manifest using a YAML 1.2 compliant loader.

    Raises
    ------
    ManifestError
        If the file cannot be read or parsed, is empty, does not match the
        manifest schema, or declares an unsupported version.

    """
    yaml = _yaml()
    path_obj = Path(path)

    try:
        loaded = yaml.load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise ManifestError([f"failed to parse YAML: {exc}"]) from exc

    if loaded is None:
        raise ManifestError(["manifest file is empty"])

    try:
        manifest = msgspec.convert(loaded, type=Manifest)
    except msgspec.ValidationError as exc:
        raise ManifestError([f"schema validation failed: {exc}"]) from exc

    if manifest.version != SUPPORTED_VERSION:
        raise ManifestError(
            [f"manifest.version must be {SUPPORTED_VERSION}, got {manifest.version}"]
        )
    return manifest


def to_workspace_desired(entry: WorkspaceEntry) -> WorkspaceDesired:
    """Convert a manifest workspace entry into a declared workspace."""
    return WorkspaceDesired(name=entry.name)


def to_repository_desired(entry: RepositoryEntry) -> RepositoryDesired:
    """Convert a manifest repository entry into a declared repository.

    The password is wrapped in :class:`pydantic.SecretStr` here, the first
    point it enters the domain.
    """
    children = entry.child_repository_ids
    password = entry.remote_password
    return RepositoryDesired(
        name=entry.name,
        workspace=entry.workspace,
        repository_type=entry.repository_type,
        package_type=entry.package_type,
        remote_url=entry.remote_url,
        remote_username=entry.remote_username,
        remote_password=None if password is None else SecretStr(password),
        remote_cache_enabled=entry.remote_cache_enabled,
        file_cache_ttl_ms=entry.file_cache_ttl_ms,
        metadata_cache_ttl_ms=entry.metadata_cache_ttl_ms,
        child_repository_ids=None if children is None else tuple(children),
        upload_local_repository_id=entry.upload_local_repository_id,
    )


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
