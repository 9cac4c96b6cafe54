"""Manifest files declaring RepoFlow workspaces and repositories.

Example manifest::

    version: 1
    workspaces:
      - name: example
    repositories:
      - name: local-example
        workspace: example
        repository_type: local
        package_type: npm

"""

from .loader import (
    ManifestError,
    load_manifest,
    to_repository_desired,
    to_workspace_desired,
)
from .models import Manifest, RepositoryEntry, WorkspaceEntry
from .schema import SCHEMA_ID, build_manifest_schema, write_manifest_schema

__all__ = [
    "SCHEMA_ID",
    "Manifest",
    "ManifestError",
    "RepositoryEntry",
    "WorkspaceEntry",
    "build_manifest_schema",
    "load_manifest",
    "to_repository_desired",
    "to_workspace_desired",
    "write_manifest_schema",
]
