"""Tests for loading reeve manifests."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest
from pydantic import SecretStr

from reeve.manifest import (
    ManifestError,
    load_manifest,
    to_repository_desired,
    to_workspace_desired,
)
from reeve.workspace import WorkspaceDesired

VALID_MANIFEST = """
version: 1
workspaces:
  - name: example
repositories:
  - name: local-example
    workspace: example
    repository_type: local
    package_type: npm
  - name: npm-proxy
    workspace: example
    repository_type: remote
    package_type: npm
    remote_url: https://registry.npmjs.org
    remote_password: hunter2
    file_cache_ttl_ms: 0
  - name: all-npm
    workspace: example
    repository_type: virtual
    package_type: npm
    child_repository_ids: [b, a]
    upload_local_repository_id: a
"""


def _write(tmp_path: Path, text: str) -> Path:
    """Write ``text`` to a manifest file under ``tmp_path``."""
    path = tmp_path / "manifest.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_manifest_parses_entries(tmp_path: Path) -> None:
    """load_manifest decodes workspaces and repositories in order."""
    manifest = load_manifest(_write(tmp_path, VALID_MANIFEST))

    assert [entry.name for entry in manifest.repositories] == [
        "local-example",
        "npm-proxy",
        "all-npm",
    ]
    assert to_workspace_desired(manifest.workspaces[0]) == WorkspaceDesired(
        name="example"
    )


def test_to_repository_desired_wraps_password_and_children(tmp_path: Path) -> None:
    """Passwords become SecretStr and children become ordered tuples."""
    manifest = load_manifest(_write(tmp_path, VALID_MANIFEST))

    remote = to_repository_desired(manifest.repositories[1])
    virtual = to_repository_desired(manifest.repositories[2])

    assert remote.remote_password == SecretStr("hunter2")
    assert remote.file_cache_ttl_ms == 0
    assert remote.metadata_cache_ttl_ms is None
    assert remote.child_repository_ids is None
    assert virtual.child_repository_ids == ("b", "a")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "empty"),
        ("version: 2\n", "manifest.version must be 1"),
        ("version: 1\nextra: true\n", "schema validation failed"),
        (
            "version: 1\nrepositories:\n  - name: x\n    workspace: w\n",
            "schema validation failed",
        ),
        ("version: 1\nversion: 1\n", "failed to parse YAML"),
        ("version: [1\n", "failed to parse YAML"),
    ],
)
def test_invalid_manifests_are_reported(
    tmp_path: Path, text: str, message: str
) -> None:
    """Malformed or schema-violating manifests raise ManifestError."""
    with pytest.raises(ManifestError, match=message):
        load_manifest(_write(tmp_path, text))


def test_missing_file_is_reported(tmp_path: Path) -> None:
    """A missing manifest file raises ManifestError."""
    with pytest.raises(ManifestError, match="failed to parse YAML"):
        load_manifest(tmp_path / "absent.yaml")
