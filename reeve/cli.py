"""Command-line interface over the workspace and repository reconcilers.

Usage:
    reeve validate manifest.yaml        # Offline validation of every entry
    reeve create manifest.yaml          # Create workspaces, then repositories
    reeve show WORKSPACE_ID/REPO_ID     # Print tracked repository state
    reeve import WORKSPACE/REPO_ID      # Adopt an existing repository
    reeve delete WORKSPACE_ID/REPO_ID   # Delete a repository
    reeve show-workspace WORKSPACE      # Look up a workspace by name or id
    reeve import-workspace WORKSPACE_ID # Adopt an existing workspace
    reeve delete-workspace WORKSPACE    # Delete a workspace
    reeve schema --out schema.json      # Export the manifest JSON Schema

Environment variables:
    REPOFLOW_BASE_URL  - RepoFlow API root (or --base-url)
    REPOFLOW_API_KEY   - RepoFlow API key (or --api-key)
    REPOFLOW_TIMEOUT_S - Request timeout in seconds (default: 30)
    REEVE_LOG_LEVEL    - femtologging level (default: WARNING)
"""

from __future__ import annotations

import dataclasses
import json
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from reeve import __version__
from reeve.common.secret import REDACTED
from reeve.errors import ReeveError
from reeve.logging import configure_logging, get_logger, log_warning
from reeve.manifest import (
    build_manifest_schema,
    load_manifest,
    to_repository_desired,
    to_workspace_desired,
    write_manifest_schema,
)
from reeve.repoflow import RepoFlowClient, RepoFlowConfig
from reeve.repository import RepositoryReconciler, narrow
from reeve.workspace import WorkspaceReconciler

if typ.TYPE_CHECKING:
    import contextlib

    from reeve.repoflow import RepoFlowGateway
    from reeve.repository import RepositoryState
    from reeve.workspace import WorkspaceState

app = App(
    name="reeve",
    help="Declarative lifecycle management for RepoFlow repositories",
    version=__version__,
)

LogLevelOption = typ.Annotated[str | None, Parameter(env_var="REEVE_LOG_LEVEL")]
BaseUrlOption = typ.Annotated[str | None, Parameter(env_var="REPOFLOW_BASE_URL")]
ApiKeyOption = typ.Annotated[str | None, Parameter(env_var="REPOFLOW_API_KEY")]

logger = get_logger(__name__)


def open_gateway(
    *, base_url: str | None = None, api_key: str | None = None
) -> contextlib.AbstractContextManager[RepoFlowGateway]:
    """Open a RepoFlow client from explicit options or the environment."""
    return RepoFlowClient(RepoFlowConfig.from_env(base_url=base_url, api_key=api_key))


def render_state(state: RepositoryState) -> str:
    """Render tracked repository state as JSON with secrets redacted."""
    document: dict[str, typ.Any] = {
        "id": state.composite_id,
        "repository_id": state.repository_id,
        "workspace_id": state.workspace_id,
    }
    for field in dataclasses.fields(state.desired):
        value = getattr(state.desired, field.name)
        if field.name == "remote_password" and value is not None:
            value = REDACTED
        elif isinstance(value, tuple):
            value = list(value)
        document[field.name] = value
    return json.dumps(document, indent=2)


def render_workspace(state: WorkspaceState) -> str:
    """Render tracked workspace state as JSON."""
    return json.dumps({"id": state.id, "name": state.name}, indent=2)


def _setup_logging(level: str | None) -> None:
    normalized, invalid = configure_logging(level, force=True)
    if invalid and level:
        log_warning(
            logger,
            "Invalid REEVE_LOG_LEVEL %r, falling back to %s",
            level,
            normalized,
        )


def _fail(exc: ReeveError) -> int:
    print(f"error: {exc}", file=sys.stderr)
    return 1


@app.command
def validate(manifest: Path, *, log_level: LogLevelOption = None) -> int:
    """Validate a manifest without contacting RepoFlow.

    Args:
        manifest: YAML manifest to validate.
        log_level: femtologging level.

    Returns:
        Exit code: 0 when every repository is valid, 1 otherwise.

    """
    _setup_logging(log_level)
    try:
        loaded = load_manifest(manifest)
    except ReeveError as exc:
        return _fail(exc)

    failures = 0
    for entry in loaded.repositories:
        try:
            narrow(to_repository_desired(entry))
        except ReeveError as exc:
            failures += 1
            print(f"  - {entry.workspace}/{entry.name}: {exc}")

    if failures:
        print(f"manifest {manifest} has {failures} invalid repositories")
        return 1
    print(
        f"manifest {manifest} is valid "
        f"({len(loaded.workspaces)} workspaces / "
        f"{len(loaded.repositories)} repositories)"
    )
    return 0


@app.command
def create(
    manifest: Path,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Create every workspace, then every repository, declared in a manifest.

    Repositories are validated before anything is created, so an invalid
    manifest leaves RepoFlow untouched.

    Args:
        manifest: YAML manifest to apply.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        loaded = load_manifest(manifest)
        repositories = [to_repository_desired(entry) for entry in loaded.repositories]
        for desired in repositories:
            narrow(desired)

        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            workspaces = WorkspaceReconciler(gateway)
            for entry in loaded.workspaces:
                workspace = workspaces.create(to_workspace_desired(entry))
                print(f"workspace {workspace.name} created ({workspace.id})")

            reconciler = RepositoryReconciler(gateway)
            for desired in repositories:
                state = reconciler.create(desired)
                print(f"repository {desired.name} created ({state.composite_id})")
    except ReeveError as exc:
        return _fail(exc)
    return 0


@app.command
def show(
    composite_id: str,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Print the tracked state of a repository.

    Args:
        composite_id: Repository identity in workspaceId/repositoryId format.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            state = RepositoryReconciler(gateway).read(composite_id)
    except ReeveError as exc:
        return _fail(exc)
    print(render_state(state))
    return 0


@app.command(name="import")
def import_(
    ref: str,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Adopt an existing repository and print its state.

    Args:
        ref: Repository reference in workspace/repositoryId format, where the
            workspace is a name or an id.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            state = RepositoryReconciler(gateway).import_state(ref)
    except ReeveError as exc:
        return _fail(exc)
    print(render_state(state))
    return 0


@app.command
def delete(
    composite_id: str,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Delete a repository.

    Args:
        composite_id: Repository identity in workspaceId/repositoryId format.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            RepositoryReconciler(gateway).delete(composite_id)
    except ReeveError as exc:
        return _fail(exc)
    print(f"repository {composite_id} deleted")
    return 0


@app.command
def show_workspace(
    workspace: str,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Look up a workspace by name or id and print it.

    Args:
        workspace: Workspace name or id.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            state = WorkspaceReconciler(gateway).read(workspace)
    except ReeveError as exc:
        return _fail(exc)
    print(render_workspace(state))
    return 0


@app.command
def import_workspace(
    workspace_id: str,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Adopt an existing workspace by id and print it.

    Args:
        workspace_id: RepoFlow workspace id.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            state = WorkspaceReconciler(gateway).import_state(workspace_id)
    except ReeveError as exc:
        return _fail(exc)
    print(render_workspace(state))
    return 0


@app.command
def delete_workspace(
    workspace: str,
    *,
    base_url: BaseUrlOption = None,
    api_key: ApiKeyOption = None,
    log_level: LogLevelOption = None,
) -> int:
    """Delete a workspace identified by name or id.

    Args:
        workspace: Workspace name or id.
        base_url: RepoFlow API root.
        api_key: RepoFlow API key.
        log_level: femtologging level.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    _setup_logging(log_level)
    try:
        with open_gateway(base_url=base_url, api_key=api_key) as gateway:
            reconciler = WorkspaceReconciler(gateway)
            reconciler.delete(reconciler.read(workspace))
    except ReeveError as exc:
        return _fail(exc)
    print(f"workspace {workspace} deleted")
    return 0


@app.command
def schema(*, out: Path | None = None) -> int:
    """Export the manifest JSON Schema.

    Args:
        out: Destination file; the schema is printed when omitted.

    Returns:
        Exit code (always 0).

    """
    if out is None:
        print(json.dumps(build_manifest_schema(), indent=2))
    else:
        write_manifest_schema(out)
        print(f"schema written to {out}")
    return 0


def main() -> int:
    """Entry point for the CLI."""
    return app()


if __name__ == "__main__":
    sys.exit(main())
