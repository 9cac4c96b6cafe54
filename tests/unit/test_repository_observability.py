"""Tests for repository lifecycle event logging."""

from __future__ import annotations

from reeve.common.secret import REDACTED
from reeve.repoflow.models import LocalRepositoryOptions, RemoteRepositoryOptions
from reeve.repository import RepositoryDesired, RepositoryState
from reeve.repository.observability import (
    RepositoryEventLogger,
    RepositoryEventType,
    redact_request,
)


class _FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message))
        return message


def _remote_options(password: str | None) -> RemoteRepositoryOptions:
    """Return a remote create payload carrying ``password``."""
    return RemoteRepositoryOptions(
        name="npm-proxy",
        package_type="npm",
        remote_repository_url="https://registry.npmjs.org",
        remote_repository_password=password,
    )


def test_redact_request_masks_password() -> None:
    """redact_request replaces the password with the redaction marker."""
    payload = redact_request(_remote_options("pw"))

    assert payload["remoteRepositoryPassword"] == REDACTED
    assert payload["remoteRepositoryUrl"] == "https://registry.npmjs.org"


def test_redact_request_leaves_absent_password_alone() -> None:
    """A null password stays null and local payloads gain no field."""
    assert redact_request(_remote_options(None))["remoteRepositoryPassword"] is None
    assert "remoteRepositoryPassword" not in redact_request(
        LocalRepositoryOptions(name="x", package_type="npm")
    )


def test_create_requested_is_debug_and_redacted() -> None:
    """The create-requested event logs at DEBUG with the password masked."""
    target = _FakeLogger()

    RepositoryEventLogger(target).log_create_requested(
        workspace_id="ws-1", variant="remote", request=_remote_options("pw")
    )

    ((level, message),) = target.calls
    assert level == "DEBUG"
    assert message.startswith(f"[{RepositoryEventType.CREATE_REQUESTED}]")
    assert '"pw"' not in message
    assert REDACTED in message


def test_created_event_carries_identity() -> None:
    """The created event logs the composite id and variant at INFO."""
    target = _FakeLogger()
    state = RepositoryState(
        desired=RepositoryDesired(
            name="r", workspace="ws", repository_type="local", package_type="npm"
        ),
        workspace_id="ws-1",
        repository_id="r1",
    )

    RepositoryEventLogger(target).log_created(state)

    ((level, message),) = target.calls
    assert level == "INFO"
    assert "id=ws-1/r1" in message
    assert "repository_type=local" in message
