"""Errors raised while reconciling repositories."""

from __future__ import annotations

import typing as typ

from reeve.errors import NotFoundError, ReeveError, ValidationError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class MissingRequiredFieldError(ValidationError):
    """Raised when an attribute required by the variant is absent."""

    def __init__(self, field: str, variant: str | None = None) -> None:
        """Initialise with the missing attribute and the variant requiring it."""
        self.field = field
        self.variant = variant
        scope = f" for {variant} repositories" if variant else ""
        super().__init__(f"'{field}' is required{scope}")


class InvalidReferenceError(ValidationError):
    """Raised when a repository reference list is inconsistent."""

    def __init__(self, field: str, detail: str) -> None:
        """Initialise with the offending attribute and a description."""
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid '{field}': {detail}")


class UnknownVariantError(ValidationError):
    """Raised when ``repository_type`` is not a recognised variant."""

    def __init__(self, value: str | None) -> None:
        """Initialise with the unrecognised value."""
        self.value = value
        super().__init__(
            f"Unknown repository type {value!r}; expected local, remote or virtual"
        )


class UnsupportedPackageTypeError(ValidationError):
    """Raised when ``package_type`` is not a supported registry format."""

    def __init__(self, value: str) -> None:
        """Initialise with the unsupported value."""
        self.value = value
        super().__init__(f"Unsupported package type {value!r}")


class VariantMismatchError(ValidationError):
    """Raised when attributes of another variant are populated."""

    def __init__(self, variant: str, attributes: cabc.Sequence[str]) -> None:
        """Initialise with the declared variant and the foreign attributes."""
        self.variant = variant
        self.attributes = tuple(attributes)
        joined = ", ".join(self.attributes)
        super().__init__(f"{joined} cannot be set on {variant} repositories")


class RepositoryNotFoundError(NotFoundError):
    """Raised when RepoFlow no longer knows the repository."""

    def __init__(self, workspace_id: str, repository_id: str) -> None:
        """Initialise with the ids that were looked up."""
        self.workspace_id = workspace_id
        self.repository_id = repository_id
        super().__init__(
            f"Repository not found: {repository_id} in workspace {workspace_id}"
        )


class RemoteOperationFailedError(ReeveError):
    """Raised when a RepoFlow call fails during a lifecycle operation.

    The gateway error is chained as ``__cause__``.
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        *,
        workspace: str | None = None,
        variant: str | None = None,
    ) -> None:
        """Initialise with the attempted operation and diagnostic context."""
        self.operation = operation
        self.reason = reason
        self.workspace = workspace
        self.variant = variant
        context = [
            f"{key}={value}"
            for key, value in (("workspace", workspace), ("variant", variant))
            if value is not None
        ]
        suffix = f" ({', '.join(context)})" if context else ""
        super().__init__(f"Unable to {operation} repository{suffix}: {reason}")
