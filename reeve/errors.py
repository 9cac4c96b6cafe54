"""Exception hierarchy shared by every reeve component."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ReeveError(Exception):
    """Base class for all reeve errors."""


class ValidationError(ReeveError):
    """Raised when a desired resource fails validation.

    Validation failures are surfaced before any remote mutation and are never
    retried.
    """


class MalformedIdentityError(ReeveError):
    """Raised when a composite identifier cannot be encoded or decoded."""

    def __init__(self, value: str, reason: str) -> None:
        """Initialise with the offending value and the reason it was rejected."""
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed composite id {value!r}: {reason}")


class InvalidImportFormatError(ReeveError):
    """Raised when an import reference is not ``workspace/repositoryId``."""

    def __init__(self, value: str) -> None:
        """Initialise with the rejected import reference."""
        self.value = value
        super().__init__(
            f"Import id must use the format workspace/repositoryId, got {value!r}"
        )


class NotFoundError(ReeveError):
    """Raised when a remote resource no longer exists."""


class ReplacementRequiredError(ReeveError):
    """Raised when an update changes attributes that cannot change in place.

    The orchestration layer is expected to delete and re-create the resource.
    """

    def __init__(self, attributes: cabc.Sequence[str]) -> None:
        """Initialise with the replace-on-change attributes that differ."""
        self.attributes = tuple(attributes)
        joined = ", ".join(self.attributes)
        super().__init__(f"Changing {joined} requires replacing the resource")
