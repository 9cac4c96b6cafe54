"""RepoFlow API client errors."""

from __future__ import annotations

from reeve.errors import ReeveError

_HTTP_NOT_FOUND = 404


class RepoFlowError(ReeveError):
    """Base class for RepoFlow client failures."""


class RepoFlowAPIError(RepoFlowError):
    """Raised when RepoFlow returns an error response or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(
        cls, status_code: int, detail: str | None = None
    ) -> RepoFlowAPIError:
        """Return an error for non-2xx HTTP responses."""
        if status_code == _HTTP_NOT_FOUND:
            return RepoFlowNotFoundError(detail)
        msg = f"RepoFlow API HTTP {status_code}"
        if detail:
            msg = f"{msg}: {detail}"
        return cls(msg, status_code=status_code)

    @classmethod
    def timeout(cls) -> RepoFlowAPIError:
        """Return an error for request timeouts."""
        return cls("RepoFlow API request timed out")

    @classmethod
    def network_error(cls, detail: str) -> RepoFlowAPIError:
        """Return an error for DNS, connection and TLS failures."""
        return cls(f"RepoFlow API network error: {detail}")


class RepoFlowNotFoundError(RepoFlowAPIError):
    """Raised when RepoFlow answers 404 for the requested resource."""

    def __init__(self, detail: str | None = None) -> None:
        """Initialise with the optional detail returned by the API."""
        msg = "RepoFlow resource not found"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg, status_code=_HTTP_NOT_FOUND)


class RepoFlowResponseShapeError(RepoFlowError):
    """Raised when a RepoFlow response body does not match the expected shape."""

    @classmethod
    def invalid(cls, what: str, detail: str) -> RepoFlowResponseShapeError:
        """Return an error for a body that failed to decode."""
        return cls(f"RepoFlow {what} response could not be decoded: {detail}")


class RepoFlowConfigError(RepoFlowError):
    """Raised when RepoFlow client configuration is invalid."""

    @classmethod
    def missing_base_url(cls) -> RepoFlowConfigError:
        """Return an error when no base URL is configured."""
        return cls("REPOFLOW_BASE_URL is required for the RepoFlow API")

    @classmethod
    def missing_api_key(cls) -> RepoFlowConfigError:
        """Return an error when no API key is configured."""
        return cls("REPOFLOW_API_KEY is required for the RepoFlow API")

    @classmethod
    def empty_api_key(cls) -> RepoFlowConfigError:
        """Return an error when the provided API key is blank."""
        return cls("RepoFlow API key must be non-empty")

    @classmethod
    def invalid_timeout(cls, value: str) -> RepoFlowConfigError:
        """Return an error for an unparsable or non-positive timeout."""
        return cls(f"REPOFLOW_TIMEOUT_S must be a positive number, got {value!r}")
