"""Configuration for the RepoFlow API client."""

from __future__ import annotations

import dataclasses
import os

from reeve import __version__
from reeve.repoflow.errors import RepoFlowConfigError

_DEFAULT_TIMEOUT_S = 30.0


@dataclasses.dataclass(frozen=True, slots=True)
class RepoFlowConfig:
    """Connection settings for a RepoFlow instance.

    Attributes
    ----------
    base_url
        API root, for example ``https://repoflow.example.com/api``.
    api_key
        Personal API key sent as a bearer token. Hidden from ``repr``.
    timeout_s
        Per-request timeout in seconds applied by the transport.
    user_agent
        ``User-Agent`` header value.

    """

    base_url: str
    api_key: str = dataclasses.field(repr=False)
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = f"reeve/{__version__}"

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw_timeout = os.environ.get("REPOFLOW_TIMEOUT_S")
        if raw_timeout is None:
            return _DEFAULT_TIMEOUT_S

        try:
            timeout_s = float(raw_timeout)
        except ValueError as exc:
            raise RepoFlowConfigError.invalid_timeout(raw_timeout) from exc

        if timeout_s <= 0:
            raise RepoFlowConfigError.invalid_timeout(raw_timeout)
        return timeout_s

    @classmethod
    def from_env(
        cls, *, base_url: str | None = None, api_key: str | None = None
    ) -> RepoFlowConfig:
        """Build configuration from explicit values and environment variables.

        Explicit ``base_url`` and ``api_key`` take precedence over
        ``REPOFLOW_BASE_URL`` and ``REPOFLOW_API_KEY``; one of each source is
        required. ``REPOFLOW_TIMEOUT_S`` is optional.

        Raises
        ------
        RepoFlowConfigError
            If a required variable is missing or a value is invalid.

        """
        if base_url is None:
            base_url = os.environ.get("REPOFLOW_BASE_URL", "")
        resolved_url = base_url.strip()
        if not resolved_url:
            raise RepoFlowConfigError.missing_base_url()

        raw_api_key = (
            api_key if api_key is not None else os.environ.get("REPOFLOW_API_KEY")
        )
        if raw_api_key is None:
            raise RepoFlowConfigError.missing_api_key()
        resolved_key = raw_api_key.strip()
        if not resolved_key:
            raise RepoFlowConfigError.empty_api_key()

        return cls(
            base_url=resolved_url,
            api_key=resolved_key,
            timeout_s=cls._parse_timeout_from_env(),
        )
