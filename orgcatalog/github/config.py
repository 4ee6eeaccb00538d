"""Configuration for the GitHub REST client."""

from __future__ import annotations

import dataclasses
import os

from .errors import GitHubConfigError

_DEFAULT_ORGANISATION = "atc-net"
_DEFAULT_BASE_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRestConfig:
    """Configuration for the GitHub REST API client.

    Attributes
    ----------
    organisation
        Organisation whose repositories are enumerated.
    base_url
        API host every request path is resolved against.
    timeout_s
        Per-request timeout in seconds.
    user_agent
        ``User-Agent`` header sent with every request; GitHub rejects
        requests without one.

    """

    organisation: str = _DEFAULT_ORGANISATION
    base_url: str = _DEFAULT_BASE_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = "orgcatalog/0.1"

    def __post_init__(self) -> None:
        """Reject an empty organisation."""
        if not self.organisation.strip():
            raise GitHubConfigError.empty_organisation()

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw = os.environ.get("ORGCATALOG_GITHUB_TIMEOUT_S", "").strip()
        if not raw:
            return _DEFAULT_TIMEOUT_S
        try:
            timeout = float(raw)
        except ValueError as exc:
            raise GitHubConfigError.invalid_timeout(raw) from exc
        if timeout <= 0:
            raise GitHubConfigError.invalid_timeout(raw)
        return timeout

    @classmethod
    def from_env(cls) -> GitHubRestConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``ORGCATALOG_GITHUB_ORGANISATION``: organisation name
          (default ``atc-net``)
        - ``ORGCATALOG_GITHUB_BASE_URL``: API host override
        - ``ORGCATALOG_GITHUB_TIMEOUT_S``: positive request timeout

        Raises
        ------
        GitHubConfigError
            If the organisation is blank or the timeout is invalid.

        """
        organisation = os.environ.get(
            "ORGCATALOG_GITHUB_ORGANISATION", _DEFAULT_ORGANISATION
        ).strip()
        base_url = (
            os.environ.get("ORGCATALOG_GITHUB_BASE_URL", "").strip()
            or _DEFAULT_BASE_URL
        )
        return cls(
            organisation=organisation,
            base_url=base_url,
            timeout_s=cls._parse_timeout_from_env(),
        )
