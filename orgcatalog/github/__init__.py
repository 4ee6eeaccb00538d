"""GitHub REST client, payload models, and configuration."""

from __future__ import annotations

from .client import GitHubOrganisationClient, GitHubRestClient
from .config import GitHubRestConfig
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import GitHubContributor, GitHubPath, GitHubRepository, GitHubTree

__all__ = [
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubContributor",
    "GitHubOrganisationClient",
    "GitHubPath",
    "GitHubRepository",
    "GitHubResponseShapeError",
    "GitHubRestClient",
    "GitHubRestConfig",
    "GitHubTree",
]
