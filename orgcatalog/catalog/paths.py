"""Uncached listing of a repository tree."""

from __future__ import annotations

import typing as typ

from .observability import CatalogEventLogger
from .results import FetchResult

if typ.TYPE_CHECKING:
    from orgcatalog.github.client import GitHubOrganisationClient
    from orgcatalog.github.models import GitHubPath


class PathLister:
    """List every path in a repository at a branch."""

    def __init__(
        self,
        client: GitHubOrganisationClient,
        *,
        event_logger: CatalogEventLogger | None = None,
    ) -> None:
        """Configure the lister with the upstream client."""
        self._client = client
        self._event_logger = event_logger or CatalogEventLogger()

    async def list_paths(self, repository: str, branch: str) -> FetchResult[GitHubPath]:
        """Return the recursive tree entries exactly as GitHub lists them."""
        try:
            paths = await self._client.fetch_paths(repository, branch)
        except Exception as exc:  # noqa: BLE001 - upstream failures become results
            self._event_logger.log_fetch_failed(
                "list_paths", f"{repository}@{branch}", exc
            )
            return FetchResult.failed()
        return FetchResult(is_successful=True, items=paths)
