"""Filtered, cached view of the organisation's repositories."""

from __future__ import annotations

import typing as typ

from .config import CACHE_KEY_REPOSITORIES
from .errors import DuplicateRepositoryError
from .observability import CatalogEventLogger
from .results import FetchResult, RepositoryLookup

if typ.TYPE_CHECKING:
    from orgcatalog.cache import MemoryCache
    from orgcatalog.github.client import GitHubOrganisationClient
    from orgcatalog.github.models import GitHubRepository

    from .config import CatalogConfig


class RepositoryCatalog:
    """List and look up the organisation's repositories.

    The filtered list is cached under ``repositories``. Population is not
    locked: concurrent callers that miss the cache each call upstream and
    the last write wins.
    """

    def __init__(
        self,
        client: GitHubOrganisationClient,
        cache: MemoryCache,
        config: CatalogConfig,
        *,
        event_logger: CatalogEventLogger | None = None,
    ) -> None:
        """Configure the catalog with its collaborators."""
        self._client = client
        self._cache = cache
        self._excluded = config.excluded_repositories
        self._policy = config.cache_policies()[CACHE_KEY_REPOSITORIES]
        self._event_logger = event_logger or CatalogEventLogger()

    async def list_repositories(self) -> FetchResult[GitHubRepository]:
        """Return the organisation's repositories minus excluded names.

        A successful result may be empty when every repository was
        excluded; an empty result is never cached.
        """
        cached = self._cache.get(CACHE_KEY_REPOSITORIES)
        if cached is not None:
            repositories = list(typ.cast("list[GitHubRepository]", cached))
            self._event_logger.log_cache_hit(CACHE_KEY_REPOSITORIES, len(repositories))
            return FetchResult(is_successful=True, items=repositories)

        try:
            fetched = await self._client.fetch_repositories()
        except Exception as exc:  # noqa: BLE001 - upstream failures become results
            self._event_logger.log_fetch_failed("list_repositories", "-", exc)
            return FetchResult.failed()

        repositories = [repo for repo in fetched if repo.name not in self._excluded]
        if repositories:
            self._cache.set(CACHE_KEY_REPOSITORIES, list(repositories), self._policy)
            self._event_logger.log_cache_stored(
                CACHE_KEY_REPOSITORIES, len(repositories)
            )
        else:
            self._event_logger.log_cache_skipped(CACHE_KEY_REPOSITORIES)
        return FetchResult(is_successful=True, items=repositories)

    async def find_repository_by_name(self, name: str) -> RepositoryLookup:
        """Return the single repository whose name matches ``name`` ignoring case.

        An unavailable catalog and an unknown name both produce a failed
        lookup.

        Raises
        ------
        DuplicateRepositoryError
            If more than one repository matches.

        """
        is_successful, repositories = await self.list_repositories()
        if not is_successful:
            self._event_logger.log_lookup_missed(name, catalog_available=False)
            return RepositoryLookup(is_successful=False, repository=None)

        wanted = name.lower()
        matches = [repo for repo in repositories if repo.name.lower() == wanted]
        if len(matches) > 1:
            raise DuplicateRepositoryError(name, [repo.name for repo in matches])
        if not matches:
            self._event_logger.log_lookup_missed(name, catalog_available=True)
            return RepositoryLookup(is_successful=False, repository=None)
        return RepositoryLookup(is_successful=True, repository=matches[0])
