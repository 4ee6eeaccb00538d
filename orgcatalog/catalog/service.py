"""Public entry point combining the catalog components.

Usage
-----
Build a catalog from the environment and query it::

    catalog = OrganisationCatalog.from_env()
    try:
        ok, repositories = await catalog.list_repositories()
    finally:
        await catalog.aclose()

"""

from __future__ import annotations

import typing as typ

from orgcatalog.cache import KeyedLocks, MemoryCache
from orgcatalog.github import GitHubRestClient, GitHubRestConfig

from .config import CatalogConfig
from .contributors import ContributorAggregator
from .observability import CatalogEventLogger
from .paths import PathLister
from .repositories import RepositoryCatalog

if typ.TYPE_CHECKING:
    from orgcatalog.github.client import GitHubOrganisationClient
    from orgcatalog.github.models import GitHubContributor, GitHubPath, GitHubRepository

    from .results import ContributorAggregation, FetchResult, RepositoryLookup


class _Closeable(typ.Protocol):
    async def aclose(self) -> None: ...


class OrganisationCatalog:
    """Read-through cached queries over one GitHub organisation."""

    def __init__(
        self,
        client: GitHubOrganisationClient,
        *,
        config: CatalogConfig | None = None,
        cache: MemoryCache | None = None,
        locks: KeyedLocks | None = None,
    ) -> None:
        """Wire the components around a shared cache and lock registry."""
        config = config or CatalogConfig()
        event_logger = CatalogEventLogger()
        self._client = client
        self.cache = cache or MemoryCache()
        self.repositories = RepositoryCatalog(
            client, self.cache, config, event_logger=event_logger
        )
        self.contributors = ContributorAggregator(
            client,
            self.repositories,
            self.cache,
            locks or KeyedLocks(),
            config,
            event_logger=event_logger,
        )
        self.paths = PathLister(client, event_logger=event_logger)

    @classmethod
    def from_env(cls) -> OrganisationCatalog:
        """Build a catalog with an owned REST client configured from env."""
        client = GitHubRestClient(GitHubRestConfig.from_env())
        return cls(client, config=CatalogConfig.from_env())

    async def aclose(self) -> None:
        """Close the upstream client when it holds resources."""
        if hasattr(self._client, "aclose"):
            await typ.cast("_Closeable", self._client).aclose()

    async def list_repositories(self) -> FetchResult[GitHubRepository]:
        """See :meth:`RepositoryCatalog.list_repositories`."""
        return await self.repositories.list_repositories()

    async def find_repository_by_name(self, name: str) -> RepositoryLookup:
        """See :meth:`RepositoryCatalog.find_repository_by_name`."""
        return await self.repositories.find_repository_by_name(name)

    async def list_all_contributors(self) -> FetchResult[GitHubContributor]:
        """See :meth:`ContributorAggregator.list_all_contributors`."""
        return await self.contributors.list_all_contributors()

    async def aggregate_contributors(self) -> ContributorAggregation:
        """See :meth:`ContributorAggregator.aggregate_contributors`."""
        return await self.contributors.aggregate_contributors()

    async def list_contributors_for_repository(
        self, name: str
    ) -> FetchResult[GitHubContributor]:
        """See :meth:`ContributorAggregator.list_contributors_for_repository`."""
        return await self.contributors.list_contributors_for_repository(name)

    async def list_paths(self, repository: str, branch: str) -> FetchResult[GitHubPath]:
        """See :meth:`PathLister.list_paths`."""
        return await self.paths.list_paths(repository, branch)
