"""Contributor aggregation across the organisation's repositories.

The aggregated list is the most expensive value the catalog produces: one
upstream call per repository. Its population runs under the per-key lock
for ``contributors``. Callers that queue behind an in-flight population
receive its result, cached or not, instead of starting another fan-out.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .config import CACHE_KEY_CONTRIBUTORS
from .observability import CatalogEventLogger
from .results import AggregationOutcome, ContributorAggregation, FetchResult

if typ.TYPE_CHECKING:
    from orgcatalog.cache import KeyedLocks, MemoryCache
    from orgcatalog.github.client import GitHubOrganisationClient
    from orgcatalog.github.models import GitHubContributor

    from .config import CatalogConfig
    from .repositories import RepositoryCatalog


class ContributorAggregator:
    """Merge per-repository contributors into one deduplicated list."""

    def __init__(  # noqa: PLR0913
        self,
        client: GitHubOrganisationClient,
        catalog: RepositoryCatalog,
        cache: MemoryCache,
        locks: KeyedLocks,
        config: CatalogConfig,
        *,
        event_logger: CatalogEventLogger | None = None,
    ) -> None:
        """Configure the aggregator with its collaborators."""
        self._client = client
        self._catalog = catalog
        self._cache = cache
        self._locks = locks
        self._bot_account_name = config.bot_account_name
        self._policy = config.cache_policies()[CACHE_KEY_CONTRIBUTORS]
        self._event_logger = event_logger or CatalogEventLogger()

    async def list_contributors_for_repository(
        self, repository: str
    ) -> FetchResult[GitHubContributor]:
        """Return one repository's contributors, unfiltered and uncached."""
        try:
            contributors = await self._client.fetch_contributors(repository)
        except Exception as exc:  # noqa: BLE001 - upstream failures become results
            self._event_logger.log_fetch_failed(
                "list_contributors_for_repository", repository, exc
            )
            return FetchResult.failed()
        return FetchResult(is_successful=True, items=contributors)

    async def list_all_contributors(self) -> FetchResult[GitHubContributor]:
        """Return every contributor across the catalog.

        A catalog failure or skipped repositories still report success with
        whatever was gathered; only an unexpected error reports failure.
        """
        try:
            aggregation = await self.aggregate_contributors()
        except Exception as exc:  # noqa: BLE001 - aggregation never raises to callers
            self._event_logger.log_aggregation_failed(exc)
            return FetchResult.failed()
        return aggregation.as_result()

    async def aggregate_contributors(self) -> ContributorAggregation:
        """Return the aggregated contributors with their outcome detail.

        Unlike :meth:`list_all_contributors`, unexpected errors propagate.
        The lock is released on every exit path.
        """
        aggregation, shared = await self._locks.join(
            CACHE_KEY_CONTRIBUTORS, self._read_through
        )
        if shared:
            self._event_logger.log_population_shared(
                CACHE_KEY_CONTRIBUTORS, len(aggregation.contributors)
            )
        return dc.replace(aggregation, contributors=list(aggregation.contributors))

    async def _read_through(self) -> ContributorAggregation:
        populated: list[ContributorAggregation] = []

        async def _factory() -> list[GitHubContributor]:
            aggregation = await self._populate()
            populated.append(aggregation)
            return list(aggregation.contributors)

        contributors, from_cache = await self._cache.get_or_create(
            CACHE_KEY_CONTRIBUTORS,
            _factory,
            policy=self._policy,
            should_store=bool,
        )

        if from_cache:
            self._event_logger.log_cache_hit(CACHE_KEY_CONTRIBUTORS, len(contributors))
            return ContributorAggregation(
                contributors=contributors, outcome=AggregationOutcome.CACHED
            )

        aggregation = populated[0]
        if contributors:
            self._event_logger.log_cache_stored(
                CACHE_KEY_CONTRIBUTORS, len(contributors)
            )
        else:
            self._event_logger.log_cache_skipped(CACHE_KEY_CONTRIBUTORS)
        self._event_logger.log_aggregation_completed(aggregation)
        return aggregation

    async def _populate(self) -> ContributorAggregation:
        is_successful, repositories = await self._catalog.list_repositories()
        if not is_successful:
            return ContributorAggregation(
                contributors=[], outcome=AggregationOutcome.FAILED
            )

        merged: dict[int, GitHubContributor] = {}
        skipped: list[str] = []
        for repository in repositories:
            fetched, contributors = await self.list_contributors_for_repository(
                repository.name
            )
            if not fetched:
                skipped.append(repository.name)
                continue
            for contributor in contributors:
                if contributor.name == self._bot_account_name:
                    continue
                merged.setdefault(contributor.id, contributor)

        outcome = AggregationOutcome.PARTIAL if skipped else AggregationOutcome.COMPLETE
        return ContributorAggregation(
            contributors=list(merged.values()),
            outcome=outcome,
            skipped_repositories=tuple(skipped),
        )
