"""Result types returned by the catalog components.

Catalog operations never raise for ordinary upstream failures. They return
a ``(is_successful, payload)`` pair instead, so callers can unpack:

>>> ok, repositories = await catalog.list_repositories()

"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from orgcatalog.github.models import GitHubContributor, GitHubRepository


class FetchResult[T](typ.NamedTuple):
    """Outcome of a collection query; ``items`` is empty on failure."""

    is_successful: bool
    items: list[T]

    @classmethod
    def failed(cls) -> FetchResult[T]:
        """Return a failure carrying an empty collection."""
        return cls(is_successful=False, items=[])


class RepositoryLookup(typ.NamedTuple):
    """Outcome of a name lookup; ``repository`` is None on failure."""

    is_successful: bool
    repository: GitHubRepository | None


class AggregationOutcome(enum.StrEnum):
    """How a contributor aggregation was produced."""

    CACHED = "cached"
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


@dc.dataclass(frozen=True, slots=True)
class ContributorAggregation:
    """Aggregated contributors plus the detail the boolean view drops.

    Attributes
    ----------
    contributors
        Deduplicated contributors in repository order.
    outcome
        Whether every repository contributed, some were skipped, the
        catalog itself was unavailable, or the value came from the cache.
    skipped_repositories
        Names of repositories whose contributor fetch failed.

    """

    contributors: list[GitHubContributor]
    outcome: AggregationOutcome
    skipped_repositories: tuple[str, ...] = ()

    def as_result(self) -> FetchResult[GitHubContributor]:
        """Return the degraded-success view: every outcome reports success."""
        return FetchResult(is_successful=True, items=self.contributors)
