"""Cached repository, contributor, and path queries for one organisation."""

from __future__ import annotations

from .config import CACHE_KEY_CONTRIBUTORS, CACHE_KEY_REPOSITORIES, CatalogConfig
from .contributors import ContributorAggregator
from .errors import CatalogConfigError, DuplicateRepositoryError
from .observability import (
    CatalogEventLogger,
    CatalogEventType,
    ErrorCategory,
    categorize_error,
)
from .paths import PathLister
from .repositories import RepositoryCatalog
from .results import (
    AggregationOutcome,
    ContributorAggregation,
    FetchResult,
    RepositoryLookup,
)
from .service import OrganisationCatalog

__all__ = [
    "CACHE_KEY_CONTRIBUTORS",
    "CACHE_KEY_REPOSITORIES",
    "AggregationOutcome",
    "CatalogConfig",
    "CatalogConfigError",
    "CatalogEventLogger",
    "CatalogEventType",
    "ContributorAggregation",
    "ContributorAggregator",
    "DuplicateRepositoryError",
    "ErrorCategory",
    "FetchResult",
    "OrganisationCatalog",
    "PathLister",
    "RepositoryCatalog",
    "RepositoryLookup",
    "categorize_error",
]
