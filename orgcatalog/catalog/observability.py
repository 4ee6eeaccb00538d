"""Structured log events for catalog cache and fetch activity.

Failures that the catalog converts into ``(False, [])`` results are only
visible here, so every swallowed error is categorised and logged.
"""

from __future__ import annotations

import enum
import typing as typ

import httpx

from orgcatalog.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from orgcatalog.logging import get_logger, log_debug, log_info, log_warning

if typ.TYPE_CHECKING:
    from .results import ContributorAggregation

logger = get_logger(__name__)

_HTTP_SERVER_ERROR_THRESHOLD = 500
_HTTP_NOT_FOUND = 404


class CatalogEventType(enum.StrEnum):
    """Structured log event types for catalog operations."""

    CACHE_HIT = "catalog.cache.hit"
    CACHE_STORED = "catalog.cache.stored"
    CACHE_SKIPPED = "catalog.cache.skipped"
    POPULATION_SHARED = "catalog.population.shared"
    FETCH_FAILED = "catalog.fetch.failed"
    LOOKUP_MISSED = "catalog.lookup.missed"
    AGGREGATION_COMPLETED = "catalog.aggregation.completed"
    AGGREGATION_FAILED = "catalog.aggregation.failed"


class ErrorCategory(enum.StrEnum):
    """Categories for upstream failures."""

    TRANSIENT = "transient"
    NOT_FOUND = "not_found"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    TRANSPORT = "transport"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
    (httpx.TimeoutException, ErrorCategory.TRANSIENT),
    (httpx.HTTPError, ErrorCategory.TRANSPORT),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an upstream failure for log routing."""
    if isinstance(exc, GitHubAPIError):
        if exc.status_code is None:
            return ErrorCategory.CLIENT_ERROR
        if exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD:
            return ErrorCategory.TRANSIENT
        if exc.status_code == _HTTP_NOT_FOUND:
            return ErrorCategory.NOT_FOUND
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class CatalogEventLogger:
    """Emit catalog events via femtologging."""

    def log_cache_hit(self, key: str, size: int) -> None:
        """Log a read served from the cache."""
        log_debug(logger, "[%s] key=%s size=%d", CatalogEventType.CACHE_HIT, key, size)

    def log_cache_stored(self, key: str, size: int) -> None:
        """Log a populated collection written to the cache."""
        log_info(
            logger, "[%s] key=%s size=%d", CatalogEventType.CACHE_STORED, key, size
        )

    def log_cache_skipped(self, key: str) -> None:
        """Log a population that produced nothing and so was not cached."""
        log_info(logger, "[%s] key=%s size=0", CatalogEventType.CACHE_SKIPPED, key)

    def log_population_shared(self, key: str, size: int) -> None:
        """Log a caller served by a population that finished while it waited."""
        log_debug(
            logger, "[%s] key=%s size=%d", CatalogEventType.POPULATION_SHARED, key, size
        )

    def log_fetch_failed(self, operation: str, target: str, error: Exception) -> None:
        """Log an upstream failure that was converted into a failed result."""
        log_warning(
            logger,
            "[%s] operation=%s target=%s error_type=%s error_category=%s "
            "error_message=%s",
            CatalogEventType.FETCH_FAILED,
            operation,
            target,
            type(error).__name__,
            categorize_error(error),
            str(error),
        )

    def log_lookup_missed(self, name: str, *, catalog_available: bool) -> None:
        """Log a failed name lookup, recording which of the two causes applied."""
        log_info(
            logger,
            "[%s] name=%s catalog_available=%s",
            CatalogEventType.LOOKUP_MISSED,
            name,
            catalog_available,
        )

    def log_aggregation_completed(self, aggregation: ContributorAggregation) -> None:
        """Log the outcome of a contributor aggregation pass."""
        log_info(
            logger,
            "[%s] outcome=%s contributors=%d skipped_repositories=%s",
            CatalogEventType.AGGREGATION_COMPLETED,
            aggregation.outcome,
            len(aggregation.contributors),
            ",".join(aggregation.skipped_repositories) or "-",
        )

    def log_aggregation_failed(self, error: Exception) -> None:
        """Log an unexpected error raised while populating contributors."""
        log_warning(
            logger,
            "[%s] error_type=%s error_message=%s",
            CatalogEventType.AGGREGATION_FAILED,
            type(error).__name__,
            str(error),
            exc_info=error,
        )
