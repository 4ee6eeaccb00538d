"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from orgcatalog.cache import KeyedLocks, MemoryCache
from orgcatalog.catalog import CatalogConfig, OrganisationCatalog
from tests.helpers.fake_github import (
    FakeClock,
    FakeGitHubClient,
    make_contributor,
    make_repository,
)


@pytest.fixture
def clock() -> FakeClock:
    """Return a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    """Return an empty cache driven by the fake clock."""
    return MemoryCache(clock=clock)


@pytest.fixture
def github_client() -> FakeGitHubClient:
    """Return a fake client serving two repositories and their contributors."""
    return FakeGitHubClient(
        repositories=[
            make_repository("atc-core"),
            make_repository("atc-dummy"),
            make_repository("atc-rest", default_branch="develop"),
        ],
        contributors={
            "atc-core": [make_contributor(1, "alice"), make_contributor(7, "ATCBot")],
            "atc-rest": [make_contributor(2, "bob"), make_contributor(1, "alice")],
        },
    )


@pytest.fixture
def catalog_config() -> CatalogConfig:
    """Return the default catalog configuration."""
    return CatalogConfig()


@pytest.fixture
def catalog(
    github_client: FakeGitHubClient,
    catalog_config: CatalogConfig,
    cache: MemoryCache,
) -> OrganisationCatalog:
    """Return a catalog wired to the fake client and fake-clock cache."""
    return OrganisationCatalog(
        github_client, config=catalog_config, cache=cache, locks=KeyedLocks()
    )
