"""Unit tests for repository tree listing."""

from __future__ import annotations

import httpx
import pytest

from orgcatalog.catalog import OrganisationCatalog
from orgcatalog.github import GitHubAPIError
from tests.helpers.fake_github import FakeGitHubClient, make_path


class TestListPaths:
    """Tests for PathLister.list_paths."""

    @pytest.mark.asyncio
    async def test_returns_tree_entries_in_upstream_order(
        self, catalog: OrganisationCatalog, github_client: FakeGitHubClient
    ) -> None:
        """Blobs and trees are returned exactly as GitHub lists them."""
        github_client.paths[("atc-core", "main")] = [
            make_path("src", kind="tree"),
            make_path("src/Program.cs"),
            make_path("README.md"),
        ]

        is_successful, paths = await catalog.list_paths("atc-core", "main")

        assert is_successful is True
        assert [(p.path, p.type) for p in paths] == [
            ("src", "tree"),
            ("src/Program.cs", "blob"),
            ("README.md", "blob"),
        ]

    @pytest.mark.asyncio
    async def test_is_never_cached(
        self, catalog: OrganisationCatalog, github_client: FakeGitHubClient
    ) -> None:
        """Each call fetches the tree again."""
        await catalog.list_paths("atc-core", "main")
        await catalog.list_paths("atc-core", "main")
        assert github_client.calls["paths"] == 2  # noqa: PLR2004
        assert len(catalog.cache) == 0

    @pytest.mark.asyncio
    async def test_repository_is_not_checked_against_catalog(
        self, catalog: OrganisationCatalog, github_client: FakeGitHubClient
    ) -> None:
        """Excluded repositories can still be listed by exact name."""
        github_client.paths[("atc-dummy", "main")] = [make_path("README.md")]
        is_successful, paths = await catalog.list_paths("atc-dummy", "main")
        assert is_successful is True
        assert len(paths) == 1
        assert github_client.calls["repositories"] == 0

    @pytest.mark.parametrize(
        "error",
        [
            GitHubAPIError.http_error(
                404, "/repos/atc-net/atc-core/git/trees/gone?recursive=true"
            ),
            httpx.ConnectError("refused"),
        ],
        ids=["missing-branch", "transport"],
    )
    @pytest.mark.asyncio
    async def test_failure_returns_empty(
        self,
        catalog: OrganisationCatalog,
        github_client: FakeGitHubClient,
        error: Exception,
    ) -> None:
        """Unknown branches and transport errors become failed results."""
        github_client.paths[("atc-core", "gone")] = error
        assert await catalog.list_paths("atc-core", "gone") == (False, [])
