"""Unit tests for the catalog query resources.

The resources run against a real ``OrganisationCatalog`` wired to the fake
GitHub client, so status codes reflect actual catalog results.
"""

from __future__ import annotations

import falcon
import falcon.testing
import httpx
import pytest

from orgcatalog.api.app import AppDependencies, create_app
from orgcatalog.catalog import OrganisationCatalog
from orgcatalog.github import GitHubAPIError
from tests.helpers.fake_github import FakeGitHubClient, make_path, make_repository


@pytest.fixture
def client(catalog: OrganisationCatalog) -> falcon.testing.TestClient:
    """Build a test client backed by the fake catalog."""
    return falcon.testing.TestClient(create_app(AppDependencies(catalog=catalog)))


class TestRepositoriesResource:
    """Tests for GET /repositories."""

    def test_lists_filtered_repositories(
        self, client: falcon.testing.TestClient
    ) -> None:
        """Excluded repositories are absent from the response."""
        result = client.simulate_get("/repositories")
        assert result.status == falcon.HTTP_200
        names = [repo["name"] for repo in result.json["repositories"]]
        assert names == ["atc-core", "atc-rest"]
        assert result.json["repositories"][1]["default_branch"] == "develop"

    def test_upstream_failure_is_bad_gateway(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """A failed catalog fetch maps to 502."""
        github_client.repositories = httpx.ConnectError("refused")
        result = client.simulate_get("/repositories")
        assert result.status == falcon.HTTP_502
        assert result.json["title"] == "Upstream unavailable"


class TestRepositoryResource:
    """Tests for GET /repositories/{name}."""

    def test_lookup_ignores_case(self, client: falcon.testing.TestClient) -> None:
        """Names match case-insensitively and return the canonical record."""
        result = client.simulate_get("/repositories/ATC-Rest")
        assert result.status == falcon.HTTP_200
        assert result.json["name"] == "atc-rest"

    @pytest.mark.parametrize("name", ["atc-unknown", "atc-dummy"])
    def test_unknown_or_excluded_is_not_found(
        self, client: falcon.testing.TestClient, name: str
    ) -> None:
        """Unknown and excluded names both return 404."""
        result = client.simulate_get(f"/repositories/{name}")
        assert result.status == falcon.HTTP_404
        assert name in result.json["description"]

    def test_unavailable_catalog_is_not_found(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """A lookup cannot tell an outage from a missing name."""
        github_client.repositories = httpx.ReadTimeout("slow")
        result = client.simulate_get("/repositories/atc-core")
        assert result.status == falcon.HTTP_404

    def test_ambiguous_name_is_conflict(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """Case-insensitive duplicates map to 409 with the candidates."""
        github_client.repositories = [
            make_repository("atc-core"),
            make_repository("ATC-Core"),
        ]
        result = client.simulate_get("/repositories/atc-core")
        assert result.status == falcon.HTTP_409
        assert result.json["matches"] == ["atc-core", "ATC-Core"]


class TestRepositoryContributorsResource:
    """Tests for GET /repositories/{name}/contributors."""

    def test_returns_unfiltered_contributors_with_wire_names(
        self, client: falcon.testing.TestClient
    ) -> None:
        """The bot is kept and the display name is rendered as ``login``."""
        result = client.simulate_get("/repositories/atc-core/contributors")
        assert result.status == falcon.HTTP_200
        logins = [c["login"] for c in result.json["contributors"]]
        assert logins == ["alice", "ATCBot"]

    def test_upstream_failure_is_bad_gateway(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """A failed per-repository fetch maps to 502."""
        github_client.contributors["atc-core"] = GitHubAPIError.http_error(
            404, "/repos/atc-net/atc-core/contributors"
        )
        result = client.simulate_get("/repositories/atc-core/contributors")
        assert result.status == falcon.HTTP_502


class TestRepositoryPathsResource:
    """Tests for GET /repositories/{name}/paths."""

    def test_defaults_to_repository_default_branch(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """Without ``branch`` the catalog's default branch is used."""
        github_client.paths[("atc-rest", "develop")] = [make_path("README.md")]
        result = client.simulate_get("/repositories/ATC-REST/paths")
        assert result.status == falcon.HTTP_200
        assert result.json["repository"] == "atc-rest"
        assert result.json["branch"] == "develop"
        assert [p["path"] for p in result.json["paths"]] == ["README.md"]

    def test_explicit_branch_skips_lookup(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """An explicit branch is passed straight through."""
        github_client.paths[("atc-core", "feature/x")] = [
            make_path("src", kind="tree")
        ]
        result = client.simulate_get(
            "/repositories/atc-core/paths", params={"branch": "feature/x"}
        )
        assert result.status == falcon.HTTP_200
        assert result.json["paths"][0]["type"] == "tree"
        assert github_client.calls["repositories"] == 0

    def test_unknown_repository_without_branch_is_not_found(
        self, client: falcon.testing.TestClient
    ) -> None:
        """The default branch cannot be resolved for an unknown repository."""
        result = client.simulate_get("/repositories/atc-unknown/paths")
        assert result.status == falcon.HTTP_404

    def test_failed_tree_is_bad_gateway(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """A failed tree fetch maps to 502."""
        github_client.paths[("atc-core", "gone")] = httpx.ConnectError("refused")
        result = client.simulate_get(
            "/repositories/atc-core/paths", params={"branch": "gone"}
        )
        assert result.status == falcon.HTTP_502


class TestContributorsResource:
    """Tests for GET /contributors."""

    def test_complete_then_cached(self, client: falcon.testing.TestClient) -> None:
        """The response reports how the list was produced."""
        first = client.simulate_get("/contributors")
        second = client.simulate_get("/contributors")

        assert first.status == falcon.HTTP_200
        assert first.json["outcome"] == "complete"
        assert [c["login"] for c in first.json["contributors"]] == ["alice", "bob"]
        assert second.json["outcome"] == "cached"
        assert second.json["contributors"] == first.json["contributors"]

    def test_partial_lists_skipped_repositories(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """Skipped repositories are named in the body."""
        github_client.contributors["atc-core"] = httpx.ReadTimeout("slow")
        result = client.simulate_get("/contributors")
        assert result.status == falcon.HTTP_200
        assert result.json["outcome"] == "partial"
        assert result.json["skipped_repositories"] == ["atc-core"]

    def test_failed_catalog_is_still_ok(
        self, client: falcon.testing.TestClient, github_client: FakeGitHubClient
    ) -> None:
        """A failed catalog yields an empty list flagged as failed."""
        github_client.repositories = httpx.ConnectError("refused")
        result = client.simulate_get("/contributors")
        assert result.status == falcon.HTTP_200
        assert result.json == {
            "outcome": "failed",
            "skipped_repositories": [],
            "contributors": [],
        }
