"""Unit tests for the orgcatalog.runtime module."""

from __future__ import annotations

from http import HTTPStatus

import falcon.asgi
import falcon.testing
import pytest

from orgcatalog.github import GitHubConfigError
from orgcatalog.runtime import _parse_port, create_app

_ENV_VARS = (
    "ORGCATALOG_GITHUB_ORGANISATION",
    "ORGCATALOG_GITHUB_BASE_URL",
    "ORGCATALOG_GITHUB_TIMEOUT_S",
    "ORGCATALOG_EXCLUDED_REPOSITORIES",
    "ORGCATALOG_BOT_ACCOUNT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client() -> falcon.testing.TestClient:
    """Create a test client for the orgcatalog runtime app."""
    return falcon.testing.TestClient(create_app())


class TestCreateApp:
    """Tests for the create_app factory function."""

    def test_create_app_returns_falcon_app(self) -> None:
        """create_app returns a Falcon ASGI App instance."""
        assert isinstance(create_app(), falcon.asgi.App)

    def test_health_returns_json_status_ok(
        self, client: falcon.testing.TestClient
    ) -> None:
        """GET /health returns JSON with status ok."""
        result = client.simulate_get("/health")
        assert result.status_code == HTTPStatus.OK
        assert result.json == {"status": "ok"}
        content_type = result.headers.get("content-type", "")
        assert content_type.startswith("application/json")

    def test_ready_reports_empty_cache(
        self, client: falcon.testing.TestClient
    ) -> None:
        """A fresh runtime is ready before GitHub has been queried."""
        result = client.simulate_get("/ready")
        assert result.status_code == HTTPStatus.OK
        assert result.json["status"] == "ready"
        assert result.json["cache"]["entries"] == 0

    def test_invalid_env_config_fails_fast(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Configuration errors surface when the factory runs."""
        monkeypatch.setenv("ORGCATALOG_GITHUB_TIMEOUT_S", "never")
        with pytest.raises(GitHubConfigError, match="TIMEOUT_S"):
            create_app()


class TestParsePort:
    """Tests for _parse_port."""

    def test_valid_port(self) -> None:
        """A numeric port in range is returned as an int."""
        assert _parse_port("8080") == 8080  # noqa: PLR2004

    @pytest.mark.parametrize("raw", ["http", "0", "65536", "-1"])
    def test_invalid_port_exits(self, raw: str) -> None:
        """Non-numeric or out-of-range ports stop the process."""
        with pytest.raises(SystemExit) as exc:
            _parse_port(raw)
        assert exc.value.code == 1
