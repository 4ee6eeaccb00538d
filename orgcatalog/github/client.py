"""GitHub REST client and the uncached fetch primitives built on it."""

from __future__ import annotations

import typing as typ
import urllib.parse

import httpx
import msgspec

from .errors import GitHubAPIError, GitHubResponseShapeError
from .models import GitHubContributor, GitHubPath, GitHubRepository, GitHubTree

if typ.TYPE_CHECKING:
    from .config import GitHubRestConfig

_HTTP_ERROR_STATUS_THRESHOLD = 400


class GitHubOrganisationClient(typ.Protocol):
    """Uncached upstream calls scoped to one organisation.

    Every method raises on failure; converting failures into results is the
    catalog layer's job.
    """

    async def fetch_repositories(self) -> list[GitHubRepository]:
        """Return the organisation's repositories."""
        ...

    async def fetch_contributors(self, repository: str) -> list[GitHubContributor]:
        """Return the contributors of one repository."""
        ...

    async def fetch_paths(self, repository: str, branch: str) -> list[GitHubPath]:
        """Return every path in a repository tree at ``branch``."""
        ...


def _quote(segment: str, *, safe: str = "") -> str:
    return urllib.parse.quote(segment, safe=safe)


class GitHubRestClient:
    """httpx-backed implementation of :class:`GitHubOrganisationClient`."""

    def __init__(
        self,
        config: GitHubRestConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client, creating an owned httpx client if needed."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_s,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "application/vnd.github+json",
            },
        )

    @property
    def organisation(self) -> str:
        """Return the organisation every request is scoped to."""
        return self._config.organisation

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def get_json[T](self, path: str, result_type: type[T]) -> T:
        """Issue ``GET path`` and decode the JSON body as ``result_type``.

        Raises
        ------
        GitHubAPIError
            If the response status is 400 or above.
        GitHubResponseShapeError
            If the body is ``null`` or does not decode as ``result_type``.
        httpx.HTTPError
            If the request fails at the transport level.

        """
        response = await self._client.get(path)
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(response.status_code, path)

        try:
            decoded = msgspec.json.decode(response.content, type=result_type | None)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.undecodable(path, str(exc)) from exc

        if decoded is None:
            raise GitHubResponseShapeError.null_payload(path)
        return decoded

    async def fetch_repositories(self) -> list[GitHubRepository]:
        """Fetch ``GET /orgs/{org}/repos``."""
        path = f"/orgs/{_quote(self.organisation)}/repos"
        return await self.get_json(path, list[GitHubRepository])

    async def fetch_contributors(self, repository: str) -> list[GitHubContributor]:
        """Fetch ``GET /repos/{org}/{repo}/contributors``."""
        path = (
            f"/repos/{_quote(self.organisation)}/{_quote(repository)}/contributors"
        )
        return await self.get_json(path, list[GitHubContributor])

    async def fetch_paths(self, repository: str, branch: str) -> list[GitHubPath]:
        """Fetch the recursive tree for ``branch`` and return its entries."""
        path = (
            f"/repos/{_quote(self.organisation)}/{_quote(repository)}"
            f"/git/trees/{_quote(branch, safe='/')}?recursive=true"
        )
        tree = await self.get_json(path, GitHubTree)
        return tree.tree
