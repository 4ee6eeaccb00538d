"""JSON resources exposing the organisation catalog queries.

Every resource reads through :class:`~orgcatalog.catalog.OrganisationCatalog`
and renders msgspec structs with :func:`msgspec.to_builtins`, so response
bodies use GitHub's own field names.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/repositories", RepositoriesResource(catalog))
    app.add_route("/repositories/{name}", RepositoryResource(catalog))

"""

from __future__ import annotations

import typing as typ

import falcon
import msgspec

from orgcatalog.api.errors import RepositoryNotFoundError, UpstreamUnavailableError

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from orgcatalog.catalog import OrganisationCatalog
    from orgcatalog.github.models import GitHubRepository

__all__ = [
    "ContributorsResource",
    "RepositoriesResource",
    "RepositoryContributorsResource",
    "RepositoryPathsResource",
    "RepositoryResource",
]


class _CatalogResource:
    def __init__(self, catalog: OrganisationCatalog) -> None:
        self._catalog = catalog

    async def _resolve(self, name: str) -> GitHubRepository:
        is_successful, repository = await self._catalog.find_repository_by_name(name)
        if not is_successful or repository is None:
            raise RepositoryNotFoundError(name)
        return repository


class RepositoriesResource(_CatalogResource):
    """``GET /repositories``: the filtered repository catalog."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /repositories requests."""
        is_successful, repositories = await self._catalog.list_repositories()
        if not is_successful:
            raise UpstreamUnavailableError("the repository list")
        resp.media = {"repositories": msgspec.to_builtins(repositories)}
        resp.status = falcon.HTTP_200


class RepositoryResource(_CatalogResource):
    """``GET /repositories/{name}``: one repository, matched ignoring case."""

    async def on_get(self, _req: Request, resp: Response, *, name: str) -> None:
        """Handle GET /repositories/{name} requests."""
        repository = await self._resolve(name)
        resp.media = msgspec.to_builtins(repository)
        resp.status = falcon.HTTP_200


class RepositoryContributorsResource(_CatalogResource):
    """``GET /repositories/{name}/contributors``: unfiltered contributors."""

    async def on_get(self, _req: Request, resp: Response, *, name: str) -> None:
        """Handle GET /repositories/{name}/contributors requests."""
        (
            is_successful,
            contributors,
        ) = await self._catalog.list_contributors_for_repository(name)
        if not is_successful:
            raise UpstreamUnavailableError(f"contributors for '{name}'")
        resp.media = {"contributors": msgspec.to_builtins(contributors)}
        resp.status = falcon.HTTP_200


class RepositoryPathsResource(_CatalogResource):
    """``GET /repositories/{name}/paths``: every path in the tree.

    The ``branch`` query parameter defaults to the repository's default
    branch, which requires a catalog lookup.
    """

    async def on_get(self, req: Request, resp: Response, *, name: str) -> None:
        """Handle GET /repositories/{name}/paths requests.

        Parameters
        ----------
        req
            Falcon request; an optional ``branch`` query parameter selects
            the tree.
        resp
            Falcon response populated with the path list.
        name
            Repository name from the URL path.

        """
        branch = req.get_param("branch")
        if branch is None:
            repository = await self._resolve(name)
            name = repository.name
            branch = repository.default_branch

        is_successful, paths = await self._catalog.list_paths(name, branch)
        if not is_successful:
            raise UpstreamUnavailableError(f"the tree of '{name}' at '{branch}'")
        resp.media = {
            "repository": name,
            "branch": branch,
            "paths": msgspec.to_builtins(paths),
        }
        resp.status = falcon.HTTP_200


class ContributorsResource(_CatalogResource):
    """``GET /contributors``: contributors merged across the catalog.

    The body carries the aggregation outcome so clients can tell a
    partial list from a complete one.
    """

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /contributors requests."""
        aggregation = await self._catalog.aggregate_contributors()
        resp.media = {
            "outcome": str(aggregation.outcome),
            "skipped_repositories": list(aggregation.skipped_repositories),
            "contributors": msgspec.to_builtins(aggregation.contributors),
        }
        resp.status = falcon.HTTP_200
