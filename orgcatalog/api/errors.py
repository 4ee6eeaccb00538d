"""API exceptions and the Falcon error handlers that render them.

Usage
-----
Register error handlers on the Falcon app::

    app.add_error_handler(RepositoryNotFoundError, handle_repository_not_found)
    app.add_error_handler(UpstreamUnavailableError, handle_upstream_unavailable)
    app.add_error_handler(DuplicateRepositoryError, handle_duplicate_repository)

"""

from __future__ import annotations

import typing as typ

import falcon

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from orgcatalog.catalog.errors import DuplicateRepositoryError

__all__ = [
    "RepositoryNotFoundError",
    "UpstreamUnavailableError",
    "handle_duplicate_repository",
    "handle_repository_not_found",
    "handle_upstream_unavailable",
]


class RepositoryNotFoundError(Exception):
    """Raised when a name lookup fails.

    The catalog cannot tell an unknown name from an unavailable upstream,
    so both surface as this error.
    """

    def __init__(self, name: str) -> None:
        """Initialize with the requested repository name."""
        self.name = name
        super().__init__(f"No repository named '{name}' is available.")


class UpstreamUnavailableError(Exception):
    """Raised when the catalog reports a failed upstream fetch.

    Attributes
    ----------
    resource
        Short description of what could not be fetched.

    """

    def __init__(self, resource: str) -> None:
        """Initialize with a description of the unavailable resource."""
        self.resource = resource
        super().__init__(f"GitHub did not return {resource}.")


async def handle_repository_not_found(
    _req: Request,
    resp: Response,
    ex: RepositoryNotFoundError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``RepositoryNotFoundError`` to an HTTP 404 JSON response."""
    resp.status = falcon.HTTP_404
    resp.media = {"title": "Repository not found", "description": str(ex)}


async def handle_upstream_unavailable(
    _req: Request,
    resp: Response,
    ex: UpstreamUnavailableError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``UpstreamUnavailableError`` to an HTTP 502 JSON response.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and media are set.
    ex
        The exception naming the resource that could not be fetched.
    _params
        URI template parameters (unused).

    """
    resp.status = falcon.HTTP_502
    resp.media = {"title": "Upstream unavailable", "description": str(ex)}


async def handle_duplicate_repository(
    _req: Request,
    resp: Response,
    ex: DuplicateRepositoryError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``DuplicateRepositoryError`` to an HTTP 409 JSON response."""
    resp.status = falcon.HTTP_409
    resp.media = {
        "title": "Ambiguous repository name",
        "description": str(ex),
        "matches": ex.matches,
    }
