"""Application factory for the orgcatalog Falcon ASGI application.

Usage
-----
Create a health-only app (no catalog)::

    app = create_app()

Create a full app serving catalog queries::

    from orgcatalog.api.app import AppDependencies, create_app
    from orgcatalog.catalog import OrganisationCatalog

    app = create_app(AppDependencies(catalog=OrganisationCatalog.from_env()))

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from orgcatalog.api.errors import (
    RepositoryNotFoundError,
    UpstreamUnavailableError,
    handle_duplicate_repository,
    handle_repository_not_found,
    handle_upstream_unavailable,
)
from orgcatalog.api.health.resources import HealthResource, ReadyResource
from orgcatalog.catalog.errors import DuplicateRepositoryError

if typ.TYPE_CHECKING:
    from orgcatalog.catalog import OrganisationCatalog

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    catalog
        Organisation catalog backing the query endpoints. When ``None``
        only the probes are registered.

    """

    catalog: OrganisationCatalog | None = None


def create_app(dependencies: AppDependencies | None = None) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. Without a catalog only
        ``/health`` and ``/ready`` are available. With one, its upstream
        client is closed on lifespan shutdown.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    catalog = dependencies.catalog if dependencies is not None else None
    middleware: list[object] = []
    if catalog is not None:
        from orgcatalog.api.middleware import CatalogLifespan

        middleware.append(CatalogLifespan(catalog))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(None if catalog is None else catalog.cache))

    if catalog is not None:
        from orgcatalog.api.catalog.resources import (
            ContributorsResource,
            RepositoriesResource,
            RepositoryContributorsResource,
            RepositoryPathsResource,
            RepositoryResource,
        )

        app.add_route("/repositories", RepositoriesResource(catalog))
        app.add_route("/repositories/{name}", RepositoryResource(catalog))
        app.add_route(
            "/repositories/{name}/contributors",
            RepositoryContributorsResource(catalog),
        )
        app.add_route("/repositories/{name}/paths", RepositoryPathsResource(catalog))
        app.add_route("/contributors", ContributorsResource(catalog))

    app.add_error_handler(RepositoryNotFoundError, handle_repository_not_found)
    app.add_error_handler(UpstreamUnavailableError, handle_upstream_unavailable)
    app.add_error_handler(DuplicateRepositoryError, handle_duplicate_repository)

    return app
