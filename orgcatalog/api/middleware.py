"""Lifespan middleware for Falcon ASGI applications.

The catalog owns an ``httpx.AsyncClient`` for the life of the process. This
middleware closes it when the ASGI server sends the lifespan shutdown event.

Usage
-----
Register the middleware when creating the Falcon app::

    from orgcatalog.api.middleware import CatalogLifespan

    app = falcon.asgi.App(middleware=[CatalogLifespan(catalog)])

"""

from __future__ import annotations

import typing as typ

from orgcatalog.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from orgcatalog.catalog import OrganisationCatalog

__all__ = ["CatalogLifespan"]

logger = get_logger(__name__)


class CatalogLifespan:
    """Falcon middleware releasing catalog resources on shutdown.

    Parameters
    ----------
    catalog
        Organisation catalog whose upstream client is closed on shutdown.

    """

    def __init__(self, catalog: OrganisationCatalog) -> None:
        """Initialize the middleware with the catalog it manages."""
        self._catalog = catalog

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Close the catalog's upstream client.

        Parameters
        ----------
        _scope
            ASGI lifespan scope (unused).
        _event
            ASGI ``lifespan.shutdown`` event (unused).

        """
        await self._catalog.aclose()
        log_info(logger, "Closed GitHub client on shutdown")
