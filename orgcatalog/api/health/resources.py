"""Liveness and readiness probe resources.

Usage
-----
Register health endpoints on the Falcon app::

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(cache))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from orgcatalog.cache import MemoryCache

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe; always ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe reporting cache occupancy when a cache is attached.

    Readiness does not depend on GitHub being reachable: a cold cache
    is populated on the first query.
    """

    def __init__(self, cache: MemoryCache | None = None) -> None:
        """Attach the shared cache whose counters are reported."""
        self._cache = cache

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with readiness status and, when a
            cache is attached, its entry count and hit/miss counters.

        """
        media: dict[str, typ.Any] = {"status": "ready"}
        if self._cache is not None:
            stats = self._cache.stats
            media["cache"] = {
                "entries": len(self._cache),
                "hit": stats.hit,
                "miss": stats.miss,
                "write": stats.write,
            }
        resp.media = media
        resp.status = HTTPStatus.OK
