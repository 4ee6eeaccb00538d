"""orgcatalog runtime entrypoint.

``orgcatalog.runtime:create_app`` is the Granian factory target. It builds
an :class:`~orgcatalog.catalog.OrganisationCatalog` from the environment
(see :meth:`GitHubRestConfig.from_env` and :meth:`CatalogConfig.from_env`)
and serves it through :func:`orgcatalog.api.app.create_app`.

Server settings come from environment variables:

- ``ORGCATALOG_HOST``: Bind address (default ``0.0.0.0``)
- ``ORGCATALOG_PORT``: Listen port (default ``8080``)
- ``ORGCATALOG_LOG_LEVEL``: Log level (default ``INFO``)

Run the service directly with ``python -m orgcatalog.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from orgcatalog.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not an integer in range 1-65535.

    """
    try:
        port = int(port_str)
    except ValueError as exc:
        log_error(logger, "Invalid ORGCATALOG_PORT value: %r", port_str)
        raise SystemExit(1) from exc
    if not _MIN_PORT <= port <= _MAX_PORT:
        log_error(
            logger,
            "Invalid ORGCATALOG_PORT value: %r (must be %d-%d)",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
        )
        raise SystemExit(1)
    return port


def create_app() -> falcon.asgi.App:
    """Create the ASGI application with a catalog configured from env."""
    from orgcatalog.api.app import AppDependencies
    from orgcatalog.api.app import create_app as _create_api_app
    from orgcatalog.catalog import OrganisationCatalog

    return _create_api_app(AppDependencies(catalog=OrganisationCatalog.from_env()))


def main() -> None:
    """Start the orgcatalog server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("ORGCATALOG_HOST", "0.0.0.0")  # noqa: S104 - container bind
    port = _parse_port(os.environ.get("ORGCATALOG_PORT", "8080"))
    log_level_str = os.environ.get("ORGCATALOG_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid ORGCATALOG_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting orgcatalog runtime on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "orgcatalog.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
