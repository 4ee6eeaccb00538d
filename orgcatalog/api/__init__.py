"""orgcatalog HTTP API layer.

This package provides the Falcon ASGI application serving the
organisation catalog as JSON.

Usage
-----
Create and run the application::

    from orgcatalog.api import create_app

    app = create_app()              # probes only
    app = create_app(dependencies)  # probes plus catalog queries
"""

from orgcatalog.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
