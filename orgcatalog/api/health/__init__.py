"""Probe resources for liveness and readiness checks.

Usage
-----
Import the resources for route registration::

    from orgcatalog.api.health.resources import HealthResource, ReadyResource
"""
