"""Liveness and readiness probes for the Command Center service.

Usage
-----
Import health resources for route registration::

    from command_center.api.health.resources import HealthResource, ReadyResource
"""
