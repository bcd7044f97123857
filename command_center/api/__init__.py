"""Command Center HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that serves the dashboard's work queues.

Public API
----------
create_app
    Application factory registering health probes and the queue
    endpoints; queue requests answer ``CONFIG_ERROR`` when no GitHub
    token is configured.
"""

from command_center.api.app import create_app

__all__ = ["create_app"]
