"""Application factory for the Command Center Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI
application with health probes and the work queue endpoints.

Usage
-----
Create an app without a GitHub token (queue endpoints answer
``CONFIG_ERROR``)::

    app = create_app()

Create a fully configured app::

    from command_center.api.app import AppDependencies, create_app

    deps = AppDependencies(queue_service=service)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from command_center.api.errors import register_error_handlers
from command_center.api.health.resources import HealthResource, ReadyResource
from command_center.api.queues.resources import AllQueuesResource, QueueResource
from command_center.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from command_center.github.errors import GitHubConfigError
    from command_center.github.service import GitHubQueueService

__all__ = ["AppDependencies", "QueueServiceLifespan", "create_app"]

logger = get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    queue_service
        Service answering queue requests, or ``None`` when GitHub is not
        configured.
    config_error
        Configuration error that prevented building the service, if any.

    """

    queue_service: GitHubQueueService | None = None
    config_error: GitHubConfigError | None = None


class QueueServiceLifespan:
    """Falcon middleware closing the queue service at ASGI shutdown."""

    def __init__(self, service: GitHubQueueService) -> None:
        """Track *service* for shutdown."""
        self._service = service

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Release the service's HTTP client."""
        log_info(logger, "Closing GitHub queue service")
        await self._service.aclose()


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. When ``None`` or without a queue
        service, the queue endpoints respond with HTTP 401 ``CONFIG_ERROR``.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    deps = dependencies or AppDependencies()
    service = deps.queue_service

    middleware: list[object] = []
    if service is not None:
        middleware.append(QueueServiceLifespan(service))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(github_configured=service is not None))
    config_error = deps.config_error
    app.add_route("/api/github", QueueResource(service, config_error=config_error))
    app.add_route(
        "/api/github/all", AllQueuesResource(service, config_error=config_error)
    )

    register_error_handlers(app)
    return app
