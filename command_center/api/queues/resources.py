"""Work queue resources backed by ``GitHubQueueService``.

``GET /api/github?queue={queue}`` returns one queue; ``GET /api/github/all``
returns every queue at once. Both tell downstream caches not to store the
response, because freshness is controlled by the service's own cache.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/api/github", QueueResource(service))
    app.add_route("/api/github/all", AllQueuesResource(service))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import msgspec

from command_center.api.errors import InvalidParameterError, MissingParameterError
from command_center.github.errors import GitHubConfigError
from command_center.github.queues import VALID_QUEUES, QueueName

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from command_center.github.service import GitHubQueueService

__all__ = ["AllQueuesResource", "QueueResource"]

_NO_STORE = "no-store"


def _require_service(
    service: GitHubQueueService | None,
    config_error: GitHubConfigError | None,
) -> GitHubQueueService:
    """Return *service* or raise the error that kept it from being built."""
    if service is None:
        if config_error is not None:
            raise GitHubConfigError(str(config_error))
        raise GitHubConfigError.missing_token()
    return service


def _parse_queue_param(req: Request) -> QueueName:
    """Return the validated ``queue`` query parameter."""
    raw = req.get_param("queue")
    if not raw:
        raise MissingParameterError("queue")
    if raw not in VALID_QUEUES:
        raise InvalidParameterError("queue", raw, VALID_QUEUES)
    return QueueName(raw)


class QueueResource:
    """Resource serving a single work queue.

    The credential check runs before parameter validation, so an
    unconfigured deployment answers every request with ``CONFIG_ERROR``.

    """

    def __init__(
        self,
        service: GitHubQueueService | None,
        *,
        config_error: GitHubConfigError | None = None,
    ) -> None:
        """Configure the resource with the queue service, if one exists.

        Parameters
        ----------
        service
            Queue service, or ``None`` when GitHub is not configured.
        config_error
            Error raised while reading the GitHub configuration; reported
            instead of the missing-token error when the service is absent.

        """
        self._service = service
        self._config_error = config_error

    async def on_get(self, req: Request, resp: Response) -> None:
        """Handle GET /api/github requests.

        Parameters
        ----------
        req
            Falcon request carrying the ``queue`` query parameter.
        resp
            Falcon response populated with the queue payload.

        """
        service = _require_service(self._service, self._config_error)
        queue = _parse_queue_param(req)

        result = await service.fetch_queue(queue)

        resp.media = msgspec.to_builtins(result)
        resp.status = HTTPStatus.OK
        resp.set_header("Cache-Control", _NO_STORE)


class AllQueuesResource:
    """Resource serving every work queue in one response."""

    def __init__(
        self,
        service: GitHubQueueService | None,
        *,
        config_error: GitHubConfigError | None = None,
    ) -> None:
        """Configure the resource with the queue service, if one exists."""
        self._service = service
        self._config_error = config_error

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /api/github/all requests."""
        service = _require_service(self._service, self._config_error)

        result = await service.fetch_all_queues()

        resp.media = msgspec.to_builtins(result)
        resp.status = HTTPStatus.OK
        resp.set_header("Cache-Control", _NO_STORE)
