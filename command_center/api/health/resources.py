"""Health probe resources for liveness and readiness checks.

Neither probe touches GitHub: liveness only proves the process answers,
and readiness reports whether a GitHub token was configured at startup.

Usage
-----
Register health endpoints on the Falcon app::

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(github_configured=True))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe resource returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe resource returning ``{"status": "ready", ...}``.

    Always responds with HTTP 200: an unconfigured deployment still serves
    ``CONFIG_ERROR`` responses, so it is up, just not useful. The ``github``
    field tells operators which case they are in.

    """

    def __init__(self, *, github_configured: bool) -> None:
        """Record whether the queue service has a GitHub token."""
        self._github_state = "configured" if github_configured else "unconfigured"

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with readiness status.

        """
        resp.media = {"status": "ready", "github": self._github_state}
        resp.status = HTTPStatus.OK
