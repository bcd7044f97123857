"""API exceptions and Falcon error handlers.

Every error response uses the envelope the dashboard expects::

    {"error": {"code": "INVALID_PARAMETER", "message": "..."}}

Usage
-----
Register the handlers on the Falcon app::

    from command_center.api.errors import register_error_handlers

    register_error_handlers(app)

"""

from __future__ import annotations

import typing as typ

import falcon

from command_center.github.errors import GitHubConfigError, GitHubQueueError
from command_center.logging import get_logger, log_error

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import falcon.asgi
    from falcon.asgi import Request, Response

__all__ = [
    "ApiErrorCode",
    "InvalidParameterError",
    "MissingParameterError",
    "handle_config_error",
    "handle_github_error",
    "handle_invalid_parameter",
    "handle_missing_parameter",
    "register_error_handlers",
]

logger = get_logger(__name__)

ApiErrorCode = typ.Literal[
    "MISSING_PARAMETER",
    "INVALID_PARAMETER",
    "CONFIG_ERROR",
    "GITHUB_ERROR",
]


class MissingParameterError(Exception):
    """Raised when a required query parameter is absent or blank.

    Attributes
    ----------
    name
        Name of the missing query parameter.

    """

    def __init__(self, name: str) -> None:
        """Record the missing parameter name."""
        self.name = name
        super().__init__(f"{name.capitalize()} parameter is required")


class InvalidParameterError(Exception):
    """Raised when a query parameter holds a value outside its allowed set.

    Attributes
    ----------
    name
        Name of the rejected query parameter.
    value
        The rejected value.
    valid
        Values the parameter accepts, in display order.

    """

    def __init__(self, name: str, value: str, valid: cabc.Iterable[str]) -> None:
        """Record the rejected value and the accepted alternatives."""
        self.name = name
        self.value = value
        self.valid = tuple(valid)
        super().__init__(
            f"Invalid {name} type. Must be one of: {', '.join(self.valid)}"
        )


def _error_media(code: ApiErrorCode, message: str) -> dict[str, typ.Any]:
    return {"error": {"code": code, "message": message}}


async def handle_missing_parameter(
    _req: Request,
    resp: Response,
    ex: MissingParameterError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``MissingParameterError`` to an HTTP 400 response."""
    resp.status = falcon.HTTP_400
    resp.media = _error_media("MISSING_PARAMETER", str(ex))


async def handle_invalid_parameter(
    _req: Request,
    resp: Response,
    ex: InvalidParameterError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidParameterError`` to an HTTP 400 response."""
    resp.status = falcon.HTTP_400
    resp.media = _error_media("INVALID_PARAMETER", str(ex))


async def handle_config_error(
    _req: Request,
    resp: Response,
    ex: GitHubConfigError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``GitHubConfigError`` to an HTTP 401 response.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status and media are set.
    ex
        The configuration error; its message never contains the token.
    _params
        URI template parameters (unused).

    """
    log_error(logger, "GitHub client is not configured: %s", ex)
    resp.status = falcon.HTTP_401
    resp.media = _error_media("CONFIG_ERROR", str(ex))


async def handle_github_error(
    _req: Request,
    resp: Response,
    ex: GitHubQueueError,
    _params: dict[str, typ.Any],
) -> None:
    """Map any other queue failure to an HTTP 502 response."""
    resp.status = falcon.HTTP_502
    resp.media = _error_media(
        "GITHUB_ERROR", str(ex) or "Failed to fetch from GitHub"
    )


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Register the API error handlers on *app*.

    Falcon resolves handlers by the exception's MRO, so the configuration
    handler takes precedence over the generic GitHub handler.
    """
    app.add_error_handler(MissingParameterError, handle_missing_parameter)
    app.add_error_handler(InvalidParameterError, handle_invalid_parameter)
    app.add_error_handler(GitHubQueueError, handle_github_error)
    app.add_error_handler(GitHubConfigError, handle_config_error)
