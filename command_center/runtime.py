"""Command Center runtime entrypoint.

This module builds the ASGI application from the environment and serves it
with Granian. ``command_center.runtime:create_app`` is the stable factory
entrypoint.

Configuration is driven by environment variables:

- ``GITHUB_TOKEN``: GitHub token; without it the queue endpoints answer
  ``CONFIG_ERROR`` instead of the process failing to start
- ``COMMAND_CENTER_CACHE_TTL_S``: Queue cache lifetime (default ``60``)
- ``COMMAND_CENTER_HOST``: Bind address (default ``0.0.0.0``)
- ``COMMAND_CENTER_PORT``: Listen port (default ``8080``)
- ``COMMAND_CENTER_LOG_LEVEL``: Log level (default ``INFO``)

GitHub client settings are documented on
:meth:`command_center.github.client.GitHubSearchConfig.from_env`.

Run the service directly with ``python -m command_center.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from command_center.logging import (
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

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid COMMAND_CENTER_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def _cache_ttl_from_env() -> float:
    """Return the configured cache TTL, falling back to the default."""
    from command_center.github.cache import DEFAULT_CACHE_TTL_S

    raw = os.environ.get("COMMAND_CENTER_CACHE_TTL_S", "")
    if not raw.strip():
        return DEFAULT_CACHE_TTL_S
    try:
        ttl = float(raw)
    except ValueError:
        ttl = 0.0
    if ttl <= 0:
        log_warning(
            logger,
            "Invalid COMMAND_CENTER_CACHE_TTL_S %r, falling back to %.0f",
            raw,
            DEFAULT_CACHE_TTL_S,
        )
        return DEFAULT_CACHE_TTL_S
    return ttl


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application from the environment.

    A missing ``GITHUB_TOKEN`` or an invalid GitHub setting is logged and
    yields an app whose queue endpoints respond with HTTP 401
    ``CONFIG_ERROR`` carrying that error's message.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    from command_center.api.app import AppDependencies
    from command_center.api.app import create_app as _create_api_app
    from command_center.github import (
        GitHubConfigError,
        GitHubQueueService,
        GitHubSearchClient,
        GitHubSearchConfig,
        QueueCache,
    )

    try:
        config = GitHubSearchConfig.from_env()
    except GitHubConfigError as exc:
        log_warning(logger, "GitHub queues disabled: %s", exc)
        return _create_api_app(AppDependencies(config_error=exc))

    service = GitHubQueueService(
        GitHubSearchClient(config),
        cache=QueueCache(ttl_s=_cache_ttl_from_env()),
        repository=config.repository,
    )
    log_info(
        logger,
        "Serving GitHub queues for %s",
        config.repository.slug,
    )
    return _create_api_app(AppDependencies(queue_service=service))


def main() -> None:
    """Start the Command Center server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("COMMAND_CENTER_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("COMMAND_CENTER_PORT", "8080"))
    log_level_str = os.environ.get("COMMAND_CENTER_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid COMMAND_CENTER_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting Command Center on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "command_center.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
