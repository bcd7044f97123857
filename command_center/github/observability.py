"""Structured log events for queue fetches.

Events are single pre-formatted log lines of the form
``[event.type] key=value ...`` so log aggregators can parse them without a
structured handler.
"""

from __future__ import annotations

import enum
import typing as typ

from command_center.logging import get_logger, log_error, log_info, log_warning

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
    NormalizationError,
)

if typ.TYPE_CHECKING:
    import datetime as dt

    from command_center.logging import SupportsLog

_HTTP_SERVER_ERROR_THRESHOLD = 500
_BODY_PREVIEW_LIMIT = 500


class QueueEventType(enum.StrEnum):
    """Structured log event types for queue observability."""

    CACHE_HIT = "queue.cache.hit"
    FETCH_STARTED = "queue.fetch.started"
    FETCH_COMPLETED = "queue.fetch.completed"
    FETCH_FAILED = "queue.fetch.failed"
    RESPONSE_ERROR = "github.response.error"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in alerts."""

    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubRateLimitError, ErrorCategory.RATE_LIMITED),
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (NormalizationError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for alerting purposes."""
    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    if isinstance(exc, GitHubAPIError):
        # No status code means the request never completed (timeout, DNS).
        if (
            exc.status_code is None
            or exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD
        ):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    return ErrorCategory.UNKNOWN


def _preview(text: str) -> str:
    if len(text) > _BODY_PREVIEW_LIMIT:
        return text[:_BODY_PREVIEW_LIMIT] + "..."
    return text


class QueueEventLogger:
    """Emit structured queue events through femtologging."""

    def __init__(self, logger: SupportsLog | None = None) -> None:
        """Use *logger*, or this module's logger when omitted."""
        self._logger = logger if logger is not None else get_logger(__name__)

    def log_cache_hit(self, queue: str, card_count: int) -> None:
        """Log a queue served from the cache."""
        log_info(
            self._logger,
            "[%s] queue=%s card_count=%d",
            QueueEventType.CACHE_HIT,
            queue,
            card_count,
        )

    def log_fetch_started(self, queue: str) -> None:
        """Log the start of a fetch from GitHub."""
        log_info(
            self._logger,
            "[%s] queue=%s",
            QueueEventType.FETCH_STARTED,
            queue,
        )

    def log_fetch_completed(
        self, queue: str, card_count: int, duration: dt.timedelta
    ) -> None:
        """Log a successful fetch with its card count and duration."""
        log_info(
            self._logger,
            "[%s] queue=%s card_count=%d duration_seconds=%.3f",
            QueueEventType.FETCH_COMPLETED,
            queue,
            card_count,
            duration.total_seconds(),
        )

    def log_fetch_failed(self, queue: str, error: BaseException) -> None:
        """Log a failed fetch with its error category."""
        status_code = getattr(error, "status_code", None)
        log_error(
            self._logger,
            "[%s] queue=%s status_code=%s error_category=%s error_type=%s "
            "message=%s",
            QueueEventType.FETCH_FAILED,
            queue,
            status_code,
            categorize_error(error),
            type(error).__name__,
            str(error),
        )

    def log_response_error(self, status_code: int, body: str) -> None:
        """Log an error response body from GitHub for diagnosis."""
        log_warning(
            self._logger,
            "[%s] status_code=%d body=%s",
            QueueEventType.RESPONSE_ERROR,
            status_code,
            _preview(body),
        )


__all__ = [
    "ErrorCategory",
    "QueueEventLogger",
    "QueueEventType",
    "categorize_error",
]
