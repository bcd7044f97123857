"""GitHub queue errors."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class GitHubQueueError(RuntimeError):
    """Base class for failures while building a work queue from GitHub."""


class GitHubAPIError(GitHubQueueError):
    """Raised when GitHub returns an error response or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(f"GitHub API error: {status_code}", status_code=status_code)

    @classmethod
    def timeout(cls) -> GitHubAPIError:
        """Return an error for a request that exceeded the client timeout."""
        return cls("GitHub API request timed out")

    @classmethod
    def network_error(cls, detail: str) -> GitHubAPIError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"GitHub API network error: {detail}")


class GitHubRateLimitError(GitHubAPIError):
    """Raised when GitHub rejects a search with 403 or 429.

    Attributes
    ----------
    reset_at
        ISO-8601 instant at which the rate limit window resets, when GitHub
        supplied one.

    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        reset_at: str | None = None,
    ) -> None:
        """Initialise with the rejecting status and optional reset instant."""
        self.reset_at = reset_at
        super().__init__(message, status_code=status_code)

    @classmethod
    def exceeded(
        cls, status_code: int, *, reset_at: str | None = None
    ) -> GitHubRateLimitError:
        """Return an error whose message carries the reset hint when known."""
        msg = "GitHub rate limit exceeded"
        if reset_at is not None:
            msg = f"{msg}. Resets at {reset_at}"
        return cls(msg, status_code=status_code, reset_at=reset_at)


class GitHubResponseShapeError(GitHubQueueError):
    """Raised when a GitHub search response cannot be decoded."""

    @classmethod
    def invalid(cls, detail: str) -> GitHubResponseShapeError:
        """Return an error describing why the payload was rejected."""
        return cls(f"GitHub search response is malformed: {detail}")


class GitHubConfigError(GitHubQueueError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("GitHub token not configured")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_number(cls, env_var: str, raw: str) -> GitHubConfigError:
        """Return an error for a non-numeric or non-positive setting."""
        return cls(f"{env_var} must be a positive number, got: {raw!r}")


class UnknownQueueError(GitHubQueueError, ValueError):
    """Raised when a queue identifier is outside the known set."""

    def __init__(self, queue: str, valid: cabc.Iterable[str]) -> None:
        """Record the rejected identifier and the accepted values."""
        self.queue = queue
        self.valid = tuple(valid)
        super().__init__(f"Unknown queue type: {queue}")


class NormalizationError(GitHubQueueError):
    """Raised when a search item cannot be turned into a card."""

    @classmethod
    def for_item(cls, number: object, detail: str) -> NormalizationError:
        """Return an error naming the offending item."""
        return cls(f"Cannot normalise GitHub item #{number}: {detail}")
