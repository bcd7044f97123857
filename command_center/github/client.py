"""GitHub issue search client used to fill work queues."""

from __future__ import annotations

import dataclasses
import os
import re
import typing as typ

import httpx
import msgspec

from command_center.common.time import from_epoch_seconds, isoformat_z
from command_center.logging import get_logger, log_debug

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
)
from .models import SearchResponse
from .observability import QueueEventLogger
from .queues import DEFAULT_OWNER, DEFAULT_REPO, RepositoryRef, encode_search_query

if typ.TYPE_CHECKING:
    from .models import SearchIssue

_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "dfg-app"

logger = get_logger(__name__)

PAGE_SIZE = 50

_HTTP_RATE_LIMIT_STATUSES = frozenset({403, 429})
_HTTP_SUCCESS_MIN = 200
_HTTP_SUCCESS_MAX = 299

# Leading epoch digits; trailing text such as ".0" is ignored.
_RESET_DIGITS = re.compile(r"\s*\d+")


def _read_positive_float(env_var: str, default: float) -> float:
    """Read a positive float env var, falling back to a default."""
    raw = os.environ.get(env_var, "")
    if not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise GitHubConfigError.invalid_number(env_var, raw) from exc
    if value <= 0:
        raise GitHubConfigError.invalid_number(env_var, raw)
    return value


def _read_str(env_var: str, default: str) -> str:
    return os.environ.get(env_var, "").strip() or default


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubSearchConfig:
    """Configuration for the GitHub issue search client.

    Attributes
    ----------
    token
        Bearer token with read access to the repository.
    repository
        The single repository searched for queue items.
    api_url
        Base URL of the GitHub REST API.
    timeout_s
        Request timeout in seconds.
    user_agent
        Value sent in the ``User-Agent`` header.

    """

    token: str = dataclasses.field(repr=False)
    repository: RepositoryRef = dataclasses.field(default_factory=RepositoryRef)
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT

    @property
    def search_endpoint(self) -> str:
        """Return the issue search endpoint URL."""
        return f"{self.api_url.rstrip('/')}/search/issues"

    @classmethod
    def from_env(cls) -> GitHubSearchConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``GITHUB_TOKEN``: required bearer token.
        - ``COMMAND_CENTER_GITHUB_OWNER`` / ``COMMAND_CENTER_GITHUB_REPO``:
          repository to search.
        - ``COMMAND_CENTER_GITHUB_API_URL``: REST API base URL.
        - ``COMMAND_CENTER_GITHUB_TIMEOUT_S``: positive request timeout.

        Raises
        ------
        GitHubConfigError
            If the token is missing or the timeout is not a positive number.

        """
        token = os.environ.get("GITHUB_TOKEN", "").strip()
        if not token:
            raise GitHubConfigError.missing_token()
        return cls(
            token=token,
            repository=RepositoryRef(
                owner=_read_str("COMMAND_CENTER_GITHUB_OWNER", DEFAULT_OWNER),
                name=_read_str("COMMAND_CENTER_GITHUB_REPO", DEFAULT_REPO),
            ),
            api_url=_read_str("COMMAND_CENTER_GITHUB_API_URL", _DEFAULT_API_URL),
            timeout_s=_read_positive_float(
                "COMMAND_CENTER_GITHUB_TIMEOUT_S", _DEFAULT_TIMEOUT_S
            ),
        )


def _reset_time(response: httpx.Response) -> str | None:
    """Return the ISO instant from ``X-RateLimit-Reset``, if usable."""
    raw = response.headers.get("X-RateLimit-Reset")
    if raw is None:
        return None
    match = _RESET_DIGITS.match(raw)
    if match is None:
        return None
    try:
        reset_at = from_epoch_seconds(int(match.group(0)))
    except (ValueError, OverflowError, OSError):
        return None
    return isoformat_z(reset_at)


class GitHubSearchClient:
    """Client for GitHub's ``GET /search/issues`` endpoint."""

    def __init__(
        self,
        config: GitHubSearchConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        event_logger: QueueEventLogger | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._events = event_logger or QueueEventLogger()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    @property
    def config(self) -> GitHubSearchConfig:
        """Read-only access to the client configuration."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self._config.user_agent,
        }

    def search_url(self, query: str) -> str:
        """Return the request URL for an unencoded search *query*."""
        # Appended verbatim: an encoder would escape the "+" separators.
        return (
            f"{self._config.search_endpoint}?q={encode_search_query(query)}"
            f"&sort=updated&order=desc&per_page={PAGE_SIZE}"
        )

    async def search_issues(self, query: str) -> list[SearchIssue]:
        """Run one search and return its items in GitHub's order.

        Raises
        ------
        GitHubRateLimitError
            If GitHub answers 403 or 429.
        GitHubAPIError
            For any other non-2xx answer, or when GitHub cannot be reached.
        GitHubResponseShapeError
            If a 2xx body is not a valid search response.

        """
        log_debug(logger, "Searching GitHub issues: %s", query)
        try:
            response = await self._client.get(
                self.search_url(query), headers=self._headers()
            )
        except httpx.TimeoutException as exc:
            raise GitHubAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise GitHubAPIError.network_error(type(exc).__name__) from exc

        self._check_response(response)
        try:
            payload = msgspec.json.decode(response.content, type=SearchResponse)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.invalid(str(exc)) from exc
        return payload.items

    def _check_response(self, response: httpx.Response) -> None:
        status = response.status_code
        if _HTTP_SUCCESS_MIN <= status <= _HTTP_SUCCESS_MAX:
            return

        self._events.log_response_error(status, response.text)
        if status in _HTTP_RATE_LIMIT_STATUSES:
            raise GitHubRateLimitError.exceeded(status, reset_at=_reset_time(response))
        raise GitHubAPIError.http_error(status)


__all__ = ["PAGE_SIZE", "GitHubSearchConfig", "GitHubSearchClient"]
