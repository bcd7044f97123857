"""Unit tests for the GitHub issue search client."""

from __future__ import annotations

import os
from unittest import mock

import httpx
import pytest

from command_center.github import GitHubSearchClient, GitHubSearchConfig
from command_center.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
)
from command_center.github.queues import RepositoryRef
from tests.helpers.github_search import (
    TEST_API_URL,
    TEST_TOKEN,
    RecordedResponse,
    make_item,
    make_search_client,
    search_payload,
)

_QUERY = 'repo:octo/reef+state:open+label:"needs:qa"'
# 2024-01-01T00:00:00Z
_RESET_EPOCH = 1704067200


@pytest.mark.asyncio
async def test_search_issues_request_shape() -> None:
    """The request carries the encoded query, paging and required headers."""
    client, http_client, calls = make_search_client(
        [RecordedResponse(json=search_payload([]))]
    )
    try:
        await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    assert len(calls) == 1
    request = calls[0]
    assert request.method == "GET"
    assert str(request.url) == (
        f"{TEST_API_URL}/search/issues"
        "?q=repo:octo/reef+state:open+label:%22needs:qa%22"
        "&sort=updated&order=desc&per_page=50"
    )
    assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
    assert request.headers["Accept"] == "application/vnd.github+json"
    assert request.headers["User-Agent"] == "dfg-app"


@pytest.mark.asyncio
async def test_search_issues_returns_items_in_order() -> None:
    """Raw items are decoded and returned in provider order."""
    payload = search_payload([make_item(2, is_pr=True), make_item(1, body=None)])
    client, http_client, _ = make_search_client([RecordedResponse(json=payload)])
    try:
        items = await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    assert [item.number for item in items] == [2, 1]
    assert items[0].pull_request is not None
    assert items[1].pull_request is None
    assert items[1].body is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [403, 429])
async def test_rate_limit_with_reset_header(status: int) -> None:
    """403 and 429 raise a rate-limit error naming the reset instant."""
    client, http_client, _ = make_search_client(
        [
            RecordedResponse(
                status_code=status,
                json={"message": "API rate limit exceeded"},
                headers={"X-RateLimit-Reset": str(_RESET_EPOCH)},
            )
        ]
    )
    try:
        with pytest.raises(GitHubRateLimitError) as exc_info:
            await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    error = exc_info.value
    assert error.status_code == status
    assert error.reset_at == "2024-01-01T00:00:00.000Z"
    assert str(error) == (
        "GitHub rate limit exceeded. Resets at 2024-01-01T00:00:00.000Z"
    )


@pytest.mark.asyncio
async def test_rate_limit_reset_with_fractional_seconds() -> None:
    """A fractional reset header still yields the reset instant."""
    client, http_client, _ = make_search_client(
        [
            RecordedResponse(
                status_code=403,
                text="rate limited",
                headers={"X-RateLimit-Reset": f"{_RESET_EPOCH}.0"},
            )
        ]
    )
    try:
        with pytest.raises(GitHubRateLimitError) as exc_info:
            await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    assert exc_info.value.reset_at == "2024-01-01T00:00:00.000Z"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"X-RateLimit-Reset": "soon"}])
async def test_rate_limit_without_usable_reset(headers: dict[str, str]) -> None:
    """Missing or non-numeric reset headers omit the hint."""
    client, http_client, _ = make_search_client(
        [RecordedResponse(status_code=429, text="slow down", headers=headers)]
    )
    try:
        with pytest.raises(GitHubRateLimitError) as exc_info:
            await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    assert str(exc_info.value) == "GitHub rate limit exceeded"
    assert exc_info.value.reset_at is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 422, 500, 503])
async def test_other_errors_carry_status(status: int) -> None:
    """Other non-2xx statuses raise GitHubAPIError without the body."""
    client, http_client, _ = make_search_client(
        [RecordedResponse(status_code=status, text="secret diagnostic body")]
    )
    try:
        with pytest.raises(GitHubAPIError) as exc_info:
            await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    assert not isinstance(exc_info.value, GitHubRateLimitError)
    assert exc_info.value.status_code == status
    assert str(exc_info.value) == f"GitHub API error: {status}"
    assert "diagnostic" not in str(exc_info.value)


@pytest.mark.asyncio
async def test_malformed_success_body() -> None:
    """A 2xx body without items raises a response shape error."""
    client, http_client, _ = make_search_client(
        [RecordedResponse(json={"total_count": 1})]
    )
    try:
        with pytest.raises(GitHubResponseShapeError):
            await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped() -> None:
    """Connection failures surface as GitHubAPIError without a status."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    client = GitHubSearchClient(
        GitHubSearchConfig(token=TEST_TOKEN), http_client=http_client
    )
    try:
        with pytest.raises(GitHubAPIError) as exc_info:
            await client.search_issues(_QUERY)
    finally:
        await http_client.aclose()

    assert exc_info.value.status_code is None
    assert TEST_TOKEN not in str(exc_info.value)


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open() -> None:
    """aclose only closes HTTP clients the search client created."""
    client, http_client, _ = make_search_client([])
    await client.aclose()

    assert http_client.is_closed is False
    await http_client.aclose()


def test_empty_token_is_rejected() -> None:
    """A blank token fails at construction."""
    with pytest.raises(GitHubConfigError):
        GitHubSearchClient(GitHubSearchConfig(token="   "))


def test_config_repr_hides_token() -> None:
    """The token never appears in the config repr."""
    assert TEST_TOKEN not in repr(GitHubSearchConfig(token=TEST_TOKEN))


class TestGitHubSearchConfigFromEnv:
    """Tests for configuration loading from environment variables."""

    def test_requires_token(self) -> None:
        """A missing GITHUB_TOKEN raises GitHubConfigError."""
        with mock.patch.dict(os.environ, {}, clear=True):
            with pytest.raises(GitHubConfigError) as exc_info:
                GitHubSearchConfig.from_env()

        assert str(exc_info.value) == "GitHub token not configured"

    def test_defaults(self) -> None:
        """Only the token is required."""
        with mock.patch.dict(os.environ, {"GITHUB_TOKEN": "abc"}, clear=True):
            config = GitHubSearchConfig.from_env()

        assert config.token == "abc"
        assert config.repository == RepositoryRef("durganfieldguide", "dfg-console")
        assert config.search_endpoint == "https://api.github.com/search/issues"
        assert config.timeout_s == 20.0

    def test_custom_values(self) -> None:
        """Repository, API URL and timeout can be overridden."""
        env = {
            "GITHUB_TOKEN": "abc",
            "COMMAND_CENTER_GITHUB_OWNER": "octo",
            "COMMAND_CENTER_GITHUB_REPO": "reef",
            "COMMAND_CENTER_GITHUB_API_URL": "https://ghe.example.test/api/v3/",
            "COMMAND_CENTER_GITHUB_TIMEOUT_S": "5",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = GitHubSearchConfig.from_env()

        assert config.repository.slug == "octo/reef"
        assert config.search_endpoint == (
            "https://ghe.example.test/api/v3/search/issues"
        )
        assert config.timeout_s == 5.0

    @pytest.mark.parametrize("raw", ["fast", "0", "-3"])
    def test_invalid_timeout(self, raw: str) -> None:
        """Non-positive or non-numeric timeouts are rejected."""
        env = {"GITHUB_TOKEN": "abc", "COMMAND_CENTER_GITHUB_TIMEOUT_S": raw}
        with mock.patch.dict(os.environ, env, clear=True):
            with pytest.raises(GitHubConfigError, match="TIMEOUT_S"):
                GitHubSearchConfig.from_env()
