"""GitHub work queue search, normalisation and caching."""

from __future__ import annotations

from .cache import QueueCache, queue_cache_key
from .client import GitHubSearchClient, GitHubSearchConfig
from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubQueueError,
    GitHubRateLimitError,
    GitHubResponseShapeError,
    NormalizationError,
    UnknownQueueError,
)
from .models import (
    AllQueues,
    Label,
    PromptContext,
    QueueResponse,
    QueueSnapshot,
    SearchIssue,
    WorkQueueCard,
)
from .normalize import normalize_issue, normalize_issues
from .observability import (
    ErrorCategory,
    QueueEventLogger,
    QueueEventType,
    categorize_error,
)
from .queues import (
    VALID_QUEUES,
    PromptType,
    QueueName,
    RepositoryRef,
    build_search_query,
    encode_search_query,
)
from .service import GitHubQueueService, IssueSearchClient

__all__ = [
    "VALID_QUEUES",
    "AllQueues",
    "ErrorCategory",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubQueueError",
    "GitHubQueueService",
    "GitHubRateLimitError",
    "GitHubResponseShapeError",
    "GitHubSearchClient",
    "GitHubSearchConfig",
    "IssueSearchClient",
    "Label",
    "NormalizationError",
    "PromptContext",
    "PromptType",
    "QueueCache",
    "QueueEventLogger",
    "QueueEventType",
    "QueueName",
    "QueueResponse",
    "QueueSnapshot",
    "RepositoryRef",
    "SearchIssue",
    "UnknownQueueError",
    "WorkQueueCard",
    "build_search_query",
    "categorize_error",
    "encode_search_query",
    "normalize_issue",
    "normalize_issues",
    "queue_cache_key",
]
