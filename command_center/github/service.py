"""Queue orchestration: cache lookup, GitHub search and normalisation."""

from __future__ import annotations

import typing as typ

from command_center.common.time import isoformat_z, utcnow

from .cache import QueueCache, queue_cache_key
from .errors import GitHubQueueError
from .models import AllQueues, QueueResponse, QueueSnapshot
from .normalize import normalize_issues
from .observability import QueueEventLogger
from .queues import QueueName, RepositoryRef, build_search_query, parse_queue

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from .models import SearchIssue, WorkQueueCard


class IssueSearchClient(typ.Protocol):
    """Interface for running a GitHub issue search."""

    async def search_issues(self, query: str) -> list[SearchIssue]:
        """Return raw search items for an unencoded query."""
        ...

    async def aclose(self) -> None:
        """Release any HTTP resources."""
        ...


class GitHubQueueService:
    """Serve work queues from the cache, fetching from GitHub on a miss.

    Parameters
    ----------
    search_client
        Client that executes issue searches.
    cache
        Snapshot cache shared by every request in the process.
    repository
        Repository whose issues feed the queues.
    event_logger
        Structured event logger; defaults to the module logger.
    now
        Clock for ``fetchedAt`` timestamps; injectable for tests.

    """

    def __init__(  # noqa: PLR0913 - collaborators are injected explicitly
        self,
        search_client: IssueSearchClient,
        *,
        cache: QueueCache | None = None,
        repository: RepositoryRef | None = None,
        event_logger: QueueEventLogger | None = None,
        now: cabc.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Wire the service to its collaborators."""
        self._search_client = search_client
        self._cache = cache if cache is not None else QueueCache()
        self._repository = repository or RepositoryRef()
        self._events = event_logger or QueueEventLogger()
        self._now = now

    @property
    def cache(self) -> QueueCache:
        """Return the snapshot cache."""
        return self._cache

    async def aclose(self) -> None:
        """Close the search client."""
        await self._search_client.aclose()

    async def fetch_queue(self, queue: str | QueueName) -> QueueResponse:
        """Return the cards for *queue*, from the cache when still fresh.

        Raises
        ------
        UnknownQueueError
            If *queue* is not a known queue identifier.
        GitHubQueueError
            If the search fails or an item cannot be normalised. Nothing is
            cached in that case.

        """
        name = parse_queue(queue)
        key = queue_cache_key(name)

        snapshot = self._cache.get(key)
        if snapshot is not None:
            self._events.log_cache_hit(name, len(snapshot.cards))
            return QueueResponse(
                queue=name,
                cards=snapshot.cards,
                cached=True,
                fetched_at=snapshot.fetched_at,
            )

        started = self._now()
        self._events.log_fetch_started(name)
        try:
            cards = await self._fetch_cards(name)
        except GitHubQueueError as exc:
            self._events.log_fetch_failed(name, exc)
            raise

        finished = self._now()
        snapshot = QueueSnapshot(cards=cards, fetched_at=isoformat_z(finished))
        self._cache.put(key, snapshot)
        self._events.log_fetch_completed(name, len(cards), finished - started)
        return QueueResponse(
            queue=name,
            cards=snapshot.cards,
            cached=False,
            fetched_at=snapshot.fetched_at,
        )

    async def fetch_all_queues(self) -> AllQueues:
        """Return the cards of every queue, one queue at a time."""
        cards: dict[QueueName, tuple[WorkQueueCard, ...]] = {}
        for name in QueueName:
            cards[name] = (await self.fetch_queue(name)).cards
        return AllQueues(
            needs_qa=cards[QueueName.NEEDS_QA],
            needs_pm=cards[QueueName.NEEDS_PM],
            dev_queue=cards[QueueName.DEV_QUEUE],
            ready_to_merge=cards[QueueName.READY_TO_MERGE],
            in_flight=cards[QueueName.IN_FLIGHT],
        )

    async def _fetch_cards(self, name: QueueName) -> tuple[WorkQueueCard, ...]:
        query = build_search_query(name, repository=self._repository)
        items = await self._search_client.search_issues(query)
        return normalize_issues(items)


__all__ = ["GitHubQueueService", "IssueSearchClient"]
