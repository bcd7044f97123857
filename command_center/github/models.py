"""Typed models for GitHub search results and dashboard cards.

Raw models mirror GitHub's REST search payload (snake_case, unknown fields
ignored). Card and response models are encoded for the dashboard with
camelCase keys; optional fields left as ``None`` are omitted from the
encoded JSON rather than sent as ``null``.
"""

from __future__ import annotations

import typing as typ

import msgspec

from .queues import QueueName  # noqa: TC001 - msgspec resolves annotations at runtime

CardType = typ.Literal["issue", "pr"]
Verdict = typ.Literal["PASS", "FAIL", "BLOCKED"]
QAProvider = typ.Literal["anthropic", "openai"]


class Label(msgspec.Struct, kw_only=True, frozen=True, omit_defaults=True):
    """A GitHub label as shown on a card.

    Attributes
    ----------
    name : str
        Label name, e.g. ``status:ready``.
    color : str
        Hex colour without the leading ``#``.
    description : str, optional
        Free-text label description.

    """

    name: str
    color: str
    description: str | None = None


class PullRequestMarker(msgspec.Struct, kw_only=True, frozen=True):
    """Marker GitHub attaches to search items that are pull requests."""

    url: str | None = None


class SearchIssue(msgspec.Struct, kw_only=True, frozen=True):
    """One raw item from ``GET /search/issues``."""

    number: int
    title: str
    html_url: str
    updated_at: str
    body: str | None = None
    labels: list[Label] = msgspec.field(default_factory=list)
    pull_request: PullRequestMarker | None = None


class SearchResponse(msgspec.Struct, kw_only=True, frozen=True):
    """Envelope returned by ``GET /search/issues``."""

    items: list[SearchIssue]
    total_count: int = 0
    incomplete_results: bool = False


class WorkQueueCard(
    msgspec.Struct,
    kw_only=True,
    frozen=True,
    rename="camel",
    omit_defaults=True,
):
    """Normalised representation of one issue or pull request in a queue.

    The orchestrator fields at the end of the struct are reserved for a later
    integration and are never populated by the normaliser.
    """

    kind: CardType = msgspec.field(name="type")
    number: int
    title: str
    url: str
    body: str
    labels: tuple[Label, ...]
    updated_at: str
    status_labels: tuple[str, ...]
    needs_labels: tuple[str, ...]
    has_agent_brief: bool
    preview_url: str | None = None
    qa_grade: str | None = None

    last_event_type: str | None = None
    last_event_timestamp: str | None = None
    overall_verdict: Verdict | None = None
    provenance_verified: bool | None = None
    qa_provider: QAProvider | None = None
    qa_model: str | None = None
    qa_temperature: float | None = None


class QueueSnapshot(msgspec.Struct, kw_only=True, frozen=True):
    """Cached result of one successful queue fetch."""

    cards: tuple[WorkQueueCard, ...]
    fetched_at: str


class QueueResponse(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Payload returned for a single queue request."""

    queue: QueueName
    cards: tuple[WorkQueueCard, ...]
    cached: bool
    fetched_at: str


class AllQueues(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Cards for every queue, keyed the way the dashboard lays them out."""

    needs_qa: tuple[WorkQueueCard, ...]
    needs_pm: tuple[WorkQueueCard, ...]
    dev_queue: tuple[WorkQueueCard, ...]
    ready_to_merge: tuple[WorkQueueCard, ...]
    in_flight: tuple[WorkQueueCard, ...]


class PromptContext(
    msgspec.Struct,
    kw_only=True,
    frozen=True,
    rename="camel",
    omit_defaults=True,
):
    """The subset of a card the UI needs to build a copyable prompt."""

    kind: CardType = msgspec.field(name="type")
    number: int
    title: str
    url: str
    body: str
    labels: tuple[Label, ...]
    preview_url: str | None = None

    @classmethod
    def from_card(cls, card: WorkQueueCard) -> PromptContext:
        """Build the prompt context for *card*."""
        return cls(
            kind=card.kind,
            number=card.number,
            title=card.title,
            url=card.url,
            body=card.body,
            labels=card.labels,
            preview_url=card.preview_url,
        )


__all__ = [
    "AllQueues",
    "CardType",
    "Label",
    "PromptContext",
    "PullRequestMarker",
    "QueueResponse",
    "QueueSnapshot",
    "SearchIssue",
    "SearchResponse",
    "WorkQueueCard",
]
