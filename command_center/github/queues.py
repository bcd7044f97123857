"""Work queue identifiers and their GitHub search queries.

Each queue is a fixed set of labels that an open issue or pull request must
carry. Queries use GitHub's search syntax, where ``+`` separates qualifiers
and ``:`` binds a qualifier to its value, so only the quotes around label
values are percent-encoded.

Usage
-----
>>> build_search_query("dev-queue")
'repo:durganfieldguide/dfg-console+state:open+label:"status:ready"+label:"needs:dev"'
>>> encode_search_query('label:"needs:qa"')
'label:%22needs:qa%22'

"""

from __future__ import annotations

import dataclasses as dc
import enum
import types

from .errors import UnknownQueueError

DEFAULT_OWNER = "durganfieldguide"
DEFAULT_REPO = "dfg-console"


class QueueName(enum.StrEnum):
    """Identifiers of the dashboard work queues."""

    NEEDS_QA = "needs-qa"
    NEEDS_PM = "needs-pm"
    DEV_QUEUE = "dev-queue"
    READY_TO_MERGE = "ready-to-merge"
    IN_FLIGHT = "in-flight"


class PromptType(enum.StrEnum):
    """Copyable prompt variants offered for a card."""

    QA = "qa"
    PM = "pm"
    AGENT_BRIEF = "agent-brief"
    MERGE = "merge"


VALID_QUEUES: tuple[str, ...] = tuple(queue.value for queue in QueueName)

# All labels listed for a queue are required (AND semantics).
QUEUE_LABELS: types.MappingProxyType[QueueName, tuple[str, ...]] = (
    types.MappingProxyType(
        {
            QueueName.NEEDS_QA: ("needs:qa",),
            QueueName.NEEDS_PM: ("needs:pm",),
            QueueName.DEV_QUEUE: ("status:ready", "needs:dev"),
            QueueName.READY_TO_MERGE: ("status:verified",),
            QueueName.IN_FLIGHT: ("status:in-progress",),
        }
    )
)


@dc.dataclass(frozen=True, slots=True)
class RepositoryRef:
    """The single repository whose issues feed the dashboard."""

    owner: str = DEFAULT_OWNER
    name: str = DEFAULT_REPO

    @property
    def slug(self) -> str:
        """Return the GitHub-style owner/name identifier."""
        return f"{self.owner}/{self.name}"


def parse_queue(value: str | QueueName) -> QueueName:
    """Return the ``QueueName`` for *value*.

    Raises
    ------
    UnknownQueueError
        If *value* is not one of the known queue identifiers.

    """
    try:
        return QueueName(value)
    except ValueError as exc:
        raise UnknownQueueError(str(value), VALID_QUEUES) from exc


def build_search_query(
    queue: str | QueueName,
    *,
    repository: RepositoryRef | None = None,
) -> str:
    """Build the unencoded search query selecting open items for *queue*."""
    repo = repository or RepositoryRef()
    labels = QUEUE_LABELS[parse_queue(queue)]
    qualifiers = [f"repo:{repo.slug}", "state:open"]
    qualifiers.extend(f'label:"{label}"' for label in labels)
    return "+".join(qualifiers)


def encode_search_query(query: str) -> str:
    """Percent-encode the quotes in *query*, leaving ``+`` and ``:`` literal."""
    return query.replace('"', "%22")


__all__ = [
    "DEFAULT_OWNER",
    "DEFAULT_REPO",
    "QUEUE_LABELS",
    "VALID_QUEUES",
    "PromptType",
    "QueueName",
    "RepositoryRef",
    "build_search_query",
    "encode_search_query",
    "parse_queue",
]
