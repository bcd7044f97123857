"""Conversion of raw GitHub search items into work queue cards."""

from __future__ import annotations

import typing as typ

from .derivation import (
    NEEDS_PREFIX,
    QA_GRADE_PREFIX,
    STATUS_PREFIX,
    extract_preview_url,
    first_label_value,
    has_agent_brief,
    labels_with_prefix,
)
from .errors import NormalizationError
from .models import Label, WorkQueueCard

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import SearchIssue


def normalize_issue(item: SearchIssue) -> WorkQueueCard:
    """Build the card for one search item.

    The result depends only on *item*: normalising the same item twice
    yields equal cards. A missing body becomes ``""`` and every signal not
    found in the labels or body is left as ``None``.
    """
    labels = tuple(
        Label(name=label.name, color=label.color, description=label.description)
        for label in item.labels
    )
    names = [label.name for label in labels]
    body = item.body or ""

    return WorkQueueCard(
        kind="pr" if item.pull_request is not None else "issue",
        number=item.number,
        title=item.title,
        url=item.html_url,
        body=body,
        labels=labels,
        updated_at=item.updated_at,
        status_labels=labels_with_prefix(names, STATUS_PREFIX),
        needs_labels=labels_with_prefix(names, NEEDS_PREFIX),
        qa_grade=first_label_value(names, QA_GRADE_PREFIX),
        has_agent_brief=has_agent_brief(body),
        preview_url=extract_preview_url(body),
    )


def normalize_issues(items: cabc.Iterable[SearchIssue]) -> tuple[WorkQueueCard, ...]:
    """Normalise *items* in order, failing as a whole if any item fails.

    Raises
    ------
    NormalizationError
        If a single item cannot be normalised; no partial list is returned.

    """
    cards: list[WorkQueueCard] = []
    for item in items:
        try:
            cards.append(normalize_issue(item))
        except (TypeError, ValueError, AttributeError) as exc:
            raise NormalizationError.for_item(
                getattr(item, "number", "?"), str(exc)
            ) from exc
    return tuple(cards)


__all__ = ["normalize_issue", "normalize_issues"]
