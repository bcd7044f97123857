"""Rules deriving card signals from labels and issue bodies.

Body rules are regular expressions applied with ``re.search``; the first
match in the body wins. Label rules are case-sensitive prefix matches that
keep the source label order.
"""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

STATUS_PREFIX = "status:"
NEEDS_PREFIX = "needs:"
QA_GRADE_PREFIX = "qa-grade:"

# Matches "Preview: <url>", "Preview URL: <url>", "Deploy: <url>" and
# "deploy url:<url>". The URL stops at whitespace or a closing parenthesis so
# markdown links like "(Preview: https://x)" do not capture the ")".
PREVIEW_URL_PATTERN = re.compile(
    r"(?:preview|deploy)(?:\s+url)?:\s*(https?://[^\s)]+)",
    re.IGNORECASE,
)

# A "## Agent Brief" heading followed by everything up to the next "##"
# heading. "\Z" rather than "$" so only the true end of the body closes the
# final section.
AGENT_BRIEF_PATTERN = re.compile(
    r"##\s*Agent Brief\s*\n(.*?)(?=\n##|\Z)",
    re.IGNORECASE | re.DOTALL,
)

# Shorter sections are placeholders ("TBD", "n/a") rather than real briefs.
MIN_AGENT_BRIEF_LENGTH = 10


def extract_preview_url(body: str) -> str | None:
    """Return the first preview or deploy URL in *body*, if any."""
    match = PREVIEW_URL_PATTERN.search(body)
    return match.group(1) if match else None


def extract_agent_brief(body: str) -> str | None:
    """Return the stripped text of the Agent Brief section, if substantive."""
    match = AGENT_BRIEF_PATTERN.search(body)
    if match is None:
        return None
    brief = match.group(1).strip()
    if len(brief) < MIN_AGENT_BRIEF_LENGTH:
        return None
    return brief


def has_agent_brief(body: str) -> bool:
    """Return True when *body* carries a substantive Agent Brief section."""
    return extract_agent_brief(body) is not None


def labels_with_prefix(names: cabc.Iterable[str], prefix: str) -> tuple[str, ...]:
    """Return the label names starting with *prefix*, in source order."""
    return tuple(name for name in names if name.startswith(prefix))


def first_label_value(names: cabc.Iterable[str], prefix: str) -> str | None:
    """Return the value after *prefix* on the first matching label."""
    for name in names:
        if name.startswith(prefix):
            return name.removeprefix(prefix)
    return None


__all__ = [
    "AGENT_BRIEF_PATTERN",
    "MIN_AGENT_BRIEF_LENGTH",
    "NEEDS_PREFIX",
    "PREVIEW_URL_PATTERN",
    "QA_GRADE_PREFIX",
    "STATUS_PREFIX",
    "extract_agent_brief",
    "extract_preview_url",
    "first_label_value",
    "has_agent_brief",
    "labels_with_prefix",
]
