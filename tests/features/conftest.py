"""Shared fixtures for BDD feature tests."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host GitHub settings out of feature scenarios."""
    for name in (
        "GITHUB_TOKEN",
        "COMMAND_CENTER_GITHUB_OWNER",
        "COMMAND_CENTER_GITHUB_REPO",
        "COMMAND_CENTER_GITHUB_API_URL",
        "COMMAND_CENTER_GITHUB_TIMEOUT_S",
        "COMMAND_CENTER_CACHE_TTL_S",
    ):
        monkeypatch.delenv(name, raising=False)
