"""Command Center: GitHub work queues for the development dashboard."""

from __future__ import annotations

__version__ = "0.1.0"
