"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Timestamp suitable for directory and file names (e.g. 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
