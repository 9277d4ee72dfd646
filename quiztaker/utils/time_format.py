"""Helpers for presenting countdown values."""

from __future__ import annotations


def format_clock(seconds: int) -> str:
    """Render a number of seconds as ``MM:SS`` (minutes are not wrapped at 60)."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
