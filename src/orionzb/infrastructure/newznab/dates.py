"""Epoch and RSS date helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def from_epoch(seconds: int) -> datetime:
    """UTC datetime for an Orionoid epoch timestamp (0 when unknown)."""
    return datetime.fromtimestamp(seconds or 0, tz=timezone.utc)


def format_rfc2822(dt: datetime) -> str:
    """RSS pubDate format, always rendered in UTC."""
    return dt.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S +0000")
