"""Text formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def format_timestamp(timestamp: str, now: Optional[datetime] = None) -> str:
    try:
        dt = datetime.fromisoformat(timestamp)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        now = now or datetime.now(timezone.utc)
        diff = now - dt

        if diff.days < 0:
            return "Just now"
        if diff.days == 0:
            if diff.seconds < 60:
                return "Just now"
            elif diff.seconds < 3600:
                minutes = diff.seconds // 60
                return f"{minutes}m ago"
            else:
                hours = diff.seconds // 3600
                return f"{hours}h ago"
        elif diff.days == 1:
            return "Yesterday"
        elif diff.days < 7:
            return f"{diff.days}d ago"
        else:
            return dt.astimezone().strftime("%b %d")
    except (ValueError, TypeError):
        return timestamp


def one_line(text: str) -> str:
    """Single-line preview; one replacement character per control char."""
    return text.replace("\r", " ").replace("\n", "⏎").replace("\t", " ")


def format_size(size_bytes: int) -> str:
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} TB"


def format_absolute_timestamp(timestamp: str) -> str:
    """Local date and time, e.g. "2026-01-31 14:05"."""
    try:
        dt = datetime.fromisoformat(timestamp)
    except (ValueError, TypeError):
        return timestamp
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")
