"""Shared text and time formatting helpers for human-facing panels."""

from __future__ import annotations

from datetime import datetime, timezone


def parse_iso_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def display_time(value: str | None) -> str:
    parsed = parse_iso_timestamp(value)
    if parsed is None:
        return "--:--:--"
    return parsed.astimezone().strftime("%H:%M:%S")


def truncate_text(text: str, max_length: int) -> str:
    if max_length <= 3 or len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def short_id(value: str, keep: int = 8) -> str:
    return value[:keep]


def compact_relative_age(age_seconds: float | int | None) -> str:
    if age_seconds is None:
        return "n/a"

    seconds = max(0, int(age_seconds))
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def scroll_percent(offset: int, max_offset: int) -> int:
    if max_offset <= 0:
        return 100
    return round(offset / max_offset * 100)
