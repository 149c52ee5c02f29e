"""Responsive layout sizing by terminal dimensions."""

from __future__ import annotations

# header row, status row, activity panel borders, more-above and more-below rows
RESERVED_ROWS = 6


def select_layout_mode(width: int) -> str:
    if width < 100:
        return "narrow"
    return "wide"


def sidebar_width(mode: str) -> int:
    return 26 if mode == "narrow" else 36


def visible_line_budget(height: int) -> int:
    return max(1, height - RESERVED_ROWS)
