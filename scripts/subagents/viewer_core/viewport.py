"""Scroll and auto-follow state for the activity stream.

Every transition is a pure function returning a new :class:`ViewportState`.
The offset is clamped to ``[0, max_offset]`` after each one, where
``max_offset`` is recomputed from the current line count and viewport height.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, TypeVar

from viewer_core.formatting import scroll_percent

LINE_STEP = 1
PAGE_STEP = 10

T = TypeVar("T")


@dataclass(frozen=True)
class ViewportState:
    scroll_offset: int = 0
    auto_scroll: bool = False
    agent_id: str | None = None
    total_lines: int = 0
    visible_lines: int = 1

    @property
    def max_offset(self) -> int:
        return max(0, self.total_lines - self.visible_lines)

    @property
    def at_bottom(self) -> bool:
        return self.scroll_offset >= self.max_offset


def _clamped(state: ViewportState) -> ViewportState:
    offset = min(max(0, state.scroll_offset), state.max_offset)
    if offset == state.scroll_offset:
        return state
    return replace(state, scroll_offset=offset)


def _settle(state: ViewportState) -> ViewportState:
    if state.auto_scroll:
        return replace(state, scroll_offset=state.max_offset)
    return _clamped(state)


def start_stream(
    state: ViewportState,
    agent_id: str | None,
    is_live: bool,
    total_lines: int,
) -> ViewportState:
    """Show a stream: live agents follow the tail, completed ones start at the top.

    Reselecting the agent already on screen only updates the line count, so a
    liveness flip never moves the view.
    """
    if agent_id is not None and agent_id == state.agent_id:
        return lines_changed(state, total_lines)
    fresh = replace(state, agent_id=agent_id, total_lines=max(0, total_lines), auto_scroll=is_live, scroll_offset=0)
    return _settle(fresh)


def lines_changed(state: ViewportState, total_lines: int) -> ViewportState:
    return _settle(replace(state, total_lines=max(0, total_lines)))


def resized(state: ViewportState, visible_lines: int) -> ViewportState:
    return _settle(replace(state, visible_lines=max(1, visible_lines)))


def scroll_up(state: ViewportState, step: int = LINE_STEP) -> ViewportState:
    offset = max(0, state.scroll_offset - step)
    auto = state.auto_scroll and offset >= state.max_offset
    return _clamped(replace(state, scroll_offset=offset, auto_scroll=auto))


def scroll_down(state: ViewportState, step: int = LINE_STEP) -> ViewportState:
    offset = min(state.max_offset, state.scroll_offset + step)
    auto = state.auto_scroll or offset >= state.max_offset
    return _clamped(replace(state, scroll_offset=offset, auto_scroll=auto))


def toggle_auto_scroll(state: ViewportState) -> ViewportState:
    if state.auto_scroll:
        return replace(state, auto_scroll=False)
    return replace(state, auto_scroll=True, scroll_offset=state.max_offset)


@dataclass(frozen=True)
class VisibleWindow:
    first: int
    last: int
    more_above: bool
    more_below: bool
    percent: int


def visible_window(state: ViewportState) -> VisibleWindow:
    first = min(state.scroll_offset, state.max_offset)
    last = min(first + state.visible_lines, state.total_lines)
    return VisibleWindow(
        first=first,
        last=last,
        more_above=first > 0,
        more_below=first + state.visible_lines < state.total_lines,
        percent=scroll_percent(first, state.max_offset),
    )


def visible_slice(lines: Sequence[T], state: ViewportState) -> list[T]:
    window = visible_window(state)
    return list(lines[window.first : window.last])
