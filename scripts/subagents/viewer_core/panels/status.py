"""Status bar renderer."""

from __future__ import annotations

from rich.text import Text

from viewer_core.formatting import short_id
from viewer_core.models import AgentInfo
from viewer_core.viewport import ViewportState, visible_window


def status_line(
    agent: AgentInfo | None,
    record_count: int,
    state: ViewportState,
    live: bool,
    profile_name: str,
) -> str:
    agent_info = f"Agent: {short_id(agent.agent_id)}" if agent else "No agent"
    window = visible_window(state)
    first = window.first + 1 if state.total_lines else 0
    parts = [
        agent_info,
        f"Messages: {record_count}",
        f"Scroll: {window.percent}% ({first}-{window.last}/{state.total_lines})",
    ]
    if state.auto_scroll and live:
        parts.append("Auto-scroll: ON")
    elif state.auto_scroll:
        parts.append("Auto-scroll: armed")
    parts.append(f"View: {profile_name}")
    return " | ".join(parts)


def render(agent: AgentInfo | None, record_count: int, state: ViewportState, live: bool, profile_name: str) -> Text:
    return Text(status_line(agent, record_count, state, live, profile_name), style="dim", no_wrap=True, overflow="ellipsis")
