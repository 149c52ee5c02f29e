"""Agent list renderer."""

from __future__ import annotations

import time

from rich.panel import Panel
from rich.text import Text

from viewer_core.formatting import compact_relative_age, short_id
from viewer_core.models import AgentInfo
from viewer_core.panels import empty_text, panel_from_text


def _agent_line(agent: AgentInfo, selected: bool, now: float) -> Text:
    marker = "> " if selected else "  "
    line = Text(marker, style="bold cyan" if selected else "")
    line.append(agent.slug, style="bold" if selected else "")
    line.append(f" ({short_id(agent.agent_id)})", style="dim")
    if not agent.is_live:
        line.append(f" {compact_relative_age(now - agent.mtime)}", style="dim")
    return line


def render(agents: list[AgentInfo], selected_index: int, focused: bool, now: float | None = None) -> Panel:
    current = time.time() if now is None else now
    status = "focus" if focused else "idle"
    if not agents:
        return panel_from_text("Agents", status, empty_text("No agents found"))

    live = [(i, a) for i, a in enumerate(agents) if a.is_live]
    done = [(i, a) for i, a in enumerate(agents) if not a.is_live]

    body = Text()
    if live:
        body.append(f"Active agents ({len(live)}):\n", style="green")
        for index, agent in live:
            body.append_text(_agent_line(agent, index == selected_index, current))
            body.append("\n")
        body.append("\n")
    if done:
        body.append(f"Completed agents ({len(done)}):\n", style="blue")
        for index, agent in done:
            body.append_text(_agent_line(agent, index == selected_index, current))
            body.append("\n")
    body.rstrip()
    return panel_from_text(f"Agents ({len(agents)})", status, body)
