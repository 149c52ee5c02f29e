"""Header renderer."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from viewer_core.formatting import short_id
from viewer_core.models import SessionInfo

KEY_HINTS = "a: auto-scroll | v: view | q: quit"


def session_tabs(sessions: list[SessionInfo], selected_index: int) -> Text:
    if not sessions:
        return Text("No sessions found", style="dim")
    tabs = Text()
    for index, session in enumerate(sessions):
        if index:
            tabs.append(" ")
        label = short_id(session.session_id)
        if index == selected_index:
            tabs.append(f"[{label}]", style="bold cyan")
        else:
            tabs.append(label, style="dim")
    return tabs


def render(sessions: list[SessionInfo], selected_index: int) -> Table:
    grid = Table.grid(expand=True)
    grid.add_column(justify="left", no_wrap=True)
    grid.add_column(justify="center", ratio=1, no_wrap=True, overflow="ellipsis")
    grid.add_column(justify="right", no_wrap=True)
    grid.add_row(Text("Subagent Viewer", style="bold"), session_tabs(sessions, selected_index), Text(KEY_HINTS, style="dim"))
    return grid
