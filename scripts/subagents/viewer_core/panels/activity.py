"""Activity stream renderer."""

from __future__ import annotations

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from viewer_core.models import AgentInfo, DisplayLine
from viewer_core.panels import border_for, empty_text
from viewer_core.viewport import ViewportState, visible_slice, visible_window


def _line_text(line: DisplayLine) -> Text:
    return Text(line.text, style=line.style, no_wrap=True, overflow="ellipsis")


def render(
    lines: list[DisplayLine],
    state: ViewportState,
    agent: AgentInfo | None,
    live: bool,
    focused: bool,
) -> Panel:
    if agent is None:
        title = "Activity Stream"
        body = Group(empty_text("No agents available."), empty_text("Select a session with subagent activity."))
    else:
        marker = "[green]LIVE[/green]" if live else "[blue]DONE[/blue]"
        title = f"Activity Stream: {escape(agent.slug)} {marker}"
        if not lines:
            body = Group(empty_text("No messages yet."), empty_text("Waiting for agent activity..."))
        else:
            window = visible_window(state)
            rows: list[Text] = []
            if window.more_above:
                rows.append(Text("... (more above)", style="dim"))
            rows.extend(_line_text(line) for line in visible_slice(lines, state))
            if window.more_below:
                rows.append(Text("... (more below)", style="dim"))
            body = Group(*rows)

    status = "focus" if focused else ("live" if live else "done")
    return Panel(body, title=f"[bold]{title}[/bold]", title_align="left", border_style=border_for(status))
