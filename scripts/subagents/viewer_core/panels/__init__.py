"""Panel rendering helpers."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

STATUS_BORDER = {
    "focus": "cyan",
    "idle": "bright_black",
    "live": "green",
    "done": "blue",
}


def border_for(status: str) -> str:
    return STATUS_BORDER.get(status, "cyan")


def empty_text(message: str) -> Text:
    return Text(message, style="dim")


def panel_from_text(title: str, status: str, text: Text | str) -> Panel:
    body = text if isinstance(text, Text) else Text(text)
    return Panel(body, title=f"[bold]{title}[/bold]", title_align="left", border_style=border_for(status))
