"""Turn records into display lines.

Two renderings share the same inputs: compact mode emits one card per content
item, verbose mode spreads a record over several lines.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from viewer_core.formatting import display_time, truncate_text
from viewer_core.models import AgentRecord, DisplayLine
from viewer_core.sanitize import sanitize_text

USER_STYLE = "blue"
THINKING_STYLE = "dim"
TOOL_STYLE = "yellow"
RESULT_STYLE = "green"
ERROR_STYLE = "red"


def _json_text(value: Any, indent: int | None = None) -> str:
    try:
        return json.dumps(value, indent=indent, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


def tool_result_text(block: dict) -> str:
    content = block.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = [item.get("text") for item in content if isinstance(item, dict) and isinstance(item.get("text"), str)]
        if texts:
            return " ".join(texts)
    return _json_text(content)


def _clip(text: str, limit: int) -> str:
    return sanitize_text(truncate_text(text, limit) if limit else text)


def format_record_compact(record: AgentRecord, profile: dict) -> list[DisplayLine]:
    stamp = f"[{display_time(record.timestamp)}]"
    text_limit = int(profile.get("text_limit", 200))
    lines: list[DisplayLine] = []

    if isinstance(record.content, str):
        if record.content.strip():
            lines.append(DisplayLine(f"{stamp} [U] User: {_clip(record.content, text_limit)}", USER_STYLE))
        return lines

    for block in record.blocks():
        kind = block.get("type")
        if kind == "thinking":
            text = _clip(str(block.get("thinking", "")), text_limit)
            lines.append(DisplayLine(f"{stamp} [?] Thinking: {text}", THINKING_STYLE))
        elif kind == "text":
            text = _clip(str(block.get("text", "")), text_limit)
            lines.append(DisplayLine(f"{stamp} [T] Text: {text}"))
        elif kind == "tool_use":
            name = sanitize_text(str(block.get("name", "?")))
            tool_input = _clip(_json_text(block.get("input")), int(profile.get("tool_input_limit", 80)))
            lines.append(DisplayLine(f"{stamp} [>] Tool: {name} | {tool_input}", TOOL_STYLE))
        elif kind == "tool_result":
            result = _clip(tool_result_text(block), int(profile.get("tool_result_limit", 100)))
            if block.get("is_error"):
                lines.append(DisplayLine(f"{stamp} [X] Result: {result}", ERROR_STYLE))
            else:
                lines.append(DisplayLine(f"{stamp} [OK] Result: {result}", RESULT_STYLE))
    return lines


def _split(text: str, style: str = "", indent: str = "") -> list[DisplayLine]:
    return [DisplayLine(indent + sanitize_text(part), style) for part in text.splitlines() or [""]]


def format_record_verbose(record: AgentRecord, profile: dict) -> list[DisplayLine]:
    header = f"[{display_time(record.timestamp)}] {record.role}"
    if record.model:
        header += f" ({record.model})"
    lines = [DisplayLine(header, "dim")]

    if isinstance(record.content, str):
        lines.extend(_split(record.content, "yellow"))
    for block in record.blocks():
        kind = block.get("type")
        if kind == "text":
            lines.extend(_split(str(block.get("text", ""))))
        elif kind == "tool_use":
            lines.append(DisplayLine(f"Tool: {sanitize_text(str(block.get('name', '?')))}", "bold cyan"))
            tool_input = truncate_text(_json_text(block.get("input"), indent=2), int(profile.get("tool_input_limit", 100)))
            lines.extend(_split(tool_input, "dim", "  "))
        elif kind == "tool_result":
            title = "Tool error" if block.get("is_error") else "Tool result"
            lines.append(DisplayLine(title, "bold red" if block.get("is_error") else "bold green"))
            result = truncate_text(tool_result_text(block), int(profile.get("tool_result_limit", 100)))
            lines.extend(_split(result, "dim", "  "))
        elif kind == "thinking":
            lines.extend(_split(str(block.get("thinking", "")), "dim italic"))

    if record.usage:
        used_in = record.usage.get("input_tokens", 0)
        used_out = record.usage.get("output_tokens", 0)
        lines.append(DisplayLine(f"tokens: {used_in} in / {used_out} out", "dim"))
    lines.append(DisplayLine(""))
    return lines


FORMATTERS = {
    "compact": format_record_compact,
    "verbose": format_record_verbose,
}


def format_records(records: Iterable[AgentRecord], profile: dict) -> list[DisplayLine]:
    formatter = FORMATTERS.get(profile.get("name", "compact"), format_record_compact)
    lines: list[DisplayLine] = []
    for record in records:
        lines.extend(formatter(record, profile))
    return lines
