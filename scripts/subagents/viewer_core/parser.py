"""JSON-Lines record parsing.

One line of an agent transcript becomes an :class:`AgentRecord`, or ``None``
when the line is empty, is not JSON, or lacks a required field. Callers treat
``None`` as "skip this line"; nothing in here raises.
"""

from __future__ import annotations

import json
from typing import Any

from viewer_core.models import RECORD_KINDS, AgentRecord


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _valid_content(content: Any) -> bool:
    if isinstance(content, str):
        return True
    if not isinstance(content, list):
        return False
    return all(isinstance(block, dict) and isinstance(block.get("type"), str) for block in content)


def parse_record(line: str | bytes) -> AgentRecord | None:
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    text = line.strip()
    if not text:
        return None

    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(payload, dict):
        return None

    kind = payload.get("type")
    if kind not in RECORD_KINDS:
        return None
    for key in ("agentId", "slug", "timestamp"):
        if not _non_empty_str(payload.get(key)):
            return None

    message = payload.get("message")
    if not isinstance(message, dict) or not _non_empty_str(message.get("role")):
        return None
    content = message.get("content")
    if not _valid_content(content):
        return None

    model = message.get("model")
    usage = message.get("usage")
    return AgentRecord(
        kind=kind,
        agent_id=payload["agentId"],
        slug=payload["slug"],
        timestamp=payload["timestamp"],
        role=message["role"],
        content=content,
        model=model if isinstance(model, str) else None,
        usage=usage if isinstance(usage, dict) else None,
    )
