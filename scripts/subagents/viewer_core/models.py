"""Shared model contracts for the viewer data flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

RECORD_KINDS = ("user", "assistant")


@dataclass
class AgentRecord:
    kind: str
    agent_id: str
    slug: str
    timestamp: str
    role: str
    content: str | list[dict[str, Any]]
    model: str | None = None
    usage: dict[str, Any] | None = None

    def blocks(self) -> list[dict[str, Any]]:
        if isinstance(self.content, str):
            return []
        return [block for block in self.content if isinstance(block, dict)]


@dataclass
class AgentInfo:
    agent_id: str
    slug: str
    file_path: str
    start_time: str
    is_live: bool = False
    mtime: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "slug": self.slug,
            "file_path": self.file_path,
            "start_time": self.start_time,
            "is_live": self.is_live,
            "mtime": self.mtime,
        }


@dataclass
class SessionInfo:
    session_id: str
    last_modified: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "last_modified": self.last_modified,
        }


@dataclass
class DisplayLine:
    text: str
    style: str = ""

