"""Viewer state threaded through the controller, plus pure selection helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence, TypeVar

from viewer_core.models import AgentInfo, AgentRecord, DisplayLine, SessionInfo
from viewer_core.viewport import ViewportState

FOCUS_AGENTS = "agents"
FOCUS_STREAM = "stream"

T = TypeVar("T")


@dataclass
class ViewerState:
    profile: dict
    sessions: list[SessionInfo] = field(default_factory=list)
    session_index: int = 0
    agents: list[AgentInfo] = field(default_factory=list)
    agent_index: int = 0
    focus: str = FOCUS_AGENTS
    records: list[AgentRecord] = field(default_factory=list)
    lines: list[DisplayLine] = field(default_factory=list)
    viewport: ViewportState = field(default_factory=ViewportState)
    stream_live: bool = False
    should_quit: bool = False

    @property
    def current_session(self) -> SessionInfo | None:
        if 0 <= self.session_index < len(self.sessions):
            return self.sessions[self.session_index]
        return None

    @property
    def current_agent(self) -> AgentInfo | None:
        if 0 <= self.agent_index < len(self.agents):
            return self.agents[self.agent_index]
        return None


def wrap_index(index: int, delta: int, size: int) -> int:
    if size <= 0:
        return 0
    return (index + delta) % size


def clamp_index(index: int, size: int) -> int:
    if size <= 0:
        return 0
    return min(max(0, index), size - 1)


def resolve_index(
    items: Sequence[T],
    key: Callable[[T], str],
    previous_id: str | None,
    previous_index: int,
) -> int:
    """Index of the previously selected id in a fresh list, else the clamped old index."""
    if previous_id is not None:
        for index, item in enumerate(items):
            if key(item) == previous_id:
                return index
    return clamp_index(previous_index, len(items))
