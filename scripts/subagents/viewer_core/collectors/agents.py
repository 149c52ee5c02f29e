"""Agent discovery within one session's subagent directory."""

from __future__ import annotations

import time
from pathlib import Path

from viewer_core.collectors import LIVE_WINDOW_SECONDS, file_mtime, is_recent, list_log_files, read_first_line
from viewer_core.formatting import parse_iso_timestamp
from viewer_core.log import get_logger
from viewer_core.models import AgentInfo
from viewer_core.parser import parse_record

logger = get_logger("collectors.agents")


def agent_sort_key(agent: AgentInfo) -> tuple[int, float, str, str]:
    started = parse_iso_timestamp(agent.start_time)
    if started is None:
        return (1, 0.0, agent.start_time, agent.agent_id)
    return (0, started.timestamp(), agent.start_time, agent.agent_id)


def _describe(path: Path, now: float, live_window: float) -> AgentInfo | None:
    first = read_first_line(path)
    if first is None:
        return None
    record = parse_record(first)
    if record is None:
        logger.debug("skipping %s: first line is not a valid record", path)
        return None
    mtime = file_mtime(path)
    if mtime is None:
        return None
    return AgentInfo(
        agent_id=record.agent_id,
        slug=record.slug,
        file_path=str(path),
        start_time=record.timestamp,
        is_live=is_recent(mtime, now=now, window=live_window),
        mtime=mtime,
    )


def discover_agents(
    dir_path: Path,
    now: float | None = None,
    live_window: float = LIVE_WINDOW_SECONDS,
) -> list[AgentInfo]:
    """Describe every readable agent log, ordered by (start time, agent id).

    Selection in the sidebar is index based, so the order must depend only on
    the records themselves and never on directory enumeration order.
    """
    current = time.time() if now is None else now
    agents: list[AgentInfo] = []
    for path in list_log_files(Path(dir_path)):
        info = _describe(path, current, live_window)
        if info is not None:
            agents.append(info)

    agents.sort(key=agent_sort_key)
    return agents
