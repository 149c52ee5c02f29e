from __future__ import annotations

import json
import os
from pathlib import Path


def record_line(
    agent_id: str = "a1b2c3d4e5",
    slug: str = "fix-login-bug",
    timestamp: str = "2026-01-01T10:00:00Z",
    content=None,
    kind: str = "user",
) -> str:
    if content is None:
        content = "hello"
    payload = {
        "type": kind,
        "agentId": agent_id,
        "slug": slug,
        "timestamp": timestamp,
        "message": {"role": kind, "content": content},
    }
    return json.dumps(payload, ensure_ascii=False) + "\n"


def write_agent(dir_path: Path, agent_id: str, timestamp: str, lines: int = 1, mtime: float | None = None) -> Path:
    dir_path.mkdir(parents=True, exist_ok=True)
    path = dir_path / f"agent-{agent_id}.jsonl"
    body = "".join(
        record_line(agent_id=agent_id, slug=f"task-{agent_id}", timestamp=timestamp, content=f"line {i}")
        for i in range(lines)
    )
    path.write_text(body)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))
