"""Collector helpers and package exports."""

from __future__ import annotations

import os
import time
from pathlib import Path

from viewer_core.log import get_logger

LOG_EXTENSION = ".jsonl"
LIVE_WINDOW_SECONDS = 5.0
FIRST_LINE_CHUNK = 64 * 1024

logger = get_logger("collectors")


def claude_home() -> Path:
    override = os.environ.get("CLAUDE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".claude"


def file_mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def is_recent(mtime: float | None, now: float | None = None, window: float = LIVE_WINDOW_SECONDS) -> bool:
    if mtime is None:
        return False
    current = time.time() if now is None else now
    return (current - mtime) < window


def list_log_files(dir_path: Path) -> list[Path]:
    try:
        return sorted(p for p in dir_path.iterdir() if p.name.endswith(LOG_EXTENSION) and p.is_file())
    except OSError as exc:
        logger.debug("cannot list %s: %s", dir_path, exc)
        return []


def read_first_line(path: Path) -> bytes | None:
    """Return the first line, reading only as many chunks as it spans."""
    try:
        with path.open("rb") as handle:
            collected = b""
            while True:
                chunk = handle.read(FIRST_LINE_CHUNK)
                if not chunk:
                    return collected or None
                collected += chunk
                newline = collected.find(b"\n")
                if newline >= 0:
                    return collected[:newline]
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return None
