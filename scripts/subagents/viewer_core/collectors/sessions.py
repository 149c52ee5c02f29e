"""Session discovery under the Claude projects directory."""

from __future__ import annotations

from pathlib import Path

from viewer_core.collectors import claude_home, file_mtime, list_log_files
from viewer_core.log import get_logger
from viewer_core.models import SessionInfo

SUBAGENTS_DIR = "subagents"
SESSION_NAME_SEPARATORS = ("-",)

logger = get_logger("collectors.sessions")


def encode_project_path(cwd: str | Path) -> str:
    """``/Users/a/b`` becomes ``-Users-a-b``."""
    normalized = str(cwd)
    if normalized.startswith("/"):
        normalized = normalized[1:]
    return "-" + normalized.replace("/", "-")


def claude_project_dir(cwd: str | Path, home: Path | None = None) -> Path:
    base = home if home is not None else claude_home()
    return base / "projects" / encode_project_path(cwd)


def subagents_dir(project_dir: Path, session_id: str) -> Path:
    return project_dir / session_id / SUBAGENTS_DIR


def _looks_like_session(path: Path) -> bool:
    return any(sep in path.name for sep in SESSION_NAME_SEPARATORS)


def _session_dirs(project_dir: Path) -> list[Path]:
    try:
        return [p for p in project_dir.iterdir() if p.is_dir() and _looks_like_session(p)]
    except OSError as exc:
        logger.debug("cannot list sessions in %s: %s", project_dir, exc)
        return []


def _log_mtimes(session_dir: Path) -> list[float]:
    mtimes = []
    for path in list_log_files(session_dir / SUBAGENTS_DIR):
        mtime = file_mtime(path)
        if mtime is not None:
            mtimes.append(mtime)
    return mtimes


def list_sessions(project_dir: Path) -> list[SessionInfo]:
    sessions: list[SessionInfo] = []
    for session_dir in _session_dirs(project_dir):
        dir_mtime = file_mtime(session_dir)
        if dir_mtime is None:
            continue
        last_modified = max([dir_mtime, *_log_mtimes(session_dir)])
        sessions.append(SessionInfo(session_id=session_dir.name, last_modified=last_modified))

    sessions.sort(key=lambda s: (-s.last_modified, s.session_id))
    return sessions


def find_current_session(project_dir: Path) -> str | None:
    """Session owning the most recently written agent log, if any exists."""
    best: tuple[float, str] | None = None
    for session_dir in _session_dirs(project_dir):
        mtimes = _log_mtimes(session_dir)
        if not mtimes:
            continue
        candidate = (max(mtimes), session_dir.name)
        if best is None or candidate[0] > best[0]:
            best = candidate
    return best[1] if best else None
