"""Event handling for the live viewer.

All state changes go through :meth:`ViewerController.dispatch`, called from a
single loop. Filesystem work happens here; the scroll rules live in
:mod:`viewer_core.viewport` and are applied as pure transitions.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from viewer_core import viewport
from viewer_core.collectors.agents import discover_agents
from viewer_core.collectors.sessions import find_current_session, list_sessions, subagents_dir
from viewer_core.events import Event, EventQueue, FileChanged, IntervalTimer, KeyPressed, Resized, TimerFired
from viewer_core.layout import visible_line_budget
from viewer_core.log import get_logger
from viewer_core.presentation import format_records
from viewer_core.profiles import other_profile, resolve_profile
from viewer_core.state import FOCUS_AGENTS, FOCUS_STREAM, ViewerState, resolve_index, wrap_index
from viewer_core.tailer import AgentTailer
from viewer_core.watcher import PathWatch

logger = get_logger("controller")

STATUS_TIMER = "status"
RESCAN_TIMER = "rescan"

QUIT_KEYS = {"q", "ctrl-c"}
UP_KEYS = {"up", "k"}
DOWN_KEYS = {"down", "j"}
LEFT_KEYS = {"left", "h"}
RIGHT_KEYS = {"right", "l"}

WatchFactory = Callable[[Path, EventQueue], PathWatch]


def start_watch(path: Path, events: EventQueue) -> PathWatch:
    return PathWatch(path, events).start()


class ViewerController:
    def __init__(
        self,
        project_dir: Path,
        profile: dict,
        events: EventQueue | None = None,
        watch_factory: WatchFactory | None = start_watch,
        config_path: str | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.project_dir = Path(project_dir)
        self.events = events if events is not None else EventQueue()
        self.state = ViewerState(profile=profile)
        self.tailer: AgentTailer | None = None
        self._watch_factory = watch_factory
        self._config_path = config_path
        self._clock = clock
        self._dir_watch: PathWatch | None = None
        self._file_watch: PathWatch | None = None

    @property
    def profile(self) -> dict:
        return self.state.profile

    # ── lifecycle ───────────────────────────────────────────────────

    def start(self, session_id: str | None = None, height: int | None = None) -> None:
        if height is not None:
            self.state.viewport = viewport.resized(self.state.viewport, visible_line_budget(height))
        self.state.sessions = list_sessions(self.project_dir)
        preferred = session_id or find_current_session(self.project_dir)
        index = resolve_index(self.state.sessions, lambda s: s.session_id, preferred, 0)
        self.select_session(index)

    def timers(self) -> list[IntervalTimer]:
        return [
            IntervalTimer(STATUS_TIMER, self.profile["status_poll_seconds"]),
            IntervalTimer(RESCAN_TIMER, self.profile["rescan_seconds"]),
        ]

    def close(self) -> None:
        self._stop_dir_watch()
        self._stop_file_watch()
        self.tailer = None

    # ── event dispatch ──────────────────────────────────────────────

    def dispatch(self, event: Event) -> None:
        if isinstance(event, KeyPressed):
            self.handle_key(event.key)
        elif isinstance(event, TimerFired):
            if event.name == STATUS_TIMER:
                self.poll_stream()
            elif event.name == RESCAN_TIMER:
                self.refresh_sessions()
                self.refresh_agents()
        elif isinstance(event, FileChanged):
            if self.tailer is not None and event.path == str(self.tailer.file_path):
                self.poll_stream()
            elif self._dir_watch is not None and event.path == self._dir_watch.path:
                self.refresh_agents()
        elif isinstance(event, Resized):
            self.state.viewport = viewport.resized(self.state.viewport, visible_line_budget(event.height))

    def handle_key(self, key: str) -> None:
        state = self.state
        page = int(self.profile.get("page_size", viewport.PAGE_STEP))
        if key in QUIT_KEYS:
            state.should_quit = True
        elif key in LEFT_KEYS:
            state.focus = FOCUS_AGENTS
        elif key in RIGHT_KEYS:
            state.focus = FOCUS_STREAM
        elif key in UP_KEYS:
            if state.focus == FOCUS_AGENTS:
                self.move_agent_selection(-1)
            else:
                state.viewport = viewport.scroll_up(state.viewport)
        elif key in DOWN_KEYS:
            if state.focus == FOCUS_AGENTS:
                self.move_agent_selection(1)
            else:
                state.viewport = viewport.scroll_down(state.viewport)
        elif key == "pageup":
            state.viewport = viewport.scroll_up(state.viewport, page)
        elif key == "pagedown":
            state.viewport = viewport.scroll_down(state.viewport, page)
        elif key == "a":
            state.viewport = viewport.toggle_auto_scroll(state.viewport)
        elif key == "tab":
            self.select_session(wrap_index(state.session_index, 1, len(state.sessions)))
        elif key == "shift-tab":
            self.select_session(wrap_index(state.session_index, -1, len(state.sessions)))
        elif key == "v":
            self.switch_profile()

    # ── sessions ────────────────────────────────────────────────────

    def select_session(self, index: int) -> None:
        state = self.state
        state.session_index = index
        state.agents = []
        state.agent_index = 0
        self.tailer = None
        self._stop_dir_watch()
        session = state.current_session
        if session is not None:
            logger.debug("session %s selected", session.session_id)
        self.refresh_agents()

    def refresh_sessions(self) -> None:
        state = self.state
        previous = state.current_session
        state.sessions = list_sessions(self.project_dir)
        previous_id = previous.session_id if previous else None
        index = resolve_index(state.sessions, lambda s: s.session_id, previous_id, state.session_index)
        current = state.sessions[index] if state.sessions else None
        if current is None or current.session_id != previous_id:
            self.select_session(index)
        else:
            state.session_index = index

    # ── agents ──────────────────────────────────────────────────────

    def refresh_agents(self) -> None:
        state = self.state
        session = state.current_session
        previous = state.current_agent
        if session is None:
            state.agents = []
        else:
            self._ensure_dir_watch(session.session_id)
            state.agents = discover_agents(
                subagents_dir(self.project_dir, session.session_id),
                now=self._clock(),
                live_window=self.profile["live_window_seconds"],
            )
        previous_id = previous.agent_id if previous else None
        state.agent_index = resolve_index(state.agents, lambda a: a.agent_id, previous_id, state.agent_index)

        current = state.current_agent
        if current is None:
            self.open_stream()
        elif self.tailer is None or current.agent_id != state.viewport.agent_id:
            self.open_stream()
        else:
            state.stream_live = current.is_live

    def move_agent_selection(self, delta: int) -> None:
        state = self.state
        if not state.agents:
            return
        state.agent_index = wrap_index(state.agent_index, delta, len(state.agents))
        self.open_stream()

    # ── stream ──────────────────────────────────────────────────────

    def open_stream(self) -> None:
        state = self.state
        self._stop_file_watch()
        agent = state.current_agent
        if agent is None:
            self.tailer = None
            state.records = []
            state.lines = []
            state.stream_live = False
            state.viewport = viewport.start_stream(state.viewport, None, False, 0)
            return

        self.tailer = AgentTailer(agent.file_path, live_window=self.profile["live_window_seconds"])
        state.records = self.tailer.open()
        logger.debug("opened %s with %d records", agent.file_path, len(state.records))
        state.lines = format_records(state.records, self.profile)
        state.stream_live = agent.is_live
        state.viewport = viewport.start_stream(state.viewport, agent.agent_id, agent.is_live, len(state.lines))
        self._file_watch = self._watch(self.tailer.file_path)

    def poll_stream(self) -> None:
        if self.tailer is None:
            return
        state = self.state
        fresh = self.tailer.poll_for_new_content()
        if self.tailer.was_reset:
            state.records = fresh
            state.lines = format_records(fresh, self.profile)
        elif fresh:
            state.records.extend(fresh)
            state.lines.extend(format_records(fresh, self.profile))
        state.viewport = viewport.lines_changed(state.viewport, len(state.lines))
        state.stream_live = self.tailer.is_recently_modified(now=self._clock())

    def switch_profile(self) -> None:
        state = self.state
        state.profile = resolve_profile(
            other_profile(self.profile["name"]), self._config_path, use_config_profile=False
        )
        state.lines = format_records(state.records, state.profile)
        state.viewport = viewport.lines_changed(state.viewport, len(state.lines))

    # ── watches ─────────────────────────────────────────────────────

    def _watch(self, path: Path) -> PathWatch | None:
        if self._watch_factory is None:
            return None
        return self._watch_factory(path, self.events)

    def _ensure_dir_watch(self, session_id: str) -> None:
        # a missing subagents/ dir fails the first attach; retried on each rescan
        if self._dir_watch is not None and not self._dir_watch.failed:
            return
        self._stop_dir_watch()
        self._dir_watch = self._watch(subagents_dir(self.project_dir, session_id))

    def _stop_dir_watch(self) -> None:
        if self._dir_watch is not None:
            self._dir_watch.stop()
            self._dir_watch = None

    def _stop_file_watch(self) -> None:
        if self._file_watch is not None:
            self._file_watch.stop()
            self._file_watch = None
