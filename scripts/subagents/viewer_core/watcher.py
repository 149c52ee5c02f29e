"""Best-effort native change notification for one path.

The watch thread never touches viewer state; it only posts
:class:`FileChanged` events for the main loop to consume. If the watch cannot
attach (missing path, unsupported platform) the viewer keeps working off its
periodic timers.
"""

from __future__ import annotations

import threading
from pathlib import Path

from watchfiles import watch

from viewer_core.events import EventQueue, FileChanged
from viewer_core.log import get_logger

logger = get_logger("watcher")

DEBOUNCE_MS = 200
STEP_MS = 50


class PathWatch:
    def __init__(self, path: str | Path, events: EventQueue, debounce_ms: int = DEBOUNCE_MS):
        self.path = str(path)
        self._events = events
        self._debounce_ms = debounce_ms
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.failed = False

    def start(self) -> "PathWatch":
        if not Path(self.path).exists():
            logger.info("not watching %s: path does not exist", self.path)
            self.failed = True
            return self
        self._thread = threading.Thread(target=self._run, name=f"watch:{self.path}", daemon=True)
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            for _changes in watch(
                self.path,
                watch_filter=None,
                debounce=self._debounce_ms,
                step=STEP_MS,
                stop_event=self._stop,
                raise_interrupt=False,
                recursive=False,
            ):
                self._events.put(FileChanged(path=self.path))
        except (OSError, RuntimeError) as exc:
            self.failed = True
            logger.info("watch on %s stopped, falling back to polling: %s", self.path, exc)

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None
