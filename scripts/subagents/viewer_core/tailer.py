"""Incremental reading of one agent transcript.

The tailer remembers how many bytes of the file it has consumed and only ever
reads the bytes appended since. Bytes after the last newline are held back
until the line is completed by a later write.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from viewer_core.collectors import LIVE_WINDOW_SECONDS, file_mtime, is_recent
from viewer_core.log import get_logger
from viewer_core.models import AgentRecord
from viewer_core.parser import parse_record

logger = get_logger("tailer")


@dataclass
class TailState:
    file_path: Path
    byte_offset: int = 0
    partial_tail: bytes = b""
    last_known_size: int = 0

    def reset(self) -> None:
        self.byte_offset = 0
        self.partial_tail = b""
        self.last_known_size = 0


def _parse_lines(lines: list[bytes]) -> list[AgentRecord]:
    records = []
    for line in lines:
        record = parse_record(line)
        if record is not None:
            records.append(record)
    return records


class AgentTailer:
    def __init__(self, file_path: str | Path, live_window: float = LIVE_WINDOW_SECONDS):
        self.state = TailState(file_path=Path(file_path))
        self.live_window = live_window
        # Set by the most recent poll when the file shrank and reading restarted at 0.
        self.was_reset = False

    @property
    def file_path(self) -> Path:
        return self.state.file_path

    def open(self) -> list[AgentRecord]:
        self.state.reset()
        self.was_reset = False
        try:
            data = self.file_path.read_bytes()
        except OSError as exc:
            logger.debug("cannot open %s: %s", self.file_path, exc)
            return []

        *complete, tail = data.split(b"\n")
        self.state.partial_tail = tail
        self.state.byte_offset = len(data) - len(tail)
        self.state.last_known_size = len(data)
        return _parse_lines(complete)

    def poll_for_new_content(self) -> list[AgentRecord]:
        self.was_reset = False
        try:
            size = self.file_path.stat().st_size
        except OSError as exc:
            logger.debug("cannot stat %s: %s", self.file_path, exc)
            return []

        consumed = self.state.byte_offset + len(self.state.partial_tail)
        if size < consumed:
            logger.info("%s shrank from %d to %d bytes, rereading", self.file_path, consumed, size)
            self.state.reset()
            self.was_reset = True
            consumed = 0

        self.state.last_known_size = size
        if size == consumed:
            return []

        try:
            with self.file_path.open("rb") as handle:
                handle.seek(consumed)
                chunk = handle.read(size - consumed)
        except OSError as exc:
            logger.debug("cannot read %s: %s", self.file_path, exc)
            return []

        *complete, tail = (self.state.partial_tail + chunk).split(b"\n")
        self.state.partial_tail = tail
        self.state.byte_offset = consumed + len(chunk) - len(tail)
        return _parse_lines(complete)

    def is_recently_modified(self, now: float | None = None) -> bool:
        current = time.time() if now is None else now
        return is_recent(file_mtime(self.file_path), now=current, window=self.live_window)
