"""Keyboard input from the controlling terminal."""

from __future__ import annotations

import os
import select
import sys

from viewer_core.keys import decode_keys
from viewer_core.log import get_logger

READ_SIZE = 64

logger = get_logger("terminal")


class KeyReader:
    """Non-blocking key reads with canonical mode and echo switched off.

    Uses termios non-canonical mode (ICANON/ECHO off, VMIN=0/VTIME=0) instead
    of tty.setraw() so Rich Live's alternate screen keeps working. Without a
    TTY the reader yields no keys and the display still runs.
    """

    def __init__(self, stream=None):
        self._stream = stream if stream is not None else sys.stdin
        self._fd: int | None = None
        self._old_settings = None

    def __enter__(self) -> "KeyReader":
        try:
            import termios
        except ImportError:
            logger.info("keyboard input unavailable: no termios")
            return self

        try:
            fd = self._stream.fileno()
            self._old_settings = termios.tcgetattr(fd)
            new = termios.tcgetattr(fd)
            new[3] &= ~(termios.ICANON | termios.ECHO)
            new[6][termios.VMIN] = 0
            new[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSADRAIN, new)
            self._fd = fd
        except (termios.error, OSError, ValueError) as exc:
            logger.info("keyboard input unavailable: %s", exc)
            self._fd = None
        return self

    def __exit__(self, *exc_info) -> None:
        if self._fd is not None and self._old_settings is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
        self._fd = None

    @property
    def available(self) -> bool:
        return self._fd is not None

    def read_keys(self, timeout: float) -> list[str]:
        if self._fd is None:
            return []
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return []
        try:
            data = os.read(self._fd, READ_SIZE)
        except OSError:
            return []
        return decode_keys(data.decode("utf-8", errors="ignore"))
