"""Events serialised onto the viewer's single consumer loop."""

from __future__ import annotations

import queue
import time
from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class FileChanged:
    path: str


@dataclass(frozen=True)
class TimerFired:
    name: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


Event = Union[KeyPressed, FileChanged, TimerFired, Resized]


class EventQueue:
    """Many producers (watch threads, timers, keyboard), one consumer."""

    def __init__(self):
        self._queue: queue.SimpleQueue[Event] = queue.SimpleQueue()

    def put(self, event: Event) -> None:
        self._queue.put(event)

    def drain(self) -> list[Event]:
        events: list[Event] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events


class IntervalTimer:
    def __init__(self, name: str, interval: float, clock: Callable[[], float] = time.monotonic):
        self.name = name
        self.interval = max(0.1, float(interval))
        self._clock = clock
        self._deadline = clock() + self.interval

    def poll(self) -> TimerFired | None:
        now = self._clock()
        if now < self._deadline:
            return None
        # Skip missed ticks rather than firing a burst after a stall.
        while self._deadline <= now:
            self._deadline += self.interval
        return TimerFired(self.name)
