"""Keyboard and tick producers feeding one ordered event queue.

Two daemon threads push into a single ``queue.Queue``; the consumer loop
pulls one event at a time, so state is only ever mutated on its thread.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..input.reader import read_key

logger = logging.getLogger(__name__)

TICK_SECONDS = 0.25
KEY_POLL_MS = 100
STOP_JOIN_SECONDS = 0.5


class EventKind(Enum):
    KEY = "key"
    TICK = "tick"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    key: str = ""


TICK = Event(EventKind.TICK)


class EventSource:
    """Start keyboard/ticker producers and hand their events out in order."""

    def __init__(
        self,
        stdin_fd: int,
        *,
        tick_seconds: float = TICK_SECONDS,
        reader: Callable[..., str] = read_key,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.tick_seconds = tick_seconds
        self._reader = reader
        self._queue: queue.Queue[Event] = queue.Queue()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        """Spawn both producer threads; calling twice is a no-op."""
        if self._threads:
            return
        for target, name in ((self._read_keys, "lazychan-keys"), (self._tick, "lazychan-tick")):
            thread = threading.Thread(target=target, name=name, daemon=True)
            thread.start()
            self._threads.append(thread)

    def stop(self, timeout: float = STOP_JOIN_SECONDS) -> None:
        """Signal both producers and wait for them so stdin is released."""
        self._stop.set()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join(timeout)

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def next(self, timeout: float | None = None) -> Event | None:
        """Block for the next event; ``None`` only when ``timeout`` elapses."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def _read_keys(self) -> None:
        while not self._stop.is_set():
            try:
                key = self._reader(self.stdin_fd, timeout_ms=KEY_POLL_MS)
            except KeyboardInterrupt:
                continue
            except OSError as exc:
                logger.error("keyboard reader stopped: %s", exc)
                return
            if not key:
                continue
            self._queue.put(Event(EventKind.KEY, key))

    def _tick(self) -> None:
        while not self._stop.wait(self.tick_seconds):
            self._queue.put(TICK)


__all__ = ["Event", "EventKind", "EventSource", "KEY_POLL_MS", "STOP_JOIN_SECONDS", "TICK", "TICK_SECONDS"]
