# gemview/command_bus.py
"""
Process-wide queue of textual commands and platform-ish events.

Any thread may post; exactly one thread (the main loop) consumes. Commands
are plain strings, so the queued payload is never shared mutable state.
"""
from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

logger = logging.getLogger("gemview.command_bus")

CommandHandler = Callable[[str], bool]


class EventType(Enum):
    COMMAND = "command"
    REFRESH = "refresh"
    QUIT = "quit"
    DROP_FILE = "dropfile"


@dataclass(frozen=True)
class Event:
    type: EventType
    data: Any = None


class CommandBus:
    """FIFO channel between producers and the main loop."""

    def __init__(self) -> None:
        self._queue: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._pending_refresh = False

    # ---------- producers ----------
    def post(self, command: str) -> None:
        self._queue.put(Event(EventType.COMMAND, str(command)))
        logger.debug("[command] %s", command)

    def post_formatted(self, fmt: str, *args) -> None:
        self.post(fmt % args if args else fmt)

    def post_refresh(self) -> None:
        """Ask for a redraw before the main loop blocks again. Repeated calls coalesce."""
        with self._lock:
            if self._pending_refresh:
                return
            self._pending_refresh = True
        self._queue.put(Event(EventType.REFRESH))

    def post_quit(self) -> None:
        self._queue.put(Event(EventType.QUIT))

    def post_drop(self, path: str) -> None:
        self._queue.put(Event(EventType.DROP_FILE, str(path)))

    # ---------- consumer ----------
    @property
    def pending_refresh(self) -> bool:
        with self._lock:
            return self._pending_refresh

    def clear_refresh(self) -> None:
        with self._lock:
            self._pending_refresh = False

    def wait_event(self, timeout: Optional[float] = None) -> Optional[Event]:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def poll_event(self) -> Optional[Event]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def __len__(self) -> int:
        return self._queue.qsize()


class HandlerChain:
    """
    Chain of responsibility over a command string. Handlers are asked in the
    order they were added; the first one returning True stops the search.
    """

    def __init__(self, handlers: Optional[List[CommandHandler]] = None) -> None:
        self.handlers: List[CommandHandler] = list(handlers or [])

    def add(self, handler: CommandHandler) -> None:
        self.handlers.append(handler)

    def dispatch(self, command: str) -> bool:
        for handler in self.handlers:
            if handler(command):
                return True
        return False
