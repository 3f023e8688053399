# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
In-process log stream exposed to consumers of mjsync.

Every record logged through `get_logger` is also appended to a shared `LogStream`
as a plain, human-readable line. A frontend (or a test) can read the collected
lines or subscribe to be notified about new ones.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable

from .config import CFG


class LogStream(logging.Handler):
    """
    Logging handler collecting messages into a bounded, append-only sequence of lines.

    Attributes:
        max_lines (int): Maximal number of lines kept. Oldest lines are dropped first.
    """

    def __init__(self, max_lines: int = CFG.log_stream.max_lines):
        super().__init__(level=logging.DEBUG)
        self.max_lines = max_lines
        self._lines: deque[str] = deque(maxlen=max_lines)
        self._subscribers: list[Callable[[str], None]] = []
        self._lines_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = record.getMessage()
        except Exception:
            self.handleError(record)
            return

        with self._lines_lock:
            self._lines.append(line)
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(line)
            except Exception:
                self.handleError(record)

    def lines(self) -> list[str]:
        """Return a snapshot of the collected lines, oldest first."""
        with self._lines_lock:
            return list(self._lines)

    def text(self) -> str:
        """Return the collected lines joined by newlines."""
        return "\n".join(self.lines())

    def subscribe(self, callback: Callable[[str], None]) -> None:
        """
        Register a callback invoked with every new line.

        The callback is called from the thread that emitted the record.
        Exceptions raised by the callback are reported through `handleError`
        and never reach the logging call.
        """
        with self._lines_lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[str], None]) -> None:
        """Remove a previously registered callback. Unknown callbacks are ignored."""
        with self._lines_lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def clear(self) -> None:
        """Drop all collected lines."""
        with self._lines_lock:
            self._lines.clear()


def coded(code: int, message: object) -> str:
    """
    Prefix a message with a numeric diagnostic code.

    >>> coded(803, "connection refused")
    '[803] connection refused'
    """
    return f"[{code}] {message}"


# Log stream shared by all mjsync loggers.
LOG_STREAM = LogStream()
