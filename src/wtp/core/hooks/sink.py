"""
Output sinks for streamed hook output.

A sink is any object with a ``write(bytes)`` method. Command hooks drain the
child's stdout and stderr on two threads, so both readers write through a
SynchronizedWriter that forwards each chunk whole under a lock.
"""

import threading
from typing import Protocol


class Sink(Protocol):
    """Destination accepting byte writes."""

    def write(self, data: bytes, /) -> object: ...


class SynchronizedWriter:
    """Serializes writes from concurrent producers into one sink."""

    def __init__(self, writer: Sink):
        self._writer = writer
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            self._writer.write(data)
            return len(data)

    def flush(self) -> None:
        with self._lock:
            flush = getattr(self._writer, "flush", None)
            if flush is not None:
                flush()


class FlushingWriter:
    """
    Flushes the wrapped writer after every write.

    The CLI wraps stdout in this so hook output appears while a command is
    still running instead of when the stream buffer fills up.
    """

    def __init__(self, writer: Sink):
        self._writer = writer

    def write(self, data: bytes) -> int:
        self._writer.write(data)
        self.flush()
        return len(data)

    def flush(self) -> None:
        flush = getattr(self._writer, "flush", None)
        if flush is not None:
            flush()


def write_line(sink: Sink, text: str) -> None:
    """Write text to a byte sink as UTF-8."""
    sink.write(text.encode("utf-8"))
