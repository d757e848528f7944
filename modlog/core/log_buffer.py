"""Bounded append-only log — fixed capacity, FIFO eviction, running total.

Pure Python, no Qt dependency. Not thread-safe: mutate and read from one
thread (the GUI thread), or serialize access externally.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Protocol

from .constants import MAX_NUMBER_LINES


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single formatted log line."""

    sequence: int   # assigned at append, never reused
    text: str


class LogSink(Protocol):
    """Receives notifications after the log changes.

    Implementations must not call back into the log from these hooks.
    """

    def on_append(self, entry: LogEntry, displayed_count: int) -> None: ...

    def on_clear(self) -> None: ...


class BoundedAppendLog:
    """Keeps the ``capacity`` most recent entries, oldest first.

    ``displayed_count`` counts every append since the last :meth:`clear`
    and is not affected by eviction.
    """

    def __init__(self, capacity: int = MAX_NUMBER_LINES) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._displayed_count = 0
        self._next_sequence = 0
        self._sinks: list[LogSink] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def displayed_count(self) -> int:
        return self._displayed_count

    def __len__(self) -> int:
        return len(self._entries)

    # ── Sinks ───────────────────────────────────────────

    def add_sink(self, sink: LogSink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)

    def remove_sink(self, sink: LogSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    # ── Mutation ────────────────────────────────────────

    def append(self, text: str) -> LogEntry:
        """Add a line at the tail, evicting the oldest one when full."""
        if not isinstance(text, str):
            raise TypeError(f"log text must be str, got {type(text).__name__}")
        entry = LogEntry(sequence=self._next_sequence, text=text)
        self._next_sequence += 1
        # deque(maxlen=...) drops the head entry once capacity is reached
        self._entries.append(entry)
        self._displayed_count += 1
        for sink in list(self._sinks):
            sink.on_append(entry, self._displayed_count)
        return entry

    def clear(self) -> None:
        """Drop all entries and reset the displayed count."""
        self._entries.clear()
        self._displayed_count = 0
        for sink in list(self._sinks):
            sink.on_clear()

    # ── Reading ─────────────────────────────────────────

    def snapshot(self) -> list[LogEntry]:
        """Return a copy of the retained entries, oldest first."""
        return list(self._entries)
