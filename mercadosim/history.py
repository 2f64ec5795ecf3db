"""Ordered log of actions taken during a simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class LogEntry:
    """One recorded action at a simulation instant."""

    instant: int
    action: str
    description: str


class ActionLog:
    """Append-only list of log entries, kept in insertion order."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def add(self, instant: int, action: str, description: str) -> LogEntry:
        """Record an action and return the new entry."""
        if action is None or description is None:
            raise ValueError("action and description are required")
        entry = LogEntry(instant, action, description)
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        """Forget every recorded entry."""
        self._entries.clear()

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)