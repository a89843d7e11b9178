"""Snapshot port — abstract interface for persisting the calendar.

Core modules depend on this protocol, never on a specific storage backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from meetcal.core.store import CalendarStore


class SnapshotError(Exception):
    """Raised when a snapshot cannot be opened, read or written."""


class SnapshotParseError(SnapshotError):
    """Raised when a snapshot line does not match the meeting format."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class SnapshotPort(Protocol):
    """Abstract persistence interface used by the action service."""

    def save(self, store: CalendarStore, location: str) -> None: ...

    def load(self, location: str) -> CalendarStore: ...
