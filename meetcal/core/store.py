"""
MeetCal — Calendar Store.

In-memory collection of meetings keyed by timeslot. Storage keeps insertion
order; listing sorts on read. No two meetings may share a timeslot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from meetcal.data.models import Meeting, MeetingDate

logger = logging.getLogger(__name__)


class StoreStatus(Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store mutation.

    ``meeting`` is the added or removed meeting on success, the occupant of
    the timeslot on conflict, and None when nothing was found.
    """

    status: StoreStatus
    meeting: Meeting | None = None

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.SUCCESS


class CalendarStore:
    """Growable sequence of meetings with unique timeslots."""

    def __init__(self) -> None:
        self._meetings: list[Meeting] = []

    @classmethod
    def from_meetings(cls, meetings: Iterable[Meeting]) -> CalendarStore:
        """Build a store by adding each meeting in turn.

        Raises ValueError if two meetings share a timeslot.
        """
        store = cls()
        for meeting in meetings:
            result = store.add(meeting)
            if not result.ok:
                raise ValueError(f"Duplicate timeslot {meeting.date}")
        return store

    def __len__(self) -> int:
        return len(self._meetings)

    def __iter__(self) -> Iterator[Meeting]:
        return iter(self._meetings)

    def __contains__(self, date: object) -> bool:
        return isinstance(date, MeetingDate) and self.find_conflict(date) is not None

    def find_conflict(self, candidate_date: MeetingDate) -> int | None:
        """Return the index of the meeting occupying candidate_date, or None."""
        for i, meeting in enumerate(self._meetings):
            if meeting.date == candidate_date:
                return i
        return None

    def add(self, meeting: Meeting) -> StoreResult:
        """Append a meeting unless its timeslot is already taken."""
        index = self.find_conflict(meeting.date)
        if index is not None:
            occupant = self._meetings[index]
            logger.warning(
                "Timeslot %s already taken by '%s'", meeting.date, occupant.description,
            )
            return StoreResult(StoreStatus.CONFLICT, occupant)

        self._meetings.append(meeting)
        logger.info("Meeting added: '%s' at %s", meeting.description, meeting.date)
        return StoreResult(StoreStatus.SUCCESS, meeting)

    def delete(self, date: MeetingDate) -> StoreResult:
        """Remove the meeting at date, keeping the order of the others."""
        index = self.find_conflict(date)
        if index is None:
            logger.warning("No meeting at %s to delete", date)
            return StoreResult(StoreStatus.NOT_FOUND)

        removed = self._meetings.pop(index)
        logger.info("Meeting deleted: '%s' at %s", removed.description, removed.date)
        return StoreResult(StoreStatus.SUCCESS, removed)

    def list(self) -> list[Meeting]:
        """Return the meetings sorted by (month, day, hour), storage untouched."""
        return sorted(self._meetings, key=lambda m: m.date)
