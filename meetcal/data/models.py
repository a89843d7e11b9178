"""
MeetCal — Data Models.

A meeting occupies exactly one hour, so its timeslot (month, day, hour) is
the whole key. Both types are immutable; "editing" a meeting means deleting
it and adding a new one.
"""

from __future__ import annotations

from dataclasses import dataclass

# Inclusive bounds per field, in the order they are checked.
DATE_BOUNDS: dict[str, tuple[int, int]] = {
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
}


@dataclass(frozen=True, order=True)
class MeetingDate:
    """A one-hour timeslot.

    Ordering is month, then day, then hour. Fields are bounded independently
    (see ``command_parser.validate_command``); 31.02 is not rejected.
    """

    month: int   # 1-12
    day: int     # 1-31
    hour: int    # 0-23

    def __str__(self) -> str:
        return f"{self.day:02d}.{self.month:02d} at {self.hour:02d}"


@dataclass(frozen=True)
class Meeting:
    """A scheduled one-hour event."""

    date: MeetingDate
    description: str   # single token, e.g. "Haircut"

    def __str__(self) -> str:
        return f"{self.description} {self.date}"
