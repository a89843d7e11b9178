"""
MeetCal — Snapshot text format.

One meeting per line, sorted by date:

    <description> <DD>.<MM> at <HH>

e.g. ``Haircut 26.03 at 14``. Day comes before month. There is no header and
no trailer, so an empty calendar serializes to an empty string.
"""

from __future__ import annotations

import logging
import re

from meetcal.core.store import CalendarStore
from meetcal.data.models import DATE_BOUNDS, Meeting, MeetingDate
from meetcal.ports.snapshot_port import SnapshotParseError

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"^(\S+) ([0-9]{1,2})\.([0-9]{1,2}) at ([0-9]{1,2})$")

# Legacy reading mimics a scanner that stops at the first mismatch and
# leaves the remaining fields zeroed. Fields read at most nine digits.
_LEGACY_LINE_RE = re.compile(
    r"^\s*(\S+)(?:\s+([0-9]{1,9})(?:\.([0-9]{1,9})(?:\s+at\s+([0-9]{1,9}))?)?)?"
)


def format_meeting(meeting: Meeting) -> str:
    """Render a meeting as a single snapshot/listing line (see Meeting.__str__)."""
    return str(meeting)


def serialize(store: CalendarStore) -> str:
    """Render the whole store, sorted by date, one newline-terminated line each."""
    return "".join(format_meeting(m) + "\n" for m in store.list())


# ---------------------------------------------------------------------------
# Line parsing
# ---------------------------------------------------------------------------

def _parse_strict_line(
    line_number: int, line: str, max_description_length: int,
) -> Meeting:
    match = _LINE_RE.match(line.strip())
    if match is None:
        raise SnapshotParseError(line_number, line, "does not match '<description> DD.MM at HH'")

    description = match.group(1)
    day, month, hour = (int(g) for g in match.group(2, 3, 4))
    date = MeetingDate(month=month, day=day, hour=hour)

    for field_name, (low, high) in DATE_BOUNDS.items():
        value = getattr(date, field_name)
        if not low <= value <= high:
            raise SnapshotParseError(
                line_number, line, f"{field_name} {value} out of range {low}-{high}",
            )
    if len(description) > max_description_length:
        raise SnapshotParseError(
            line_number, line,
            f"description longer than {max_description_length} characters",
        )
    return Meeting(date=date, description=description)


def _parse_legacy_line(line: str, max_description_length: int) -> Meeting:
    match = _LEGACY_LINE_RE.match(line)
    # Callers skip blank lines, so at least the description matches.
    description = match.group(1)[:max_description_length]
    day, month, hour = (int(g) if g is not None else 0 for g in match.group(2, 3, 4))
    return Meeting(date=MeetingDate(month=month, day=day, hour=hour), description=description)


def deserialize(
    text: str,
    legacy: bool = False,
    max_description_length: int | None = None,
) -> CalendarStore:
    """Parse snapshot text into a new CalendarStore.

    Args:
        text: Snapshot contents.
        legacy: Accept malformed lines the way the old loader did, zeroing
            any field that cannot be read instead of failing.
        max_description_length: Description bound; defaults to settings.

    Raises:
        SnapshotParseError: (strict mode) on the first malformed line,
            out-of-range field, overlong description or duplicate timeslot.
    """
    if max_description_length is None:
        from meetcal.config import settings
        max_description_length = settings.MAX_DESCRIPTION_LENGTH

    store = CalendarStore()
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        if legacy:
            meeting = _parse_legacy_line(line, max_description_length)
        else:
            meeting = _parse_strict_line(line_number, line, max_description_length)

        result = store.add(meeting)
        if result.ok:
            continue
        if not legacy:
            raise SnapshotParseError(line_number, line, f"duplicate timeslot {meeting.date}")
        logger.warning(
            "Skipping line %d: timeslot %s already loaded", line_number, meeting.date,
        )

    logger.debug("Deserialized %d meetings", len(store))
    return store
