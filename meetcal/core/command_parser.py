"""
MeetCal — Command Parser.

Turns one line of operator input into a typed command:

    A <description> <month> <day> <hour>   add a meeting
    D <month> <day> <hour>                 delete a meeting
    L                                      list meetings
    W <filename>                           save to file
    O <filename>                           load from file
    Q                                      quit

Malformed input never raises; it becomes a MalformedCommand carrying a
one-line diagnostic. Date bounds are checked separately by
validate_command() so the caller decides when to apply them.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel

from meetcal.data.models import DATE_BOUNDS, MeetingDate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Command types
# ---------------------------------------------------------------------------

class AddCommand(BaseModel):
    """Schedule a meeting.  Input: ``A Haircut 3 26 14``"""
    kind: str = "add"
    date: MeetingDate
    description: str


class DeleteCommand(BaseModel):
    """Remove the meeting at a timeslot.  Input: ``D 3 26 14``"""
    kind: str = "delete"
    date: MeetingDate


class ListCommand(BaseModel):
    kind: str = "list"


class SaveCommand(BaseModel):
    kind: str = "save"
    filename: str


class LoadCommand(BaseModel):
    kind: str = "load"
    filename: str


class QuitCommand(BaseModel):
    kind: str = "quit"


class MalformedCommand(BaseModel):
    """Input that could not be turned into a command."""
    kind: str = "malformed"
    diagnostic: str


Command = (
    AddCommand | DeleteCommand | ListCommand | SaveCommand
    | LoadCommand | QuitCommand | MalformedCommand
)

# keyword -> parameter names, in input order
_SIGNATURES: dict[str, tuple[str, ...]] = {
    "A": ("description", "month", "day", "hour"),
    "D": ("month", "day", "hour"),
    "L": (),
    "W": ("filename",),
    "O": ("filename",),
    "Q": (),
}

_DATE_FIELDS = ("month", "day", "hour")

# Numbers are capped at 9 digits; longer runs are never converted.
_STRICT_INT_RE = re.compile(r"^-?[0-9]{1,9}$")
_LEADING_INT_RE = re.compile(r"^[+-]?[0-9]{1,9}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _arity_message(keyword: str, expected: tuple[str, ...], got: int) -> str:
    if not expected:
        return f"{keyword} takes no parameters, got {got}"
    noun = "parameter" if len(expected) == 1 else "parameters"
    return (
        f"{keyword} expects {len(expected)} {noun} "
        f"({' '.join(expected)}), got {got}"
    )


def _legacy_int(token: str) -> int:
    """Read an integer prefix the way scanf's %d does; 0 if there is none.

    At most nine digits are read, so an oversized number yields its
    leading digits instead of an overflow.
    """
    match = _LEADING_INT_RE.match(token)
    return int(match.group()) if match else 0


def _read_date(
    keyword: str, tokens: list[str], legacy: bool,
) -> MeetingDate | MalformedCommand:
    values: dict[str, int] = {}
    for name, token in zip(_DATE_FIELDS, tokens):
        if legacy:
            values[name] = _legacy_int(token)
            continue
        if not _STRICT_INT_RE.match(token):
            return MalformedCommand(
                diagnostic=f"{keyword}: {name} must be an integer, got {token[:20]!r}",
            )
        values[name] = int(token)
    return MeetingDate(**values)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def parse(line: str, legacy: bool = False) -> Command:
    """Parse one input line into a command.

    Args:
        line: Raw operator input (trailing newline allowed).
        legacy: Ignore extra trailing parameters and read non-numeric
            date fields as 0 instead of rejecting the line.
    """
    tokens = line.split()
    if not tokens:
        return MalformedCommand(diagnostic="empty command")

    keyword, params = tokens[0], tokens[1:]
    expected = _SIGNATURES.get(keyword)
    if expected is None:
        logger.warning("Unknown command: %r", line.strip())
        return MalformedCommand(diagnostic=f"invalid command {line.strip()!r}")

    too_few = len(params) < len(expected)
    too_many = len(params) > len(expected) and not legacy
    if too_few or too_many:
        logger.warning("Wrong arity for %s: %r", keyword, line.strip())
        return MalformedCommand(diagnostic=_arity_message(keyword, expected, len(params)))
    params = params[:len(expected)]

    if keyword == "A":
        date = _read_date(keyword, params[1:], legacy)
        if isinstance(date, MalformedCommand):
            return date
        return AddCommand(date=date, description=params[0])
    if keyword == "D":
        date = _read_date(keyword, params, legacy)
        if isinstance(date, MalformedCommand):
            return date
        return DeleteCommand(date=date)
    if keyword == "L":
        return ListCommand()
    if keyword == "W":
        return SaveCommand(filename=params[0])
    if keyword == "O":
        return LoadCommand(filename=params[0])
    return QuitCommand()


def validate_command(
    command: Command, max_description_length: int | None = None,
) -> str | None:
    """Check date bounds (and description length for adds).

    Returns a diagnostic naming the first failing field, or None when the
    command may be passed on to the store.
    """
    if not isinstance(command, (AddCommand, DeleteCommand)):
        return None

    for name, (low, high) in DATE_BOUNDS.items():
        value = getattr(command.date, name)
        if not low <= value <= high:
            return f"invalid {name} {value}, expected {low}-{high}"

    if isinstance(command, AddCommand):
        if max_description_length is None:
            from meetcal.config import settings
            max_description_length = settings.MAX_DESCRIPTION_LENGTH
        if len(command.description) > max_description_length:
            return (
                f"description too long ({len(command.description)} characters, "
                f"at most {max_description_length})"
            )
    return None
