"""
MeetCal — UI-Agnostic Action Service.

Orchestrates one request: parsed command -> bounds validation -> store or
snapshot operation -> structured response object.

The console renders the responses; nothing here writes to stdout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from meetcal.core.command_parser import (
    AddCommand,
    Command,
    DeleteCommand,
    ListCommand,
    LoadCommand,
    MalformedCommand,
    QuitCommand,
    SaveCommand,
    parse,
    validate_command,
)
from meetcal.core.snapshot_format import format_meeting
from meetcal.core.store import CalendarStore, StoreStatus
from meetcal.data.models import Meeting
from meetcal.ports.snapshot_port import SnapshotError, SnapshotParseError

if TYPE_CHECKING:
    from meetcal.ports.snapshot_port import SnapshotPort

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


@dataclass
class Session:
    """State owned by the run loop for the lifetime of the process."""

    store: CalendarStore = field(default_factory=CalendarStore)
    running: bool = True


# ---------------------------------------------------------------------------
# Response types
# ---------------------------------------------------------------------------


class ResponseKind(Enum):
    SUCCESS = "success"
    LISTING = "listing"
    QUIT = "quit"
    MALFORMED = "malformed"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"
    PARSE_ERROR = "parse_error"


_ERROR_KINDS = frozenset({
    ResponseKind.MALFORMED,
    ResponseKind.VALIDATION_ERROR,
    ResponseKind.CONFLICT,
    ResponseKind.NOT_FOUND,
    ResponseKind.IO_ERROR,
    ResponseKind.PARSE_ERROR,
})


@dataclass
class ServiceResponse:
    kind: ResponseKind
    message: str = ""

    @property
    def is_error(self) -> bool:
        return self.kind in _ERROR_KINDS


@dataclass
class ListingResponse(ServiceResponse):
    meetings: list[Meeting] = field(default_factory=list)

    @property
    def lines(self) -> list[str]:
        return [format_meeting(m) for m in self.meetings]


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_add(session: Session, command: AddCommand) -> ServiceResponse:
    meeting = Meeting(date=command.date, description=command.description)
    result = session.store.add(meeting)
    if result.status is StoreStatus.CONFLICT:
        return ServiceResponse(
            ResponseKind.CONFLICT,
            f"timeslot {command.date} is already taken by '{result.meeting.description}'",
        )
    return ServiceResponse(ResponseKind.SUCCESS, f"added {meeting}")


def _handle_delete(session: Session, command: DeleteCommand) -> ServiceResponse:
    result = session.store.delete(command.date)
    if result.status is StoreStatus.NOT_FOUND:
        return ServiceResponse(
            ResponseKind.NOT_FOUND, f"no meeting scheduled at {command.date}",
        )
    return ServiceResponse(ResponseKind.SUCCESS, f"deleted {result.meeting}")


def _handle_save(
    session: Session, command: SaveCommand, snapshot: SnapshotPort,
) -> ServiceResponse:
    try:
        snapshot.save(session.store, command.filename)
    except SnapshotError as exc:
        return ServiceResponse(ResponseKind.IO_ERROR, str(exc))
    return ServiceResponse(ResponseKind.SUCCESS, f"saved to {command.filename}")


def _handle_load(
    session: Session, command: LoadCommand, snapshot: SnapshotPort,
) -> ServiceResponse:
    try:
        loaded = snapshot.load(command.filename)
    except SnapshotParseError as exc:
        return ServiceResponse(
            ResponseKind.PARSE_ERROR, f"cannot load {command.filename}: {exc}",
        )
    except SnapshotError as exc:
        return ServiceResponse(ResponseKind.IO_ERROR, str(exc))

    # Swap only once the new calendar is fully built.
    session.store = loaded
    return ServiceResponse(
        ResponseKind.SUCCESS, f"loaded {len(loaded)} meetings from {command.filename}",
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def execute(
    session: Session,
    command: Command,
    snapshot: SnapshotPort | None = None,
    max_description_length: int | None = None,
) -> ServiceResponse:
    """Run one parsed command against the session.

    Args:
        session: Current run-loop state; its store may be replaced by Load.
        command: Output of command_parser.parse().
        snapshot: Persistence backend for Save/Load (text files by default).
        max_description_length: Description bound; defaults to settings.
    """
    if isinstance(command, MalformedCommand):
        return ServiceResponse(ResponseKind.MALFORMED, command.diagnostic)

    problem = validate_command(command, max_description_length)
    if problem is not None:
        logger.warning("Rejected %s command: %s", command.kind, problem)
        return ServiceResponse(ResponseKind.VALIDATION_ERROR, problem)

    if isinstance(command, AddCommand):
        return _handle_add(session, command)
    if isinstance(command, DeleteCommand):
        return _handle_delete(session, command)
    if isinstance(command, ListCommand):
        meetings = session.store.list()
        return ListingResponse(
            ResponseKind.LISTING, f"{len(meetings)} meetings", meetings=meetings,
        )
    if isinstance(command, QuitCommand):
        session.running = False
        return ServiceResponse(ResponseKind.QUIT, "bye")

    if snapshot is None:
        from meetcal.adapters.text_file_snapshot import TextFileSnapshot
        snapshot = TextFileSnapshot()

    if isinstance(command, SaveCommand):
        return _handle_save(session, command, snapshot)
    if isinstance(command, LoadCommand):
        return _handle_load(session, command, snapshot)

    raise TypeError(f"Unsupported command type: {type(command).__name__}")


def handle_line(
    session: Session,
    line: str,
    snapshot: SnapshotPort | None = None,
    legacy: bool | None = None,
    max_description_length: int | None = None,
) -> ServiceResponse:
    """Parse one raw input line and execute it."""
    if legacy is None:
        from meetcal.config import settings
        legacy = settings.LEGACY_COMMANDS

    command = parse(line, legacy=legacy)
    return execute(session, command, snapshot, max_description_length)
