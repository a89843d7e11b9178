"""Tests for meetcal.core.action_service — command execution and responses."""

from unittest.mock import MagicMock

import pytest

from meetcal.core.action_service import (
    ListingResponse,
    ResponseKind,
    ServiceResponse,
    Session,
    execute,
    handle_line,
)
from meetcal.core.command_parser import (
    AddCommand,
    DeleteCommand,
    ListCommand,
    LoadCommand,
    MalformedCommand,
    QuitCommand,
    SaveCommand,
)
from meetcal.core.store import CalendarStore
from meetcal.data.models import Meeting, MeetingDate
from meetcal.ports.snapshot_port import SnapshotError, SnapshotParseError


def _mock_snapshot(load_result=None, load_error=None, save_error=None):
    snapshot = MagicMock()
    snapshot.load = MagicMock(return_value=load_result, side_effect=load_error)
    snapshot.save = MagicMock(side_effect=save_error)
    return snapshot


# ---------------------------------------------------------------------------
# Add / Delete / List / Quit
# ---------------------------------------------------------------------------


class TestAddAndDelete:
    def test_add_success(self, session):
        response = execute(session, AddCommand(date=MeetingDate(6, 14, 20), description="Meeting0"))
        assert response.kind is ResponseKind.SUCCESS
        assert not response.is_error
        assert len(session.store) == 1

    def test_add_conflict(self, session):
        execute(session, AddCommand(date=MeetingDate(1, 1, 1), description="X"))
        response = execute(session, AddCommand(date=MeetingDate(1, 1, 1), description="Y"))
        assert response.kind is ResponseKind.CONFLICT
        assert response.is_error
        assert "'X'" in response.message
        assert len(session.store) == 1

    def test_add_out_of_bounds_never_reaches_store(self, session):
        session.store = MagicMock()
        response = execute(session, AddCommand(date=MeetingDate(13, 1, 1), description="X"))
        assert response.kind is ResponseKind.VALIDATION_ERROR
        assert "month" in response.message
        session.store.add.assert_not_called()

    def test_add_description_too_long(self, session):
        cmd = AddCommand(date=MeetingDate(1, 1, 1), description="abcdef")
        response = execute(session, cmd, max_description_length=5)
        assert response.kind is ResponseKind.VALIDATION_ERROR
        assert len(session.store) == 0

    def test_delete_not_found_on_empty_store(self, session):
        response = execute(session, DeleteCommand(date=MeetingDate(1, 1, 1)))
        assert response.kind is ResponseKind.NOT_FOUND
        assert len(session.store) == 0

    def test_delete_success(self, session):
        execute(session, AddCommand(date=MeetingDate(2, 2, 2), description="X"))
        response = execute(session, DeleteCommand(date=MeetingDate(2, 2, 2)))
        assert response.kind is ResponseKind.SUCCESS
        assert "X 02.02 at 02" in response.message
        assert len(session.store) == 0

    def test_delete_out_of_bounds(self, session):
        response = execute(session, DeleteCommand(date=MeetingDate(1, 1, 24)))
        assert response.kind is ResponseKind.VALIDATION_ERROR
        assert "hour" in response.message


class TestListAndQuit:
    def test_list_sorted(self, session, populated_store):
        session.store = populated_store
        response = execute(session, ListCommand())
        assert isinstance(response, ListingResponse)
        assert response.kind is ResponseKind.LISTING
        assert response.lines == [
            "Meeting1 01.01 at 12",
            "Haircut 26.03 at 14",
            "Meeting0 14.06 at 20",
        ]

    def test_list_empty(self, session):
        response = execute(session, ListCommand())
        assert response.lines == []

    def test_quit_stops_session(self, session):
        response = execute(session, QuitCommand())
        assert response.kind is ResponseKind.QUIT
        assert session.running is False

    def test_malformed(self, session):
        response = execute(session, MalformedCommand(diagnostic="empty command"))
        assert response == ServiceResponse(ResponseKind.MALFORMED, "empty command")


# ---------------------------------------------------------------------------
# Save / Load
# ---------------------------------------------------------------------------


class TestSaveAndLoad:
    def test_save_delegates_to_snapshot(self, session):
        snapshot = _mock_snapshot()
        response = execute(session, SaveCommand(filename="cal.txt"), snapshot=snapshot)
        assert response.kind is ResponseKind.SUCCESS
        snapshot.save.assert_called_once_with(session.store, "cal.txt")

    def test_save_failure_is_io_error(self, session, populated_store):
        session.store = populated_store
        snapshot = _mock_snapshot(save_error=SnapshotError("cannot write cal.txt: denied"))
        response = execute(session, SaveCommand(filename="cal.txt"), snapshot=snapshot)
        assert response.kind is ResponseKind.IO_ERROR
        assert response.message == "cannot write cal.txt: denied"
        assert session.store is populated_store

    def test_load_replaces_store(self, session):
        loaded = CalendarStore.from_meetings([Meeting(MeetingDate(5, 5, 5), "New")])
        snapshot = _mock_snapshot(load_result=loaded)
        response = execute(session, LoadCommand(filename="cal.txt"), snapshot=snapshot)
        assert response.kind is ResponseKind.SUCCESS
        assert session.store is loaded

    def test_failed_load_keeps_existing_store(self, session, populated_store):
        session.store = populated_store
        before = list(populated_store)
        snapshot = _mock_snapshot(load_error=SnapshotError("cannot open cal.txt"))
        response = execute(session, LoadCommand(filename="cal.txt"), snapshot=snapshot)
        assert response.kind is ResponseKind.IO_ERROR
        assert session.store is populated_store
        assert list(session.store) == before

    def test_parse_error_keeps_existing_store(self, session, populated_store):
        session.store = populated_store
        snapshot = _mock_snapshot(load_error=SnapshotParseError(3, "junk", "bad line"))
        response = execute(session, LoadCommand(filename="cal.txt"), snapshot=snapshot)
        assert response.kind is ResponseKind.PARSE_ERROR
        assert "line 3" in response.message
        assert session.store is populated_store

    def test_default_snapshot_uses_text_files(self, session, snapshot_path):
        execute(session, AddCommand(date=MeetingDate(3, 26, 14), description="Haircut"))
        assert execute(session, SaveCommand(filename=snapshot_path)).kind is ResponseKind.SUCCESS
        fresh = Session()
        assert execute(fresh, LoadCommand(filename=snapshot_path)).kind is ResponseKind.SUCCESS
        assert set(fresh.store) == set(session.store)


# ---------------------------------------------------------------------------
# handle_line — parse + execute
# ---------------------------------------------------------------------------


class TestHandleLine:
    def test_add_then_list(self, session):
        handle_line(session, "A Meeting0 6 14 20")
        handle_line(session, "A Meeting1 1 1 12")
        response = handle_line(session, "L")
        assert response.lines == ["Meeting1 01.01 at 12", "Meeting0 14.06 at 20"]

    def test_duplicate_add(self, session):
        assert handle_line(session, "A X 1 1 1").kind is ResponseKind.SUCCESS
        assert handle_line(session, "A Y 1 1 1").kind is ResponseKind.CONFLICT
        assert len(session.store) == 1

    def test_delete_on_empty(self, session):
        assert handle_line(session, "D 1 1 1").kind is ResponseKind.NOT_FOUND
        assert len(session.store) == 0

    def test_malformed_line(self, session):
        assert handle_line(session, "Z").kind is ResponseKind.MALFORMED

    @pytest.mark.parametrize("legacy, kind", [
        (False, ResponseKind.MALFORMED),
        (True, ResponseKind.SUCCESS),
    ])
    def test_legacy_flag(self, session, legacy, kind):
        assert handle_line(session, "A X 1 1 1 extra", legacy=legacy).kind is kind
