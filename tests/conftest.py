"""Shared test fixtures and configuration.

Pins environment variables so meetcal.config never picks up a developer's
.env, and provides common fixtures like a populated store.
"""

import os

# Patch env vars BEFORE any meetcal imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MAX_DESCRIPTION_LENGTH"] = "63"
os.environ["LEGACY_COMMANDS"] = "false"
os.environ["LEGACY_LOAD"] = "false"
os.environ["DEFAULT_SNAPSHOT_PATH"] = ""

import pytest


@pytest.fixture
def empty_store():
    """Return an empty CalendarStore."""
    from meetcal.core.store import CalendarStore
    return CalendarStore()


@pytest.fixture
def populated_store():
    """Return a store holding three meetings in non-chronological order."""
    from meetcal.core.store import CalendarStore
    from meetcal.data.models import Meeting, MeetingDate
    return CalendarStore.from_meetings([
        Meeting(MeetingDate(month=6, day=14, hour=20), "Meeting0"),
        Meeting(MeetingDate(month=1, day=1, hour=12), "Meeting1"),
        Meeting(MeetingDate(month=3, day=26, hour=14), "Haircut"),
    ])


@pytest.fixture
def session():
    """Return a fresh Session with an empty store."""
    from meetcal.core.action_service import Session
    return Session()


@pytest.fixture
def snapshot_path(tmp_path):
    """Return a path for a snapshot file inside a temp directory."""
    return str(tmp_path / "calendar.txt")
