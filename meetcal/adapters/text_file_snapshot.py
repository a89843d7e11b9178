"""Plain-text file adapter — implements SnapshotPort on the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from meetcal.core.snapshot_format import deserialize, serialize
from meetcal.core.store import CalendarStore
from meetcal.ports.snapshot_port import SnapshotError, SnapshotParseError

logger = logging.getLogger(__name__)


class TextFileSnapshot:
    """Reads and writes calendar snapshots as UTF-8 text files."""

    def __init__(
        self,
        legacy: bool | None = None,
        max_description_length: int | None = None,
    ) -> None:
        if legacy is None or max_description_length is None:
            from meetcal.config import settings
            if legacy is None:
                legacy = settings.LEGACY_LOAD
            if max_description_length is None:
                max_description_length = settings.MAX_DESCRIPTION_LENGTH

        self._legacy = legacy
        self._max_description_length = max_description_length

    def save(self, store: CalendarStore, location: str) -> None:
        """Write the store to location, replacing any existing file."""
        path = Path(location)
        try:
            path.write_text(serialize(store), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write snapshot %s: %s", path, exc)
            raise SnapshotError(f"cannot write {location}: {exc.strerror or exc}") from exc

        logger.info("Saved %d meetings to %s", len(store), path)

    def load(self, location: str) -> CalendarStore:
        """Read location into a new store. The caller's store is not touched."""
        path = Path(location)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read snapshot %s: %s", path, exc)
            raise SnapshotError(f"cannot open {location}: {exc.strerror or exc}") from exc
        except UnicodeDecodeError as exc:
            logger.error("Snapshot %s is not valid UTF-8: %s", path, exc)
            raise SnapshotError(f"cannot read {location}: not a text file") from exc

        try:
            store = deserialize(
                text,
                legacy=self._legacy,
                max_description_length=self._max_description_length,
            )
        except SnapshotParseError as exc:
            logger.error("Malformed snapshot %s: %s", path, exc)
            raise

        logger.info("Loaded %d meetings from %s", len(store), path)
        return store
