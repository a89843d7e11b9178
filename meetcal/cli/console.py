"""
MeetCal — Console front end.

Reads one command per line from stdin and writes the protocol replies to
stdout: listing lines, a literal ``SUCCESS`` after every successful
command, or a single ``Error: ...`` line. Logging goes to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, TextIO

from meetcal.adapters.text_file_snapshot import TextFileSnapshot
from meetcal.config import settings
from meetcal.core.action_service import (
    ListingResponse,
    ResponseKind,
    ServiceResponse,
    Session,
    handle_line,
)
from meetcal.ports.snapshot_port import SnapshotError, SnapshotPort

logger = logging.getLogger(__name__)

SUCCESS_MARKER = "SUCCESS"


def render(response: ServiceResponse) -> list[str]:
    """Turn a service response into the lines printed for the operator."""
    if response.is_error:
        return [f"Error: {response.message}"]
    if isinstance(response, ListingResponse):
        return [*response.lines, SUCCESS_MARKER]
    return [SUCCESS_MARKER]


def run(
    session: Session,
    lines: Iterable[str],
    out: TextIO,
    snapshot: SnapshotPort | None = None,
    legacy: bool | None = None,
) -> int:
    """Process input lines until Q or end of input. Returns the exit code."""
    if snapshot is None:
        snapshot = TextFileSnapshot()

    for line in lines:
        if not line.strip():
            continue
        response = handle_line(session, line, snapshot=snapshot, legacy=legacy)
        for text in render(response):
            print(text, file=out)
        out.flush()
        if response.kind is ResponseKind.QUIT:
            break

    logger.debug("Run loop finished with %d meetings in memory", len(session.store))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meetcal",
        description="Interactive one-hour meeting calendar driven by stdin commands.",
    )
    parser.add_argument(
        "--load", metavar="FILE", default=settings.DEFAULT_SNAPSHOT_PATH or None,
        help="load a saved calendar before reading commands",
    )
    parser.add_argument(
        "--legacy", action="store_true",
        help="accept malformed commands and snapshot lines like the old tool",
    )
    parser.add_argument(
        "--log-level", default=settings.LOG_LEVEL, type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level for stderr diagnostics",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Console entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    # No-op when main.py already configured logging.
    logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    logging.getLogger().setLevel(args.log_level)

    legacy_commands = args.legacy or settings.LEGACY_COMMANDS
    legacy_load = args.legacy or settings.LEGACY_LOAD
    snapshot = TextFileSnapshot(legacy=legacy_load)
    session = Session()

    if args.load:
        try:
            session.store = snapshot.load(args.load)
        except SnapshotError as exc:
            print(f"Error: {exc}", file=sys.stderr)

    try:
        return run(session, sys.stdin, sys.stdout, snapshot=snapshot, legacy=legacy_commands)
    except MemoryError:
        logger.critical("Out of memory, terminating")
        return 1
