"""
MeetCal — Entry Point.

Single entry point: `python main.py` reads calendar commands from stdin.
"""

import logging
import sys

from meetcal.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from meetcal.cli.console import main

if __name__ == "__main__":
    sys.exit(main())
