"""
MeetCal — Centralized configuration.

Loads all settings from .env and validates them.
Every other module reads its defaults from here.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

# Load .env from project root (two levels up from meetcal/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = "WARNING"

    # Meetings
    MAX_DESCRIPTION_LENGTH: int = 63

    # Compatibility switches (lenient parsing of commands / snapshot files)
    LEGACY_COMMANDS: bool = False
    LEGACY_LOAD: bool = False

    # Snapshot loaded at start-up (empty → start with an empty calendar)
    DEFAULT_SNAPSHOT_PATH: str = ""

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_log_level(cls, v: str) -> str:
        level = str(v).strip().upper() or "WARNING"
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("MAX_DESCRIPTION_LENGTH", mode="before")
    @classmethod
    def parse_max_length(cls, v: str | int) -> int:
        value = int(v)
        if value < 1:
            raise ValueError("MAX_DESCRIPTION_LENGTH must be at least 1")
        return value

    @field_validator("LEGACY_COMMANDS", "LEGACY_LOAD", mode="before")
    @classmethod
    def parse_flag(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        text = str(v).strip().lower()
        if text in _TRUTHY:
            return True
        if text in _FALSY:
            return False
        raise ValueError(f"expected a boolean flag, got {v!r}")


def _load_settings() -> Settings:
    """Load settings from environment, exiting on invalid values."""
    try:
        return Settings(
            LOG_LEVEL=os.getenv("LOG_LEVEL", "WARNING"),
            MAX_DESCRIPTION_LENGTH=os.getenv("MAX_DESCRIPTION_LENGTH", "63"),
            LEGACY_COMMANDS=os.getenv("LEGACY_COMMANDS", "false"),
            LEGACY_LOAD=os.getenv("LEGACY_LOAD", "false"),
            DEFAULT_SNAPSHOT_PATH=os.getenv("DEFAULT_SNAPSHOT_PATH", ""),
        )
    except ValidationError as exc:
        print(f"ERROR: invalid configuration in .env: {exc}", file=sys.stderr)
        sys.exit(1)


# Singleton — imported by all other modules as:
#   from meetcal.config import settings
settings = _load_settings()
