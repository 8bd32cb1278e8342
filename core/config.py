from __future__ import annotations

"""Application configuration records.

Why this module exists:
- Keep the resolved configuration shapes in one place.
- Keep process settings (logging) separate from what the user asked to run.
- Own the stopping rule next to the fields it reads.

Example .env:
    LOG_LEVEL=DEBUG
    LOG_FILE=logs/genact.log
"""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from .exit_policy import RuntimeState

# Load .env (if present) for local runs. Shell variables still win.
load_dotenv()

LOGGER = logging.getLogger("genact.config")

VERSION = "1.0.0"

MIN_SPEED_FACTOR = 0.01
DEFAULT_SPEED_FACTOR = 1.0
DEFAULT_INSTANT_PRINT_LINES = 0

COMPLETION_SHELLS = ("bash", "fish", "zsh")

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """Process settings read from the environment, not from the user's flags."""

    log_level: str = "INFO"
    log_file: str = "logs/genact.log"

    @classmethod
    def from_env(cls) -> "Settings":
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in _LOG_LEVELS:
            LOGGER.warning("Invalid LOG_LEVEL=%r. Using default=INFO.", log_level)
            log_level = "INFO"

        settings = cls(
            log_level=log_level,
            log_file=os.getenv("LOG_FILE", "logs/genact.log"),
        )
        LOGGER.debug("Settings loaded: log_level=%s log_file=%s", settings.log_level, settings.log_file)
        return settings


@dataclass(frozen=True)
class AppConfig:
    """Configuration resolved from command-line arguments."""

    # What to run and how fast.
    modules: tuple[str, ...]
    speed_factor: float = DEFAULT_SPEED_FACTOR
    instant_print_lines: int = DEFAULT_INSTANT_PRINT_LINES

    # Stopping conditions.
    exit_after_time: timedelta | None = None
    exit_after_modules: int | None = None

    # Output-only flags; the program prints something and exits.
    list_modules_and_exit: bool = False
    print_completions: str | None = None
    print_manpage: bool = False

    def should_exit(self, state: RuntimeState) -> bool:
        """Check whether it's time to stop running.

        Either limit alone is enough. Limits that are not configured never fire.
        """
        if self.exit_after_time is not None and state.elapsed() > self.exit_after_time:
            return True

        if self.exit_after_modules is not None and state.modules_ran() >= self.exit_after_modules:
            return True

        return False


@dataclass(frozen=True)
class EmbeddedConfig:
    """Configuration resolved from a page URL.

    There are no stopping conditions here: the page runs until it is closed.
    """

    modules: tuple[str, ...]
    speed_factor: float = DEFAULT_SPEED_FACTOR
    instant_print_lines: int = DEFAULT_INSTANT_PRINT_LINES

    def should_exit(self, state: RuntimeState) -> bool:
        return False
