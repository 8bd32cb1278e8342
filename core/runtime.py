from __future__ import annotations

"""Runtime composition helpers.

This module wires together:
- logging,
- the main run loop,
- the exit policy check between module runs.

Keeping this in one place avoids duplicate setup code in `main.py` and `api.py`.
"""

import logging
import random
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import AppConfig, EmbeddedConfig, Settings
from .exit_policy import RuntimeState

# Runs one module to completion.
# Example call: `runner("cargo")`.
ModuleRunner = Callable[[str], None]
Chooser = Callable[[Sequence[str]], str]


def configure_logging(settings: Settings) -> None:
    """Initialize file logging according to Settings."""
    log_path = Path(settings.log_file)

    # Example: logs/genact.log -> create logs/ if missing.
    if log_path.parent != Path("."):
        log_path.parent.mkdir(parents=True, exist_ok=True)

    # The terminal belongs to the modules' output, so logs go to a file.
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=settings.log_file,
        encoding="utf-8",
    )
    logging.getLogger("genact.runtime").info(
        "Logging configured: file=%s level=%s",
        settings.log_file,
        settings.log_level,
    )


def run_modules(
    config: AppConfig | EmbeddedConfig,
    state: RuntimeState,
    runner: ModuleRunner,
    choose: Chooser = random.choice,
) -> int:
    """Run randomly chosen modules until the exit policy says stop.

    Returns:
        number of modules run by this call

    Example:
        state = RuntimeState()
        run_modules(config, state, runner=print)
    """
    logger = logging.getLogger("genact.runtime")
    logger.info("Run loop started: modules=%s", list(config.modules))

    runs = 0
    while not config.should_exit(state):
        name = choose(config.modules)
        logger.debug("Running module=%s", name)
        runner(name)
        state.record_run()
        runs += 1

    logger.info(
        "Run loop finished: runs=%s total_runs=%s elapsed=%s",
        runs,
        state.modules_ran(),
        state.elapsed(),
    )
    return runs
