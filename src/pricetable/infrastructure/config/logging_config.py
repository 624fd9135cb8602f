"""Per-run logging configuration for pricetable.

Each CLI invocation gets its own log file inside the logs directory,
named after the launch time (e.g. ``logs/run_20260214_153045.log``).
Every ``pricetable.*`` logger routes through it; only messages at the
configured level or above reach the console.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

from pricetable.infrastructure.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(levelname)s: %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "pricetable"


def setup_logging(settings: Settings) -> Path:
    """Initialise the ``pricetable`` logger for the current run.

    Returns the path of the log file used by this run. Calling it again
    is harmless: handlers are only attached once.
    """
    settings.logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = settings.logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers on repeated calls (e.g. tests)
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.debug("Logging initialised, log file: %s", log_file)
    return log_file
