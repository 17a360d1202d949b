"""Logging configuration for the league API.

Console shows ``LOG_LEVEL``+ with short timestamps; an optional log file
captures DEBUG+ with full timestamps and logger names.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from league_api.config import LOG_FILE, LOG_LEVEL


def setup_logging(
    level: str = LOG_LEVEL, log_file: Optional[str] = LOG_FILE or None
) -> Optional[Path]:
    """Configure root logging with a console handler and an optional file handler.

    Existing handlers on the root logger are cleared first so that calling
    this function multiple times (e.g. app reloads in tests) does not produce
    duplicate output.

    Args:
        level: Minimum level name for console output.
        log_file: Optional path of a log file. Parent dirs are created.

    Returns:
        Path of the log file, or None when logging to console only.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(getattr(logging, level.upper(), logging.INFO))
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-5s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(console)

    path: Optional[Path] = None
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s")
        )
        root.addHandler(file_handler)

    # uvicorn access lines are noisy at DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return path
