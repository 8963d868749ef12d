"""Logging setup shared by the GUI and command-line entry points.

Idempotent: repeated setup_logging() calls replace the level but don't
duplicate handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def setup_logging(
    level: str | int = "INFO", log_file: Optional[str | Path] = None
) -> logging.Logger:
    """Configure the root logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number
        log_file: Optional file that receives the same records

    Returns:
        The root logger
    """
    global _configured

    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if _configured:
        return root

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Python warnings end up in the same handlers
    logging.captureWarnings(True)

    _configured = True
    return root
