"""
Shared utilities for Health Core.

Contains:
- Logging setup (Rich console + optional file output)
- Logger lookup
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, List

from rich.logging import RichHandler


def setup_logging(level=None, log_file: Optional[Path] = None):
    """
    Configure organized logging with Rich and optional file output.

    The console handler honours ``level`` (or settings.LOG_LEVEL); the file
    handler always records DEBUG so a verbose trail is available on disk.
    """
    from .config import settings

    log_level = level or settings.LOG_LEVEL
    console_handler = RichHandler(rich_tracebacks=True)
    console_handler.setLevel(log_level)
    handlers: List[logging.Handler] = [console_handler]

    if settings.LOG_FILE_ENABLED or log_file:
        path = log_file or (settings.LOG_DIR / f"health_core_{datetime.now().strftime('%Y%m%d')}.log")
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if len(handlers) > 1 else log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True
    )


def get_logger(name: str):
    """Get a configured logger."""
    return logging.getLogger(name)
