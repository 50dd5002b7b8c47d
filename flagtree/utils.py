# Flagtree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import shutil
import sys

from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from flagtree.logger import logger

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def get_program_invocation() -> str:
    """Returns the program name to show in usage text."""
    script = sys.argv[0] if sys.argv and sys.argv[0] else "flagtree"
    if shutil.which(script):
        return os.path.basename(script)
    if script.endswith(".py"):
        return f"python {script}"
    return script


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Route log records to the console and, optionally, a file.

    `mode` is "cli" for rich console output or "json" for one JSON object per
    line. It falls back to `FLAGTREE_LOG_MODE`, then "cli".

    Raises:
        ValueError: If `mode` is neither "cli" nor "json".
    """
    mode = mode or os.getenv("FLAGTREE_LOG_MODE") or "cli"
    if mode == "cli":
        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=True, show_path=False, markup=False
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(JsonFormatter(LOG_FORMAT))
    else:
        raise ValueError(f"Invalid log mode: {mode}")
    console_handler.setLevel(console_log_level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(JsonFormatter(LOG_FORMAT))
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    logger.debug("Logging initialized in '%s' mode.", mode)
