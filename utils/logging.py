"""Loguru setup for season-streams.

Two sinks are installed by configure_logging():
- stderr, WARNING and above (DEBUG with ``--debug``)
- season-streams.log in the data directory, always DEBUG, rotated at 50 MB

Enrichment runs on worker threads, so the file format carries the thread name.
"""

import sys
from pathlib import Path

from loguru import logger as _base_logger

from models.config import get_data_path

LOG_FILE_NAME = "season-streams.log"

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{extra[name]}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {extra[name]}:{function}:{line} - {message}"

# Records from loggers that never went through get_logger()
_base_logger.configure(extra={"name": "season-streams"})

_initialized = False


def configure_logging(debug: bool = False, log_dir: Path | None = None) -> Path:
    """Install the console and file sinks (once per process).

    Args:
        debug: Lower the console level from WARNING to DEBUG
        log_dir: Directory for the log file (default: data directory)

    Returns:
        Path of the log file
    """
    global _initialized

    log_dir = log_dir or get_data_path()
    log_file = log_dir / LOG_FILE_NAME
    if _initialized:
        return log_file

    log_dir.mkdir(parents=True, exist_ok=True)
    _base_logger.remove()
    _base_logger.add(sys.stderr, format=CONSOLE_FORMAT, level="DEBUG" if debug else "WARNING")
    _base_logger.add(
        log_file,
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="50 MB",
        retention=10,
        compression="zip",
    )

    _initialized = True
    _base_logger.bind(name=__name__).debug(f"Logging to {log_file} (console {'DEBUG' if debug else 'WARNING'})")
    return log_file


def get_logger(name: str):
    """Logger bound to a module name.

    Does not install sinks; until configure_logging() runs, records go to
    loguru's default stderr handler.

    Args:
        name: Logger name (typically __name__)
    """
    return _base_logger.bind(name=name)
