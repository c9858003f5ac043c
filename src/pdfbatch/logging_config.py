"""Logging configuration for pdfbatch.

Console output goes to stdout (INFO and DEBUG) and stderr (WARNING and up).
The optional log file is shared by every job the server runs, so each of its
lines carries the name of the job archive being processed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Package-level logger name
LOGGER_NAME = "pdfbatch"

FILE_FORMAT = "%(asctime)s - %(job)s - %(name)s - %(levelname)s - %(message)s"
NO_JOB = "-"

_PREFIXES = {
    logging.DEBUG: "[debug] ",
    logging.INFO: "",
    logging.WARNING: "Warning: ",
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger for a pdfbatch module.

    Args:
        name: Module name (e.g., __name__). If None, returns the package logger.
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class ConsoleFormatter(logging.Formatter):
    """Plain messages, with a prefix for anything that is not INFO."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.ERROR:
            return f"Error: {record.getMessage()}"
        return _PREFIXES.get(record.levelno, "") + record.getMessage()


class InfoFilter(logging.Filter):
    """Let through only records below WARNING."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


class JobFilter(logging.Filter):
    """Stamp every record with the job archive currently being processed."""

    def __init__(self):
        super().__init__()
        self.job = NO_JOB

    def filter(self, record: logging.LogRecord) -> bool:
        record.job = self.job
        return True


_job_filter = JobFilter()


def set_job_context(job_name: str | None) -> None:
    """Name the job that following log lines belong to (None to clear)."""
    _job_filter.job = job_name or NO_JOB


def _console_level(verbosity: int, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbosity >= 2:
        return logging.DEBUG
    return logging.INFO


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()


def setup_logging(
    verbosity: int = 0,
    quiet: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the pdfbatch CLI.

    May be called again (e.g. once the server config has named a log
    directory); earlier handlers are replaced.

    Args:
        verbosity: 0=normal, 1=verbose (-v), 2=debug (-vv)
        quiet: If True, suppress all console output except errors
        log_file: Optional file receiving every record at DEBUG
    """
    logger = logging.getLogger(LOGGER_NAME)
    _reset_handlers(logger)
    logger.setLevel(logging.DEBUG)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(_console_level(verbosity, quiet))
    stdout_handler.addFilter(InfoFilter())

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    for handler in (stdout_handler, stderr_handler):
        handler.setFormatter(ConsoleFormatter())
        logger.addHandler(handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(_job_filter)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
