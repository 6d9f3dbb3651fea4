"""
Logging for splitter-deploy runs.

Everything logs under the ``splitter_deploy`` logger. A CLI run attaches a
stdout handler and, unless disabled, two files in the log directory: a
daily-rotated run log and a size-capped error log.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "splitter_deploy"

RUN_LOG_DAYS = 30
ERROR_LOG_BYTES = 10 * 1024 * 1024
ERROR_LOG_BACKUPS = 5


def get_log_dir() -> Path:
    """SPLITTER_LOG_DIR, or ./logs."""
    return Path(os.getenv("SPLITTER_LOG_DIR", "logs"))


def _file_handlers(log_dir: Path, name: str, log_file: str, level: int, formatter: logging.Formatter):
    log_dir.mkdir(parents=True, exist_ok=True)

    run_log = TimedRotatingFileHandler(
        log_dir / log_file, when="midnight", backupCount=RUN_LOG_DAYS, encoding="utf-8",
    )
    run_log.setLevel(level)
    run_log.setFormatter(formatter)

    # errors always carry file:line
    error_log = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=ERROR_LOG_BYTES,
        backupCount=ERROR_LOG_BACKUPS,
        encoding="utf-8",
    )
    error_log.setLevel(logging.ERROR)
    error_log.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return [run_log, error_log]


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    files: bool = True,
    detailed: bool = False,
) -> logging.Logger:
    """
    Attach handlers to logger ``name`` and return it.

    A logger that already has handlers is returned untouched, so repeated
    CLI invocations in one process do not duplicate output.

    Args:
        name: Logger name
        level: Level for the logger and its non-error handlers
        log_file: Run log file name (default ``<name>.log``)
        console: Log to stdout
        files: Write the run and error log files
        detailed: Include logger name and file:line in each line
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(DETAILED_FORMAT if detailed else SIMPLE_FORMAT, datefmt=DATE_FORMAT)

    if console:
        stdout = logging.StreamHandler(sys.stdout)
        stdout.setLevel(level)
        stdout.setFormatter(formatter)
        logger.addHandler(stdout)

    if files:
        for handler in _file_handlers(get_log_dir(), name, log_file or f"{name}.log", level, formatter):
            logger.addHandler(handler)

    return logger


def get_cli_logger(verbose: bool = False, files: bool = True) -> logging.Logger:
    """Package logger for a CLI run; ``verbose`` switches to DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    return setup_logger(ROOT_LOGGER_NAME, level=level, files=files, detailed=verbose)
