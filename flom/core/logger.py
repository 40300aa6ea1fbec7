"""
Logging configuration for flom.

Diagnostic messages go to stderr so that stdout only ever carries the
converted or shortened links (safe to pipe). Console output is colored
with colorama; an optional rotating log file receives everything.

Levels:
    - Default console level is WARNING
    - --verbose lowers it to DEBUG

Usage:
    from flom.core.logger import setup_logging, get_logger

    setup_logging(verbose=True)   # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.debug("Requesting links")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TextIO

import colorama
from colorama import Back, Fore, Style


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

# Noisy third-party loggers kept at WARNING even in verbose mode
QUIET_LOGGERS = ("urllib3", "urllib3.connectionpool")


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright red on white
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__(CONSOLE_LOG_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, coloring the level name if enabled."""
        if not self.use_colors or record.levelno not in self.COLORS:
            return super().format(record)

        # Copy so other handlers see the plain level name
        record_copy = logging.makeLogRecord(record.__dict__)
        record_copy.levelname = f"{self.COLORS[record.levelno]}{record.levelname}{Style.RESET_ALL}"
        return super().format(record_copy)


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
    colored_output: bool | None = None
) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, before
    the configuration is loaded.

    Args:
        verbose: Show DEBUG messages on the console.
        log_file: Optional path to a rotating log file (always DEBUG).
        stream: Console stream. Defaults to sys.stderr.
        colored_output: Force colors on/off. Defaults to whether the
                        stream is a terminal.

    Behavior:
        1. Initialize colorama (Windows ANSI support)
        2. Configure root logger level to DEBUG
        3. Replace existing handlers with a console handler on stderr
        4. Add a RotatingFileHandler when log_file is given
        5. Quiet urllib3 connection chatter
    """
    stream = stream or sys.stderr
    if colored_output is None:
        colored_output = hasattr(stream, "isatty") and stream.isatty()

    colorama.just_fix_windows_console()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored_output))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = log_file.expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Note:
        Loggers obtained before setup_logging() is called have no handlers
        of their own and fall back to Python's last-resort handler.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush and close all handlers on the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
