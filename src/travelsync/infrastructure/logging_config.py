"""
Logging configuration module.

Colored console output plus an optional plain-text log file.
"""

import logging
import sys
from pathlib import Path


class Colors:
    """ANSI escape sequences for terminal colors."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BRIGHT_RED = "\033[91m"
    BG_RED = "\033[41m"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name and dims the logger name.

    The record is restored after formatting so a file handler sharing it
    still gets plain text.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DIM + Colors.WHITE,
        logging.INFO: Colors.CYAN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.BRIGHT_RED,
        logging.CRITICAL: Colors.BOLD + Colors.WHITE + Colors.BG_RED,
    }

    def __init__(self, fmt: str, datefmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        original_levelname = record.levelname
        original_name = record.name

        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record.levelname = f"{color}{record.levelname:8}{Colors.RESET}"
        record.name = f"{Colors.DIM}{record.name}{Colors.RESET}"

        result = super().format(record)

        record.levelname = original_levelname
        record.name = original_name
        return result


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Console level (logging.DEBUG, "INFO", ...)
        log_file: Optional path to log file, always written at DEBUG
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(
        fmt='[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%H:%M:%S',
        use_colors=sys.stderr.isatty(),
    ))
    console_handler.setLevel(level)

    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            fmt='[%(asctime)s] %(levelname)-8s [%(name)s] [%(threadName)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG,  # Capture all levels, handlers filter
        handlers=handlers,
        force=True
    )

    # Reduce noise from libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    if log_file:
        logger.debug("Log file: %s", log_file)
