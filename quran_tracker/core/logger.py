"""Logging setup.

Modules log through loguru directly and tag their messages ("[PLAN]",
"[GOAL]", "[INDEX]", "[STREAK]"). Nothing is configured on import; the CLI
callback (or an embedding application) calls `configure_logging` once.
"""

import sys
from pathlib import Path

from loguru import logger

from quran_tracker.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Replace loguru's handlers with a stderr handler and an optional file.

    Args:
        level: Minimum level for both handlers
        log_file: Rotating log file; parent directories are created
        rotation: When to roll the file (e.g. "10 MB", "1 day")
        retention: How long rolled files are kept (e.g. "7 days")
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=sys.stderr.isatty())

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            encoding="utf-8",
        )

    logger.debug(f"[LOG] level={level} file={log_file or '-'}")


def configure_logging(debug: bool = False) -> None:
    """Configure logging from settings; `debug` forces DEBUG on the console and file."""
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)
