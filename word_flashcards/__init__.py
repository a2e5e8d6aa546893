"""Word Flashcards - English/German vocabulary flash cards backed by a Word Source."""

import sys

from loguru import logger

__version__ = "0.1.0"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(
    log_file: str | None = None, level: str = "INFO", console_level: str | None = None
) -> None:
    """Configure the loguru logger with a level and an optional log file.

    Args:
        log_file: Optional path to log file. If None, logs only to stderr.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
        console_level: Level for the stderr sink when it should differ from level

    Example:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(log_file="flashcards.log", level="INFO")
    """
    logger.remove()

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level or level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="1 week",
        )


def install_exception_hook() -> None:
    """Log uncaught exceptions with their traceback before the process exits."""

    def exception_handler(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.opt(exception=(exc_type, exc_value, exc_traceback)).critical("Uncaught exception")

    sys.excepthook = exception_handler


__all__ = ["__version__", "configure_logging", "install_exception_hook"]
