import logging
from typing import Optional

from rich.console import Console

from .output.style import OutputStyle


class StyledConsoleHandler(logging.Handler):
    """Logging handler that prints records through a rich console in the level's color."""

    def __init__(self, console: Console, style: OutputStyle, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.console = console
        self.style = style

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self.console.print(self.style.for_level(record.levelno)(message))
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "INFO",
    console: Optional[Console] = None,
    style: Optional[OutputStyle] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging configuration for http-cli.

    Console records carry the bare message, colored by level; the optional
    log file gets timestamped records.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console: Rich console to print records on (a new one if None)
        style: Output style giving each level its color
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log file messages
        force: If True, reconfigure even if handlers exist

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    style = style or OutputStyle()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("httpcli")
    logger.setLevel(numeric_level)

    # Only clear and reconfigure if forced or no handlers exist
    if force or not logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        console_handler = StyledConsoleHandler(console or style.make_console(), style)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    return logger
