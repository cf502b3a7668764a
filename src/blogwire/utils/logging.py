"""Logging utilities for blogwire."""

import logging
import time

from rich.console import Console
from rich.logging import RichHandler

from blogwire.config import Settings, get_settings

LOG_FILE_NAME = "blogwire.log"

# third-party loggers that log every request at INFO
_CHATTY = ("httpx", "httpcore")


def setup_logging(settings: Settings | None = None, level: int | str | None = None) -> logging.Logger:
    """Configure the ``blogwire`` logger from settings.

    Console output goes through Rich on stderr. With ``log_to_file`` set, a
    debug-level file log is kept under ``settings.logs_dir``.
    """
    settings = settings or get_settings()
    requested = settings.log_level if level is None else level
    level = logging.getLevelName(requested.upper()) if isinstance(requested, str) else requested
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {requested}")

    logger = logging.getLogger("blogwire")
    logger.setLevel(logging.DEBUG if settings.log_to_file else level)

    # Remove existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if settings.log_to_file:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.logs_dir / LOG_FILE_NAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    for name in _CHATTY:
        logging.getLogger(name).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)

    return logger


def get_logger(name: str = "blogwire") -> logging.Logger:
    """Get a logger instance under the blogwire namespace."""
    if name != "blogwire" and not name.startswith("blogwire."):
        name = f"blogwire.{name}"
    return logging.getLogger(name)


class LogContext:
    """Context manager timing one wire request.

    ``elapsed`` holds the wall time in seconds once the block exits. Failures
    are logged at warning level; the adapter reports them to the listener.
    """

    def __init__(self, logger: logging.Logger, context: str, token: int | None = None):
        self.logger = logger
        self.context = context if token is None else f"{context} #{token}"
        self.elapsed: float | None = None
        self._started = 0.0

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.debug(f"Starting: {self.context}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self._started
        if exc_type:
            self.logger.warning(f"Failed: {self.context} after {self.elapsed:.2f}s - {exc_val}")
        else:
            self.logger.debug(f"Completed: {self.context} in {self.elapsed:.2f}s")
        return False
