"""Logging utilities."""

import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as loguru_logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


class InterceptHandler(logging.Handler):
    """Forward standard ``logging`` records from library modules to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        loguru_logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _level_number(level: str) -> int:
    number = logging.getLevelName(level)
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level}")
    return number


def setup_logger(
    name: str = "decodedesk",
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_loguru: bool = True
):
    """
    Set up logging for the ``decodedesk`` package.

    Package modules log through ``logging.getLogger(__name__)``. With loguru
    those records are routed into loguru sinks (stderr plus an optional
    rotating file); otherwise plain logging handlers are attached.

    Args:
        name: Root logger name of the package
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        use_loguru: Route output through loguru

    Returns:
        LoguruWrapper, or the configured ``logging.Logger`` without loguru
    """
    level = level.upper()
    number = _level_number(level)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger(name)
    package_logger.setLevel(number)

    if use_loguru:
        loguru_logger.remove()
        loguru_logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
        if log_file:
            loguru_logger.add(log_file, level=level, rotation="10 MB", retention="1 week")

        package_logger.handlers = [InterceptHandler()]
        package_logger.propagate = False
        return LoguruWrapper(loguru_logger)

    formatter = logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
    package_logger.handlers = handlers
    return package_logger


def get_logger(name: str = "decodedesk") -> "LoguruWrapper":
    """Loguru logger bound to ``name``, with the standard logging method names."""
    return LoguruWrapper(loguru_logger.bind(name=name))


class LoguruWrapper:
    """Wrapper for loguru to standard logging interface."""

    def __init__(self, logger):
        self._logger = logger

    def log(self, level: str, msg, *args, **kwargs):
        self._logger.log(level.upper(), msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.log("DEBUG", msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.log("INFO", msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.log("WARNING", msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self.log("ERROR", msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        self._logger.exception(msg, *args, **kwargs)
