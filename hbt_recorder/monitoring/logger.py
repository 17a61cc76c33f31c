"""Structured logging for the backtest recorder."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ..core.constants import DEFAULT_LOG_LEVEL


ROOT_LOGGER_NAME = "hbt_recorder"

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class RecorderLogger:
    """
    Structured logger with keyword argument support.
    """

    def __init__(self, name: str):
        """
        Initialize recorder logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _format_message(self, msg: str, **kwargs) -> str:
        """Format message with keyword arguments."""
        if kwargs:
            extra = ' | '.join(f'{k}={v}' for k, v in kwargs.items())
            return f"{msg} | {extra}"
        return msg

    def debug(self, msg: str, **kwargs) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(msg, **kwargs))

    def info(self, msg: str, **kwargs) -> None:
        """Log info message."""
        self.logger.info(self._format_message(msg, **kwargs))

    def warning(self, msg: str, **kwargs) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(msg, **kwargs))

    def error(self, msg: str, exc_info: bool = False, **kwargs) -> None:
        """Log error message."""
        self.logger.error(self._format_message(msg, **kwargs), exc_info=exc_info)

    def critical(self, msg: str, **kwargs) -> None:
        """Log critical message."""
        self.logger.critical(self._format_message(msg, **kwargs))


_loggers = {}


def get_logger(name: str) -> RecorderLogger:
    """
    Get or create a recorder logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        RecorderLogger instance
    """
    if name not in _loggers:
        _loggers[name] = RecorderLogger(name)
    return _loggers[name]


def setup_logger(
    log_file: Optional[Union[str, Path]] = None,
    level: Union[str, int] = DEFAULT_LOG_LEVEL
) -> logging.Logger:
    """
    Configure handlers on the package logger.

    Console output always goes to stdout. A rotating file handler is added
    when ``log_file`` is given; its directory is created if missing.
    Calling this again replaces the previously installed handlers.

    Args:
        log_file: Optional path of the log file
        level: Logging level name or number

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10*1024*1024, # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
