import logging
import sys
from typing import Any, Dict, Optional

from app.core.config import Settings

# Marks the console handler installed by setup_logging so repeated calls
# (app factory in tests, uvicorn reload) replace it instead of stacking
_HANDLER_NAME = "room-status-console"


def setup_logging(settings: Settings) -> None:
    """Setup application logging configuration"""

    formatter = logging.Formatter(
        fmt=settings.LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(settings.LOG_LEVEL)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL)
    root_logger.addHandler(console_handler)

    # Upstream client chatter stays quiet unless debugging
    levels = {
        "uvicorn": "INFO",
        "uvicorn.access": "INFO" if settings.DEBUG else "WARNING",
        "aiohttp": "DEBUG" if settings.DEBUG else "WARNING",
    }
    for logger_name, level in levels.items():
        logging.getLogger(logger_name).setLevel(level)


class StructuredLogger:
    """Logger that appends ``key=value`` context to every message.

    Context bound with :meth:`bind` (for example the provider name) is
    emitted before per-call context, so every line from an adapter can be
    grepped by provider.
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger(name)
        self.context = dict(context or {})

    def bind(self, **context: Any) -> "StructuredLogger":
        """Return a logger for the same name with extra bound context"""
        merged = {**self.context, **context}
        return StructuredLogger(self.logger.name, merged)

    def format(self, message: str, **kwargs: Any) -> str:
        fields = {**self.context, **kwargs}
        extra_data = " | ".join(f"{k}={v}" for k, v in fields.items())
        return f"{message} | {extra_data}" if extra_data else message

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self.format(message, **kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)


def get_logger(name: str, **context: Any) -> StructuredLogger:
    """Get a structured logger instance, optionally with bound context"""
    return StructuredLogger(name, context)
