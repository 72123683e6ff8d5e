"""Centralized logging for lanbar.

Stdout carries the status bar JSON, so log records go to stderr unless told
otherwise.

Usage:
    from lanbar.utils.logger import Logger

    # Configure once at startup (required before Logger.get)
    Logger.configure(level="WARNING")

    # Get a logger anywhere in the codebase
    log = Logger.get("backends.neighbors")
    log.warning("ip neigh timed out")

    # Library modules that may run before configure() (tests, embedding)
    log = Logger.for_module("snapshot")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO

_ROOT_NAME = "lanbar"

# Records emitted before configure() are dropped instead of reaching
# logging's last-resort stderr handler.
logging.getLogger(_ROOT_NAME).addHandler(logging.NullHandler())


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when trying to use Logger before calling Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Centralized logging for lanbar.

    Must be configured once before ``get``. Attempting to ``get`` a logger
    before configuration raises LoggerNotConfiguredError.

    Example:
        >>> Logger.configure(level="DEBUG", output="stderr")
        >>> Logger.get("probe").debug("collecting interfaces")
    """

    _configured: bool = False
    _root_name: str = _ROOT_NAME

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | Path | TextIO | None = None,
        timestamps: bool = False,
        include_location: bool = False,
    ) -> None:
        """Configure the logger. Must be called before Logger.get().

        Args:
            level: Log level name or a LogLevel enum value.
            output: Where to send logs:
                - None or "stderr": sys.stderr (default)
                - "stdout": sys.stdout
                - str/Path: File path
                - TextIO: Any file-like object
            timestamps: Include timestamps in messages.
            include_location: Include [filename:lineno].

        Raises:
            ValueError: If ``level`` is not a known level name.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None or output == "stderr":
            new_handler = logging.StreamHandler(sys.stderr)
        elif output == "stdout":
            new_handler = logging.StreamHandler(sys.stdout)
        elif isinstance(output, str | Path):
            new_handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        parts = []
        if timestamps:
            parts.append("%(asctime)s")
        parts.append("%(levelname)s")
        parts.append("[%(name)s]")
        if include_location:
            parts.append("[%(filename)s:%(lineno)d]")
        parts.append("%(message)s")

        new_handler.setFormatter(logging.Formatter(" ".join(parts)))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name (appended to "lanbar."). If None, returns root logger.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        return cls.for_module(name)

    @classmethod
    def for_module(cls, name: str | None = None) -> logging.Logger:
        """Get a logger that is silent until configure() is called."""
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured
