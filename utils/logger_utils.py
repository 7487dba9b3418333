"""Namespace logging for the gateway.

Every module logs through LoggerUtils.get_logger(__name__), which places its logger below a
single namespace root. Handlers are attached to that root once per process by configure().
"""

from __future__ import annotations

import logging
import sys
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, TextIO, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

    from models.config_models import General

__all__: list[str] = ["LogLevel", "LoggerUtils"]

LevelType: TypeAlias = Literal[
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
DEFAULT_NAMESPACE: Final[str] = "TransGate"

CONSOLE_FORMAT: Final[str] = "%(message)s"
FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(lineno)4d %(name)-40s\t%(funcName)s\t%(message)s"


class LogLevel(NamedTuple):
    name: str
    value: int


class LoggerUtils:
    """Process-wide logging setup.

    The console handler shows WARNING and above as bare messages; the optional rotating file
    handler records everything down to DEBUG. Python warnings are routed into the log.

    Attributes:
        _namespace (str): Name of the root logger every module logger hangs from.
        _configured (bool): Set once handlers have been attached.
    """

    _namespace: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False

    @classmethod
    def set_namespace(cls, namespace: str) -> None:
        """Change the namespace. Only allowed before configure().

        Raises:
            RuntimeError: If logging has already been configured.
        """
        if cls._configured:
            msg = "Logging is already configured; the namespace can no longer change."
            raise RuntimeError(msg)
        cls._namespace = namespace

    @classmethod
    def root(cls) -> logging.Logger:
        return logging.getLogger(cls._namespace)

    @classmethod
    def configure(
        cls, filename: str | Path = "", level: LevelType | str = "INFO", *, use_null_console: bool = False
    ) -> None:
        """Attach the console and file handlers and set the namespace level.

        Calling it again only changes the level.

        Args:
            filename (str | Path): Log file path. Empty disables file logging.
            level (LevelType | str): Level name for the namespace root logger.
            use_null_console (bool): Discard console output instead of writing to stderr.
        """
        if not cls._configured:
            handlers: list[logging.Handler] = [
                cls._console_handler(use_null_console=use_null_console or sys.stderr is None)
            ]
            filename = str(filename)
            if filename.strip():
                file_handler: RotatingFileHandler | None = cls._file_handler(filename)
                if file_handler is not None:
                    handlers.append(file_handler)
            # Warnings are logged to "py.warnings", outside the namespace.
            logging.captureWarnings(True)
            for logger in (cls.root(), logging.getLogger("py.warnings")):
                for handler in handlers:
                    logger.addHandler(handler)
            cls._configured = True
        cls.set_level(level)

    @classmethod
    def configure_from(cls, general: General) -> None:
        """Configure logging from the [GENERAL] section; DEBUG overrides LOG_LEVEL."""
        cls.configure(general.LOG_FILE, "DEBUG" if general.DEBUG else general.LOG_LEVEL)

    @staticmethod
    def _console_handler(*, use_null_console: bool) -> logging.Handler:
        if use_null_console:
            return NullHandler()
        handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(Formatter(CONSOLE_FORMAT))
        return handler

    @classmethod
    def _file_handler(cls, filename: str) -> RotatingFileHandler | None:
        try:
            handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            cls.root().error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return None
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(Formatter(FILE_FORMAT))
        return handler

    @classmethod
    def set_level(cls, level: LevelType | str) -> None:
        """Set the namespace level, falling back to INFO for unknown names."""
        value: int | None = logging.getLevelNamesMapping().get(str(level).upper())
        if value is None:
            cls.root().setLevel(DEFAULT_LOG_LEVEL)
            cls.root().warning("Unknown logging level '%s' specified.\nLogging level set to 'INFO'.", level)
            return
        cls.root().setLevel(value)

    @classmethod
    def get_level(cls) -> LogLevel:
        value: int = cls.root().getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(value), value=value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Return the logger for a dotted module name below the namespace root.

        Args:
            name (str | None): Module name. None returns the namespace root.
        """
        namespace: str = LoggerUtils._namespace
        if not namespace:
            return logging.getLogger(name)
        return logging.getLogger(f"{namespace}.{name}" if name else namespace)
