"""
Logging system with Rich integration and operation tracking.

This module provides:
- A single Rich handler on the root logger, shared by every module logger
- Log modes matching the UI styles (classic / minimal)
- Operation-scoped loggers that record start, completion and duration
"""

import logging
import os
import re
import threading
import time
from contextlib import contextmanager
from enum import Enum
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from .rich_cli import BULKRENAME_THEME

# Only theme tags are stripped; paths may legitimately contain brackets
RICH_TAG_PATTERN = re.compile(
    r"\[/?(?:primary|info|success|warning|error|muted|border|original|replacement|unchanged)?\]"
)


class LogMode(str, Enum):
    """Logging output modes."""

    CLASSIC = "classic"
    MINIMAL = "minimal"


class StructuredLogger:
    """Logger wrapper that adds operation context tracking."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = logging.getLogger(name)
        # Rely on the root handler installed by LoggerManager
        self.logger.handlers = []
        self.logger.propagate = True

        self._context_stack: list[dict[str, Any]] = []
        self._max_context_depth = 10

    @property
    def current_context(self) -> dict[str, Any]:
        """Context of the innermost active operation."""
        return dict(self._context_stack[-1]) if self._context_stack else {}

    @contextmanager
    def operation_context(self, operation: str, **context):
        """Context manager for operation-specific logging with proper stack management."""
        if not operation or not isinstance(operation, str):
            raise ValueError("Operation name must be a non-empty string")

        if len(self._context_stack) >= self._max_context_depth:
            raise RuntimeError(
                f"Context stack depth limit ({self._max_context_depth}) exceeded"
            )

        start_time = time.time()
        self._context_stack.append(
            {"operation": operation, "start_time": start_time, **context}
        )

        context_str = " ".join(f"{k}={v}" for k, v in context.items())
        self.debug(f"starting {operation} {context_str}".rstrip())

        try:
            yield self
        except Exception as e:
            duration = time.time() - start_time
            self.error(f"{operation} failed after {duration:.2f}s: {e}")
            raise
        else:
            duration = time.time() - start_time
            self.debug(f"{operation} completed in {duration:.2f}s")
        finally:
            self._context_stack.pop()

    def info(self, message: str, **kwargs):
        self.logger.info(LoggerManager._prepare_message(message), **kwargs)

    def debug(self, message: str, **kwargs):
        self.logger.debug(LoggerManager._prepare_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(LoggerManager._prepare_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(LoggerManager._prepare_message(message), **kwargs)


class LoggerManager:
    """Manager for creating and configuring structured loggers."""

    _loggers: dict[str, StructuredLogger] = {}
    _console: Console | None = None
    _handler: RichHandler | None = None
    log_mode: LogMode = LogMode.CLASSIC
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls, console: Console | None = None, level: int = logging.INFO
    ) -> None:
        """Install the Rich handler on the root logger (idempotent per console)."""
        with cls._setup_lock:
            console = console or cls._console or Console(theme=BULKRENAME_THEME)
            root_logger = logging.getLogger()

            if cls._handler is not None and cls._handler.console is console:
                root_logger.setLevel(level)
                return

            # Remove any RichHandlers left from a previous console
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            rich_handler = RichHandler(
                console=console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))

            root_logger.addHandler(rich_handler)
            root_logger.setLevel(level)
            cls._console = console
            cls._handler = rich_handler

    @classmethod
    def set_log_mode(
        cls, mode: LogMode, verbose: bool = False, quiet: bool = False
    ) -> int:
        """Configure log mode and root level appropriately; returns the level."""
        cls.log_mode = mode
        # Determine level precedence: quiet > verbose > default
        if quiet or os.getenv("BULKRENAME_QUIET", "").lower() in {"1", "true", "yes"}:
            level = logging.WARNING
        elif verbose:
            level = logging.DEBUG
        else:
            # Minimal defaults to WARNING, classic to INFO
            level = logging.WARNING if mode == LogMode.MINIMAL else logging.INFO

        logging.getLogger().setLevel(level)
        return level

    @classmethod
    def get_logger(cls, name: str) -> StructuredLogger:
        """Get or create a structured logger."""
        if name not in cls._loggers:
            cls._loggers[name] = StructuredLogger(name)
        return cls._loggers[name]

    @classmethod
    def get_operation_logger(cls, operation: str) -> StructuredLogger:
        """Get logger for specific operation."""
        return cls.get_logger(f"bulkrename.{operation}")

    @classmethod
    def reset(cls) -> None:
        """Detach the Rich handler and forget cached loggers."""
        with cls._setup_lock:
            if cls._handler is not None:
                logging.getLogger().removeHandler(cls._handler)
            cls._handler = None
            cls._console = None
            cls._loggers = {}
            cls.log_mode = LogMode.CLASSIC

    @staticmethod
    def _strip_rich_tags(message: str) -> str:
        """Remove Rich markup tags like [primary]...[/] from a message."""
        return RICH_TAG_PATTERN.sub("", message)

    @classmethod
    def _prepare_message(cls, message: Any) -> str:
        """Prepare message for logging based on current log mode (sanitize)."""
        if message is None:
            return ""
        message = str(message)

        if cls.log_mode == LogMode.MINIMAL:
            msg = cls._strip_rich_tags(message)
            return re.sub(r"\s+", " ", msg).strip()
        return message


def setup_enhanced_logging(
    console: Console | None = None, level: int = logging.INFO
) -> StructuredLogger:
    """Set up enhanced logging system."""
    LoggerManager.setup_global_logging(console, level)
    return LoggerManager.get_logger("bulkrename.main")


def get_operation_logger(operation: str) -> StructuredLogger:
    """Get logger for specific operations."""
    return LoggerManager.get_operation_logger(operation)
