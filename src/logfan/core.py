"""
Process-wide registration slot and the convenience logging API.

One logger may be installed per process. Installing a second one raises
AlreadyInitializedError instead of replacing the first. Records pass a
level gate (the installed logger's level) before any work is done, then go
to the installed logger; failures inside it never reach the caller.

Usage:
    from logfan import core, TermLogger, LevelFilter

    core.set_logger(TermLogger(LevelFilter.INFO))
    core.info("listening on %s", addr)
"""

import sys
import threading
from typing import TYPE_CHECKING, Any, Optional

from logfan.errors import AlreadyInitializedError
from logfan.records import Level, LevelFilter, Record

if TYPE_CHECKING:
    from logfan.adapters import SharedLogger


class Dispatcher:
    """
    Holds at most one installed logger.

    ``Dispatcher.instance()`` is the process-wide slot; separate instances
    can be created for embedding or tests without touching it.
    """

    _instance: Optional["Dispatcher"] = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._logger: "SharedLogger | None" = None
        self._max_level: LevelFilter = LevelFilter.OFF
        self._install_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "Dispatcher":
        """Get or create the process-wide instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """
        Drop the process-wide instance. For testing only.
        Closes the installed logger before resetting.
        """
        with cls._lock:
            try:
                if cls._instance is not None and cls._instance._logger is not None:
                    cls._instance._logger.close()
            finally:
                cls._instance = None

    # ── Installation ──────────────────────────────────────────────

    def set_logger(self, logger: "SharedLogger") -> None:
        with self._install_lock:
            if self._logger is not None:
                raise AlreadyInitializedError(
                    f"A logger is already installed: {self._logger!r}"
                )
            self._logger = logger
            self._max_level = LevelFilter(logger.level)

    @property
    def logger(self) -> "SharedLogger | None":
        return self._logger

    @property
    def max_level(self) -> LevelFilter:
        return self._max_level

    @max_level.setter
    def max_level(self, value: LevelFilter | int | str) -> None:
        self._max_level = LevelFilter.from_value(value)

    # ── Dispatch ──────────────────────────────────────────────────

    def enabled(self, level: int) -> bool:
        return self._logger is not None and level <= self._max_level

    def dispatch(self, record: Record) -> None:
        """Send a record to the installed logger. Never raises."""
        if not self.enabled(record.level):
            return
        try:
            self._logger.emit(record)
        except Exception:
            # Logging must never crash the caller
            pass

    def log(
        self,
        level: Level | int | str,
        message: str,
        *args: Any,
        target: str | None = None,
        stacklevel: int = 1,
    ) -> None:
        """
        Build a record from the calling frame and dispatch it.

        ``args`` are applied %-style, as the standard library does. ``target``
        defaults to the caller's module name.
        """
        level = Level.from_name(level) if isinstance(level, str) else Level(level)
        if not self.enabled(level):
            return
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = f"{message} {args!r}"
        frame = sys._getframe(stacklevel)
        module = frame.f_globals.get("__name__", "")
        record = Record(
            level=level,
            message=str(message),
            target=target if target is not None else module,
            module_path=module or None,
            file=frame.f_code.co_filename,
            line=frame.f_lineno,
        )
        self.dispatch(record)

    def flush(self) -> None:
        """
        Flush the installed logger. Call before the process exits so the last
        buffered chunk is not lost.
        """
        if self._logger is not None:
            try:
                self._logger.flush()
            except Exception:
                pass


# ── Module-level API ──────────────────────────────────────────────────

def set_logger(logger: "SharedLogger") -> None:
    """Install ``logger`` process-wide. Raises AlreadyInitializedError if taken."""
    Dispatcher.instance().set_logger(logger)


def get_logger() -> "SharedLogger | None":
    return Dispatcher.instance().logger


def set_max_level(level: LevelFilter | int | str) -> None:
    Dispatcher.instance().max_level = level


def max_level() -> LevelFilter:
    return Dispatcher.instance().max_level


def log(level: Level | int | str, message: str, *args: Any, target: str | None = None) -> None:
    Dispatcher.instance().log(level, message, *args, target=target, stacklevel=2)


def error(message: str, *args: Any, target: str | None = None) -> None:
    Dispatcher.instance().log(Level.ERROR, message, *args, target=target, stacklevel=2)


def warn(message: str, *args: Any, target: str | None = None) -> None:
    Dispatcher.instance().log(Level.WARN, message, *args, target=target, stacklevel=2)


def info(message: str, *args: Any, target: str | None = None) -> None:
    Dispatcher.instance().log(Level.INFO, message, *args, target=target, stacklevel=2)


def debug(message: str, *args: Any, target: str | None = None) -> None:
    Dispatcher.instance().log(Level.DEBUG, message, *args, target=target, stacklevel=2)


def trace(message: str, *args: Any, target: str | None = None) -> None:
    Dispatcher.instance().log(Level.TRACE, message, *args, target=target, stacklevel=2)


def flush() -> None:
    Dispatcher.instance().flush()
