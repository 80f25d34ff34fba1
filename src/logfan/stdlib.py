"""
Bridge from the standard ``logging`` module.

Routes records from stdlib and third-party loggers into a logfan adapter,
so they share the same destinations and formatting as everything else.
"""

import logging
from datetime import datetime, timezone

from logfan.adapters import SharedLogger
from logfan.core import Dispatcher
from logfan.records import Level, Record


def level_from_stdlib(levelno: int) -> Level:
    """Map a stdlib numeric level onto the five logfan levels."""
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


def record_from_stdlib(record: logging.LogRecord, message: str) -> Record:
    return Record(
        level=level_from_stdlib(record.levelno),
        message=message,
        target=record.name,
        module_path=record.module,
        file=record.pathname,
        line=record.lineno,
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
    )


class LogfanHandler(logging.Handler):
    """
    ``logging.Handler`` that forwards to a logfan adapter.

    With no ``logger`` given, records go to whatever is installed in the
    process-wide slot at the time they are emitted.
    """

    def __init__(self, logger: SharedLogger | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            converted = record_from_stdlib(record, message)
            if self._logger is not None:
                self._logger.emit(converted)
            else:
                Dispatcher.instance().dispatch(converted)
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        if self._logger is not None:
            self._logger.flush()


def install_stdlib_bridge(
    logger: SharedLogger | None = None,
    level: int = logging.NOTSET,
    replace_handlers: bool = True,
) -> LogfanHandler:
    """
    Attach a LogfanHandler to the root logger and return it.

    With ``replace_handlers`` existing root handlers are removed first, so
    records are not written twice.
    """
    handler = LogfanHandler(logger)
    root = logging.getLogger()
    if replace_handlers:
        root.handlers = []
    root.addHandler(handler)
    if level != logging.NOTSET:
        root.setLevel(level)
    return handler
