"""
CombinedLogger: one registration, many destinations.

The combined level is the most verbose level of its members, so a
dispatcher gating on it never discards a record some member would accept.
Each member re-checks its own level inside ``emit``.
"""

from collections.abc import Iterable

from logfan.adapters import SharedLogger
from logfan.config import Config
from logfan.records import LevelFilter, Record


class CombinedLogger(SharedLogger):
    """
    Usage:
        CombinedLogger.init([
            TermLogger(LevelFilter.WARN),
            FileLogger(LevelFilter.INFO, Config(), "logs/app.log"),
        ])
    """

    def __init__(self, loggers: Iterable[SharedLogger]):
        members = tuple(loggers)
        if not members:
            raise ValueError("CombinedLogger needs at least one logger")
        self._loggers = members
        super().__init__(max(logger.level for logger in members), None)

    @property
    def loggers(self) -> tuple[SharedLogger, ...]:
        return self._loggers

    @property
    def config(self) -> Config | None:
        return None

    def emit(self, record: Record) -> None:
        """
        Hand the record to every member in order. One member raising does
        not keep the record from the others.
        """
        for logger in self._loggers:
            try:
                logger.emit(record)
            except Exception:
                # Never let one destination starve the rest
                pass

    def flush(self) -> None:
        for logger in self._loggers:
            try:
                logger.flush()
            except Exception:
                pass

    def close(self) -> None:
        for logger in self._loggers:
            try:
                logger.close()
            except Exception:
                pass

    def __repr__(self) -> str:
        inner = ", ".join(repr(logger) for logger in self._loggers)
        return f"CombinedLogger(level={LevelFilter(self.level).name}, loggers=[{inner}])"
