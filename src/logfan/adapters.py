"""
Log adapters (output destinations).

An adapter is a (level, config, sink) triple. It accepts a record when
``record.level <= adapter.level``, renders it with its Config and writes it
to its sink under a lock, so records from concurrent threads never
interleave within one sink.

  - SimpleLogger: stdout/stderr, no color. Write errors propagate.
  - WriteLogger:  any writable object. Write errors propagate.
  - FileLogger:   WriteLogger over a file it opens and owns.
  - TermLogger:   colored terminal output with stream routing. Best effort.
  - TestLogger:   in-memory capture for tests. Best effort.
"""

import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from pathlib import Path
from typing import IO, Any

from logfan.config import Config
from logfan.errors import TerminalUnavailableError
from logfan.records import Level, LevelFilter, Record
from logfan.render import render, render_to_string


class SharedLogger(ABC):
    """
    Common adapter interface, also what CombinedLogger aggregates and what
    the registration slot holds.
    """

    def __init__(self, level: LevelFilter | int | str, config: Config | None = None):
        self._level = LevelFilter.from_value(level)
        self._config = config if config is not None else Config()

    @property
    def level(self) -> LevelFilter:
        return self._level

    @property
    def config(self) -> Config | None:
        return self._config

    def is_enabled(self, level: int) -> bool:
        return level <= self._level

    @abstractmethod
    def emit(self, record: Record) -> None:
        """Render and write a record if this adapter accepts its level."""
        ...

    def flush(self) -> None:
        """Flush buffered output. Override in adapters that buffer."""
        pass

    def close(self) -> None:
        """Cleanup. Override if adapter holds resources."""
        self.flush()

    @classmethod
    def init(cls, *args: Any, **kwargs: Any) -> "SharedLogger":
        """
        Build the adapter and install it as the process-wide logger.
        Raises AlreadyInitializedError if one is installed already.
        """
        from logfan import core

        logger = cls(*args, **kwargs)
        core.set_logger(logger)
        return logger

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self._level.name})"


class SimpleLogger(SharedLogger):
    """
    Plain console output. ERROR goes to stderr, everything else to stdout.
    Streams are looked up on every record, so redirections are honoured.
    """

    def __init__(self, level: LevelFilter | int | str, config: Config | None = None):
        super().__init__(level, config)
        self._lock = threading.Lock()

    def emit(self, record: Record) -> None:
        if not self.is_enabled(record.level):
            return
        stream = sys.stderr if record.level == Level.ERROR else sys.stdout
        if stream is None:
            raise OSError(
                f"sys.{'stderr' if record.level == Level.ERROR else 'stdout'} is not available"
            )
        with self._lock:
            render(self._config, record, stream)

    def flush(self) -> None:
        with self._lock:
            for stream in (sys.stdout, sys.stderr):
                if stream is not None:
                    stream.flush()


class WriteLogger(SharedLogger):
    """Writes to any object with ``write`` (and optionally ``flush``)."""

    def __init__(
        self,
        level: LevelFilter | int | str,
        config: Config | None,
        writable: IO[str] | Any,
    ):
        super().__init__(level, config)
        self._writable = writable
        self._lock = threading.Lock()

    @property
    def writable(self) -> Any:
        return self._writable

    def emit(self, record: Record) -> None:
        if not self.is_enabled(record.level):
            return
        with self._lock:
            render(self._config, record, self._writable, self._config.write_log_enable_colors)

    def flush(self) -> None:
        with self._lock:
            flush = getattr(self._writable, "flush", None)
            if flush is not None:
                flush()


class FileLogger(WriteLogger):
    """
    WriteLogger over a file opened from ``path``. Parent directories are
    created. Line endings are written verbatim (no newline translation).
    """

    def __init__(
        self,
        level: LevelFilter | int | str,
        config: Config | None,
        path: str | Path,
        mode: str = "a",
    ):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(level, config, open(self.path, mode, encoding="utf-8", newline=""))

    def flush(self) -> None:
        if not self._writable.closed:
            super().flush()

    def close(self) -> None:
        self.flush()
        with self._lock:
            if not self._writable.closed:
                self._writable.close()

    @property
    def closed(self) -> bool:
        return self._writable.closed


class TerminalMode(str, Enum):
    """Which streams a TermLogger writes to."""
    STDOUT = "stdout"
    STDERR = "stderr"
    MIXED = "mixed"     # ERROR to stderr, everything else to stdout


class ColorChoice(str, Enum):
    ALWAYS = "always"
    AUTO = "auto"       # color only when the stream is a tty
    NEVER = "never"


class TermLogger(SharedLogger):
    """
    Terminal output with colored level text.

    Raises TerminalUnavailableError when a stream required by ``mode`` does
    not exist (``sys.stdout`` is None under a windowed interpreter, for
    example). Callers fall back to another adapter:

        try:
            logger = TermLogger(LevelFilter.WARN)
        except TerminalUnavailableError:
            logger = SimpleLogger(LevelFilter.WARN)

    Write failures are swallowed: a record that cannot be written is dropped.
    """

    def __init__(
        self,
        level: LevelFilter | int | str,
        config: Config | None = None,
        mode: TerminalMode = TerminalMode.MIXED,
        color_choice: ColorChoice = ColorChoice.AUTO,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ):
        super().__init__(level, config)
        self.mode = TerminalMode(mode)
        self.color_choice = ColorChoice(color_choice)
        out = stdout if stdout is not None else sys.stdout
        err = stderr if stderr is not None else sys.stderr

        if self.mode == TerminalMode.STDOUT:
            primary, secondary = out, out
        elif self.mode == TerminalMode.STDERR:
            primary, secondary = err, err
        else:
            primary, secondary = out, err

        if primary is None or secondary is None:
            raise TerminalUnavailableError(
                f"A terminal could not be opened for mode '{self.mode.value}'"
            )
        self._out = primary
        self._err = secondary
        self._color_out = self._use_color(primary)
        self._color_err = self._use_color(secondary)
        # Both handles may be the same stream; one lock covers both.
        self._lock = threading.Lock()

    def _use_color(self, stream: Any) -> bool:
        if self.color_choice == ColorChoice.ALWAYS:
            return True
        if self.color_choice == ColorChoice.NEVER:
            return False
        isatty = getattr(stream, "isatty", None)
        if isatty is None:
            return False
        try:
            return bool(isatty())
        except (OSError, ValueError):
            return False

    def stream_for(self, level: Level) -> Any:
        return self._err if level == Level.ERROR else self._out

    def emit(self, record: Record) -> None:
        if not self.is_enabled(record.level):
            return
        if record.level == Level.ERROR:
            stream, colors = self._err, self._color_err
        else:
            stream, colors = self._out, self._color_out
        with self._lock:
            try:
                render(self._config, record, stream, colors)
                stream.flush()
            except (OSError, ValueError):
                pass

    def flush(self) -> None:
        with self._lock:
            streams = [self._out] if self._out is self._err else [self._out, self._err]
            for stream in streams:
                try:
                    stream.flush()
                except (OSError, ValueError):
                    pass


class TestLogger(SharedLogger):
    """
    Captures rendered records in memory, optionally echoing them to stdout
    (where a test runner captures them).

    ``capacity`` bounds the buffer: the oldest entries are dropped first.
    """
    __test__ = False  # not a pytest test class

    def __init__(
        self,
        level: LevelFilter | int | str,
        config: Config | None = None,
        capacity: int | None = None,
        echo: bool = False,
    ):
        super().__init__(level, config)
        self._entries: deque[tuple[Record, str]] = deque(maxlen=capacity)
        self.echo = echo
        self._lock = threading.Lock()

    def emit(self, record: Record) -> None:
        if not self.is_enabled(record.level):
            return
        text = render_to_string(self._config, record)
        if not text:
            return
        with self._lock:
            self._entries.append((record, text))
            if self.echo:
                try:
                    sys.stdout.write(text)
                except (OSError, ValueError):
                    pass

    @property
    def records(self) -> list[Record]:
        with self._lock:
            return [record for record, _ in self._entries]

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return [text for _, text in self._entries]

    @property
    def output(self) -> str:
        return "".join(self.lines)

    @property
    def count(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
