"""
Format configuration.

``Config`` is an immutable snapshot describing how a record is rendered:
per-field thresholds, field order, padding, time style and offset, thread
display, line ending, level colors and module allow/deny lists.
``ConfigBuilder`` stages changes and produces snapshots.

Every field becomes visible once its threshold is reached and stays visible
for all more verbose levels: a field at DEBUG shows on DEBUG and TRACE
records. Use LevelFilter.ERROR to always show a field, LevelFilter.OFF to
never show it.

Usage:
    config = (ConfigBuilder()
              .set_thread_level(LevelFilter.OFF)
              .set_level_padding(Padding.left())
              .add_filter_allow("app.net")
              .build())
"""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum

from logfan.colors import BLUE, CYAN, RED, WHITE, YELLOW, Color
from logfan.errors import OffsetUnavailableError
from logfan.layout import Format
from logfan.records import Level, LevelFilter

LEVEL_WIDTH = 5


class PadSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    OFF = "off"


@dataclass(frozen=True)
class Padding:
    """Spaces added on one side until the text is ``width`` characters wide."""
    side: PadSide = PadSide.OFF
    width: int = 0

    @classmethod
    def left(cls, width: int = LEVEL_WIDTH) -> "Padding":
        return cls(PadSide.LEFT, width)

    @classmethod
    def right(cls, width: int = LEVEL_WIDTH) -> "Padding":
        return cls(PadSide.RIGHT, width)

    def apply(self, text: str) -> str:
        """Pad ``text``. Never truncates."""
        if self.side is PadSide.LEFT:
            return text.rjust(self.width)
        if self.side is PadSide.RIGHT:
            return text.ljust(self.width)
        return text


Padding.OFF = Padding()


class ThreadMode(str, Enum):
    IDS = "ids"
    NAMES = "names"
    BOTH = "both"


class FilterSubject(str, Enum):
    TARGET = "target"
    MODULE_PATH = "module_path"


class LineEnding(str, Enum):
    LF = "\n"
    CR = "\r"
    CRLF = "\r\n"
    VT = "\x0b"
    FF = "\x0c"
    NEL = "\u0085"
    LS = "\u2028"
    PS = "\u2029"

    @classmethod
    def from_name(cls, name: str) -> "LineEnding":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown line ending '{name}'. "
                f"Valid endings: {', '.join(m.name for m in cls)}"
            )


@dataclass(frozen=True)
class TimeFormat:
    """Either a strftime pattern or one of the RFC 2822 / RFC 3339 styles."""
    style: str = "custom"
    pattern: str = "%H:%M:%S"

    @classmethod
    def custom(cls, pattern: str) -> "TimeFormat":
        """
        Build a custom format. The pattern is checked here so that a bad
        pattern fails at configuration time, not on the first log call.
        """
        if not isinstance(pattern, str):
            raise ValueError(f"Time pattern must be a str, got {type(pattern).__name__}")
        try:
            datetime(2000, 1, 1, tzinfo=timezone.utc).strftime(pattern)
        except (ValueError, UnicodeError) as exc:
            raise ValueError(f"Invalid time pattern {pattern!r}: {exc}") from exc
        return cls("custom", pattern)


TimeFormat.RFC2822 = TimeFormat("rfc2822", "")
TimeFormat.RFC3339 = TimeFormat("rfc3339", "")

DEFAULT_LEVEL_COLORS: tuple[Color | None, ...] = (
    None,    # default foreground
    RED,     # ERROR
    YELLOW,  # WARN
    BLUE,    # INFO
    CYAN,    # DEBUG
    WHITE,   # TRACE
)


@dataclass(frozen=True)
class Config:
    """
    Immutable rendering configuration, shared read-only between threads.

    Construct using ``Config()`` for the defaults or ``ConfigBuilder``.
    """
    time: LevelFilter = LevelFilter.ERROR
    level: LevelFilter = LevelFilter.ERROR
    thread: LevelFilter = LevelFilter.DEBUG
    target: LevelFilter = LevelFilter.DEBUG
    location: LevelFilter = LevelFilter.TRACE
    module_path: LevelFilter = LevelFilter.DEBUG
    level_padding: Padding = Padding.OFF
    thread_padding: Padding = Padding.OFF
    target_padding: Padding = Padding.OFF
    thread_mode: ThreadMode = ThreadMode.IDS
    time_format: TimeFormat = TimeFormat()
    time_offset: timedelta = timedelta(0)
    line_ending: LineEnding = LineEnding.LF
    level_colors: tuple[Color | None, ...] = DEFAULT_LEVEL_COLORS
    write_log_enable_colors: bool = False
    markup: bool = False
    filter_allow: tuple[str, ...] = ()
    filter_ignore: tuple[str, ...] = ()
    filter_subject: FilterSubject = FilterSubject.TARGET
    format: Format = field(default_factory=Format.default)

    def level_color(self, level: Level) -> Color | None:
        """Color assigned to ``level``; slot 0 is the default foreground."""
        assert 1 <= level < len(self.level_colors), f"no color slot for level {level!r}"
        return self.level_colors[level]

    @property
    def tz(self) -> timezone:
        return timezone(self.time_offset)


class ConfigBuilder:
    """
    Builder for Config. Every setter replaces one knob and returns the
    builder, so calls chain. ``build()`` returns an independent snapshot.
    """

    def __init__(self, base: Config | None = None) -> None:
        self._config = base if base is not None else Config()

    def _set(self, **changes) -> "ConfigBuilder":
        self._config = replace(self._config, **changes)
        return self

    # ── Field thresholds ──────────────────────────────────────────

    def set_max_level(self, level: LevelFilter) -> "ConfigBuilder":
        """Threshold for the level field itself (default ERROR)."""
        return self._set(level=LevelFilter(level))

    def set_time_level(self, level: LevelFilter) -> "ConfigBuilder":
        return self._set(time=LevelFilter(level))

    def set_thread_level(self, level: LevelFilter) -> "ConfigBuilder":
        return self._set(thread=LevelFilter(level))

    def set_target_level(self, level: LevelFilter) -> "ConfigBuilder":
        return self._set(target=LevelFilter(level))

    def set_location_level(self, level: LevelFilter) -> "ConfigBuilder":
        return self._set(location=LevelFilter(level))

    def set_module_path_level(self, level: LevelFilter) -> "ConfigBuilder":
        return self._set(module_path=LevelFilter(level))

    # ── Layout ────────────────────────────────────────────────────

    def set_format(self, fmt: Format) -> "ConfigBuilder":
        return self._set(format=fmt)

    def set_level_padding(self, padding: Padding) -> "ConfigBuilder":
        return self._set(level_padding=padding)

    def set_thread_padding(self, padding: Padding) -> "ConfigBuilder":
        return self._set(thread_padding=padding)

    def set_target_padding(self, padding: Padding) -> "ConfigBuilder":
        return self._set(target_padding=padding)

    def set_thread_mode(self, mode: ThreadMode) -> "ConfigBuilder":
        return self._set(thread_mode=ThreadMode(mode))

    def set_line_ending(self, ending: LineEnding) -> "ConfigBuilder":
        return self._set(line_ending=LineEnding(ending))

    # ── Colors ────────────────────────────────────────────────────

    def set_level_color(self, level: Level, color: Color | None) -> "ConfigBuilder":
        """Color for ``level``, or None to use the default foreground."""
        level = Level(level)
        colors = list(self._config.level_colors)
        colors[level] = color
        return self._set(level_colors=tuple(colors))

    def set_write_log_enable_colors(self, enabled: bool) -> "ConfigBuilder":
        """Emit ANSI colors from write-based adapters too (default off)."""
        return self._set(write_log_enable_colors=bool(enabled))

    def set_markup(self, enabled: bool) -> "ConfigBuilder":
        """
        Treat inline tags in messages (``<red>failed</>``) as markup: colored
        where the adapter writes colors, stripped where it does not.
        """
        return self._set(markup=bool(enabled))

    # ── Time ──────────────────────────────────────────────────────

    def set_time_format_custom(self, pattern: str) -> "ConfigBuilder":
        return self._set(time_format=TimeFormat.custom(pattern))

    def set_time_format_rfc2822(self) -> "ConfigBuilder":
        return self._set(time_format=TimeFormat.RFC2822)

    def set_time_format_rfc3339(self) -> "ConfigBuilder":
        return self._set(time_format=TimeFormat.RFC3339)

    def set_time_offset(self, offset: timedelta) -> "ConfigBuilder":
        """Fixed offset from UTC used when rendering time (default UTC)."""
        if not -timedelta(hours=24) < offset < timedelta(hours=24):
            raise ValueError(f"UTC offset out of range: {offset}")
        return self._set(time_offset=offset)

    def set_time_offset_to_local(self, allow_multithreaded: bool = False) -> "ConfigBuilder":
        """
        Use the host's current UTC offset.

        Reading the host timezone is not safe once other threads may be
        changing it, so this refuses to run while more than one thread is
        alive unless ``allow_multithreaded`` is set. Raises
        OffsetUnavailableError and leaves the builder unchanged on failure.
        """
        if threading.active_count() > 1 and not allow_multithreaded:
            raise OffsetUnavailableError(
                f"{threading.active_count()} threads are running; "
                f"the local offset cannot be determined soundly"
            )
        try:
            offset = datetime.now().astimezone().utcoffset()
        except (OSError, OverflowError, ValueError) as exc:
            raise OffsetUnavailableError(f"local offset lookup failed: {exc}") from exc
        if offset is None:
            raise OffsetUnavailableError("host reported no UTC offset")
        return self._set(time_offset=offset)

    # ── Module filters ────────────────────────────────────────────

    def add_filter_allow(self, prefix: str) -> "ConfigBuilder":
        """
        Only records whose target starts with one of the allowed prefixes are
        written, once any prefix is given.
        """
        return self._set(filter_allow=self._config.filter_allow + (prefix,))

    def clear_filter_allow(self) -> "ConfigBuilder":
        return self._set(filter_allow=())

    def add_filter_ignore(self, prefix: str) -> "ConfigBuilder":
        """Records whose target starts with an ignored prefix are dropped."""
        return self._set(filter_ignore=self._config.filter_ignore + (prefix,))

    def clear_filter_ignore(self) -> "ConfigBuilder":
        return self._set(filter_ignore=())

    def set_filter_subject(self, subject: FilterSubject) -> "ConfigBuilder":
        """Match filters against the record target (default) or module path."""
        return self._set(filter_subject=FilterSubject(subject))

    def build(self) -> Config:
        return replace(self._config)
