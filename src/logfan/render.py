"""
Record renderer.

Turns one Record into text on a writable sink according to a Config. The
sink only needs a ``write(str)`` method. Any exception raised by the sink
aborts rendering and propagates; whatever was already written stays written.
"""

import io
import re
import threading
from datetime import timezone
from email.utils import format_datetime
from typing import Protocol

from logfan import markup
from logfan.colors import RESET
from logfan.config import Config, FilterSubject, ThreadMode
from logfan.layout import FieldKind, FormatPart
from logfan.records import LevelFilter, Record, passes

UNKNOWN = "<unknown>"

# Names threading assigns when the caller gives none: "Thread-3", "Thread-3 (worker)"
_GENERATED_THREAD_NAME = re.compile(r"^Thread-\d+( \(.*\))?$")


class Writable(Protocol):
    def write(self, text: str) -> object: ...


# ── Filtering ─────────────────────────────────────────────────────────

def filter_subject(config: Config, record: Record) -> str:
    if config.filter_subject == FilterSubject.MODULE_PATH and record.module_path is not None:
        return record.module_path
    return record.target


def should_skip(config: Config, record: Record) -> bool:
    """
    True if the allow/deny lists suppress this record entirely.

    Allow is checked first: with a non-empty allow list the subject must start
    with one of its entries. Then any deny entry that prefixes the subject
    suppresses it.
    """
    subject = filter_subject(config, record)
    if config.filter_allow and not any(subject.startswith(p) for p in config.filter_allow):
        return True
    if config.filter_ignore and any(subject.startswith(p) for p in config.filter_ignore):
        return True
    return False


def part_threshold(config: Config, part: FormatPart) -> LevelFilter:
    """Effective threshold of a part: its own, or the Config's for its field."""
    if part.threshold is not None:
        return part.threshold
    if part.kind in (FieldKind.LITERAL, FieldKind.MESSAGE):
        return LevelFilter.ERROR
    return getattr(config, part.kind.value)


def is_visible(config: Config, part: FormatPart, record: Record) -> bool:
    return passes(part_threshold(config, part), record.level)


# ── Field text ────────────────────────────────────────────────────────

def format_time(config: Config, record: Record) -> str:
    ts = record.timestamp
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(config.tz)
    style = config.time_format.style
    if style == "rfc2822":
        return format_datetime(ts)
    if style == "rfc3339":
        return ts.isoformat()
    return ts.strftime(config.time_format.pattern)


def thread_label(mode: ThreadMode, thread: threading.Thread | None = None) -> str:
    thread = thread or threading.current_thread()
    ident = str(thread.ident if thread.ident is not None else threading.get_ident())
    if mode == ThreadMode.IDS:
        return ident
    if mode == ThreadMode.NAMES:
        return thread.name
    if thread.name and not _GENERATED_THREAD_NAME.match(thread.name):
        return thread.name
    return ident


def format_location(record: Record) -> str:
    file = record.file or UNKNOWN
    line = UNKNOWN if record.line is None else str(record.line)
    return f"{file}:{line}"


def field_text(config: Config, part: FormatPart, record: Record) -> str:
    """Plain (uncolored) text of one part, without its decoration."""
    kind = part.kind
    if kind == FieldKind.TIME:
        return format_time(config, record)
    if kind == FieldKind.LEVEL:
        return config.level_padding.apply(record.level.name)
    if kind == FieldKind.THREAD:
        return config.thread_padding.apply(thread_label(config.thread_mode))
    if kind == FieldKind.TARGET:
        return config.target_padding.apply(record.target)
    if kind == FieldKind.MODULE_PATH:
        return config.target_padding.apply(record.module_path or record.target)
    if kind == FieldKind.LOCATION:
        return format_location(record)
    if kind == FieldKind.MESSAGE:
        return record.message
    return part.text


# ── Rendering ─────────────────────────────────────────────────────────

def render(config: Config, record: Record, out: Writable, colors: bool = False) -> None:
    """
    Write ``record`` to ``out``.

    Parts are visited in format order. A visible part marked ``spaced`` is
    separated from the previously written part by exactly one space, on
    whichever side it has a neighbour. The message part is terminated by
    the configured line ending; parts after it start a fresh line and are
    never preceded by an automatic space. With ``colors`` the level text is
    wrapped in the escape codes of its assigned color. With ``config.markup``
    inline tags in the message become escapes, or are stripped without
    ``colors``.
    """
    if should_skip(config, record):
        return

    wrote = False
    last_spaced = False
    for part in config.format:
        if not is_visible(config, part, record):
            continue
        text = field_text(config, part, record)
        if part.kind == FieldKind.MESSAGE and config.markup:
            text = markup.colorize(text) if colors else markup.strip(text)

        if wrote and (part.spaced or last_spaced):
            out.write(" ")
        if part.prefix:
            out.write(part.prefix)

        color = None
        if colors and part.kind == FieldKind.LEVEL:
            color = config.level_color(record.level)
        if color is not None:
            out.write(color.sgr)
            out.write(text)
            out.write(RESET)
        else:
            out.write(text)

        if part.suffix:
            out.write(part.suffix)
        if part.kind == FieldKind.MESSAGE:
            out.write(config.line_ending.value)
            wrote = False
            last_spaced = False
            continue

        wrote = True
        last_spaced = part.spaced


def render_to_string(config: Config, record: Record, colors: bool = False) -> str:
    """Render into a fresh string. Returns '' for a filtered record."""
    buffer = io.StringIO()
    render(config, record, buffer, colors)
    return buffer.getvalue()
