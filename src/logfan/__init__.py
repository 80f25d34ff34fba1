"""
logfan: multi-destination logging with configurable line layout.

Adapters render records to a console, terminal, file or memory buffer under
their own severity threshold and format configuration. CombinedLogger fans
one record out to several adapters behind a single registration.
"""

from logfan.records import Level, LevelFilter, Record, level_name
from logfan.colors import Color
from logfan.layout import FieldKind, Format, FormatBuilder, FormatPart
from logfan.config import (
    Config,
    ConfigBuilder,
    FilterSubject,
    LineEnding,
    PadSide,
    Padding,
    ThreadMode,
    TimeFormat,
)
from logfan.render import render, render_to_string, should_skip
from logfan.adapters import (
    ColorChoice,
    FileLogger,
    SharedLogger,
    SimpleLogger,
    TerminalMode,
    TermLogger,
    TestLogger,
    WriteLogger,
)
from logfan.combined import CombinedLogger
from logfan.core import Dispatcher, set_logger
from logfan.errors import (
    AlreadyInitializedError,
    LogfanError,
    OffsetUnavailableError,
    TerminalUnavailableError,
)

__version__ = "0.1.0"

__all__ = [
    "Level",
    "LevelFilter",
    "Record",
    "level_name",
    "Color",
    "FieldKind",
    "Format",
    "FormatBuilder",
    "FormatPart",
    "Config",
    "ConfigBuilder",
    "FilterSubject",
    "LineEnding",
    "PadSide",
    "Padding",
    "ThreadMode",
    "TimeFormat",
    "render",
    "render_to_string",
    "should_skip",
    "ColorChoice",
    "FileLogger",
    "SharedLogger",
    "SimpleLogger",
    "TerminalMode",
    "TermLogger",
    "TestLogger",
    "WriteLogger",
    "CombinedLogger",
    "Dispatcher",
    "set_logger",
    "AlreadyInitializedError",
    "LogfanError",
    "OffsetUnavailableError",
    "TerminalUnavailableError",
]
