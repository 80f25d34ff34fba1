"""
Declarative logging configuration.

Loads a YAML (or dict) description of one or more destinations, validates
it with pydantic and builds the adapters.

Example:
    loggers:
      - type: term
        level: warn
        mode: mixed
        format:
          level_padding: {side: left, width: 5}
          colors: {error: bright-red, info: green}
      - type: file
        level: debug
        path: logs/app.log
        format:
          time_format: rfc3339
          location_level: debug
          filter_ignore: [urllib3]
"""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

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
from logfan.colors import Color
from logfan.combined import CombinedLogger
from logfan.config import (
    Config,
    ConfigBuilder,
    FilterSubject,
    LineEnding,
    PadSide,
    Padding,
    ThreadMode,
)
from logfan.errors import TerminalUnavailableError
from logfan.records import Level, LevelFilter


# ═══════════════════════════════════════════════════════════════════
#  Format
# ═══════════════════════════════════════════════════════════════════

class PaddingSettings(BaseModel):
    side: PadSide = PadSide.OFF
    width: int = Field(5, ge=0)

    def to_padding(self) -> Padding:
        return Padding(self.side, self.width)


class FormatSettings(BaseModel):
    time_level: Optional[str] = None
    level_level: Optional[str] = None
    thread_level: Optional[str] = None
    target_level: Optional[str] = None
    location_level: Optional[str] = None
    module_path_level: Optional[str] = None
    level_padding: Optional[PaddingSettings] = None
    thread_padding: Optional[PaddingSettings] = None
    target_padding: Optional[PaddingSettings] = None
    thread_mode: Optional[ThreadMode] = None
    time_format: Optional[str] = None          # 'rfc2822', 'rfc3339' or a strftime pattern
    time_offset_minutes: Optional[int] = None
    local_time: bool = False
    line_ending: Optional[str] = None          # LF, CR, CRLF, VT, FF, NEL, LS, PS
    colors: Optional[dict[str, Optional[str]]] = None
    write_colors: Optional[bool] = None
    markup: Optional[bool] = None
    filter_allow: Optional[list[str]] = None
    filter_ignore: Optional[list[str]] = None
    filter_subject: Optional[FilterSubject] = None

    @field_validator(
        "time_level", "level_level", "thread_level",
        "target_level", "location_level", "module_path_level",
    )
    @classmethod
    def _known_filter(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            LevelFilter.from_name(value)
        return value

    @field_validator("line_ending")
    @classmethod
    def _known_line_ending(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            LineEnding.from_name(value)
        return value

    def to_config(self) -> Config:
        builder = ConfigBuilder()
        thresholds = {
            "time_level": builder.set_time_level,
            "level_level": builder.set_max_level,
            "thread_level": builder.set_thread_level,
            "target_level": builder.set_target_level,
            "location_level": builder.set_location_level,
            "module_path_level": builder.set_module_path_level,
        }
        for key, setter in thresholds.items():
            value = getattr(self, key)
            if value is not None:
                setter(LevelFilter.from_name(value))

        if self.level_padding is not None:
            builder.set_level_padding(self.level_padding.to_padding())
        if self.thread_padding is not None:
            builder.set_thread_padding(self.thread_padding.to_padding())
        if self.target_padding is not None:
            builder.set_target_padding(self.target_padding.to_padding())
        if self.thread_mode is not None:
            builder.set_thread_mode(self.thread_mode)

        if self.time_format == "rfc2822":
            builder.set_time_format_rfc2822()
        elif self.time_format == "rfc3339":
            builder.set_time_format_rfc3339()
        elif self.time_format is not None:
            builder.set_time_format_custom(self.time_format)

        if self.local_time:
            builder.set_time_offset_to_local()
        elif self.time_offset_minutes is not None:
            builder.set_time_offset(timedelta(minutes=self.time_offset_minutes))

        if self.line_ending is not None:
            builder.set_line_ending(LineEnding.from_name(self.line_ending))

        for level, color in (self.colors or {}).items():
            builder.set_level_color(
                Level.from_name(level),
                Color.parse(color) if color else None,
            )
        if self.write_colors is not None:
            builder.set_write_log_enable_colors(self.write_colors)
        if self.markup is not None:
            builder.set_markup(self.markup)

        for prefix in self.filter_allow or []:
            builder.add_filter_allow(prefix)
        for prefix in self.filter_ignore or []:
            builder.add_filter_ignore(prefix)
        if self.filter_subject is not None:
            builder.set_filter_subject(self.filter_subject)

        return builder.build()


# ═══════════════════════════════════════════════════════════════════
#  Destinations
# ═══════════════════════════════════════════════════════════════════

class LoggerSettings(BaseModel):
    type: Literal["simple", "term", "write", "file", "test"]
    level: str = "info"
    format: FormatSettings = Field(default_factory=FormatSettings)
    mode: Optional[TerminalMode] = None         # term
    color: Optional[ColorChoice] = None         # term
    fallback: bool = True                       # term: use simple when no terminal
    path: Optional[str] = None                  # file
    append: bool = True                         # file
    stream: Optional[Literal["stdout", "stderr"]] = None  # write
    capacity: Optional[int] = None              # test

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        LevelFilter.from_name(value)
        return value

    def build(self) -> SharedLogger:
        level = LevelFilter.from_name(self.level)
        config = self.format.to_config()

        if self.type == "simple":
            return SimpleLogger(level, config)
        elif self.type == "term":
            try:
                return TermLogger(
                    level,
                    config,
                    mode=self.mode or TerminalMode.MIXED,
                    color_choice=self.color or ColorChoice.AUTO,
                )
            except TerminalUnavailableError:
                if not self.fallback:
                    raise
                return SimpleLogger(level, config)
        elif self.type == "write":
            stream = sys.stderr if self.stream == "stderr" else sys.stdout
            return WriteLogger(level, config, stream)
        elif self.type == "file":
            if not self.path:
                raise ValueError("file logger requires 'path'")
            return FileLogger(level, config, self.path, mode="a" if self.append else "w")
        elif self.type == "test":
            return TestLogger(level, config, capacity=self.capacity)
        raise ValueError(f"Unknown logger type '{self.type}'")


class LoggingSettings(BaseModel):
    """Top-level document: the list of destinations to combine."""

    loggers: list[LoggerSettings] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> LoggingSettings:
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> LoggingSettings:
        """Load and validate from a YAML string."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> LoggingSettings:
        return cls.model_validate(data)

    def build(self) -> CombinedLogger:
        if not self.loggers:
            raise ValueError("No loggers configured")
        return CombinedLogger(entry.build() for entry in self.loggers)

    def install(self) -> CombinedLogger:
        """Build and install process-wide."""
        from logfan import core

        combined = self.build()
        core.set_logger(combined)
        return combined
