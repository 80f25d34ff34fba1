"""
Log records and level definitions.

Levels are ordered by verbosity: ERROR (1) is the most severe, TRACE (5)
the most verbose. A record passes a threshold when
``record.level <= threshold``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class Level(IntEnum):
    """Severity of a single record."""
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Resolve level from string name, case-insensitive."""
        name_upper = name.upper()
        if name_upper == "WARNING":
            name_upper = "WARN"
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )


class LevelFilter(IntEnum):
    """
    Threshold used by adapters and format fields.

    OFF disables unconditionally. ALL is the same value as TRACE and admits
    every record.
    """
    OFF = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5
    ALL = 5

    @classmethod
    def from_name(cls, name: str) -> "LevelFilter":
        """Resolve filter from string name, case-insensitive."""
        name_upper = name.upper()
        if name_upper == "WARNING":
            name_upper = "WARN"
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown level filter '{name}'. "
                f"Valid filters: OFF, ERROR, WARN, INFO, DEBUG, TRACE, ALL"
            )

    @classmethod
    def from_value(cls, value: "int | str | LevelFilter") -> "LevelFilter":
        """Resolve filter from int or string."""
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(
                    f"No level filter with value {value}. "
                    f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
                )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


LEVEL_NAMES: dict[int, str] = {member.value: member.name for member in Level}


def level_name(level: int) -> str:
    """Get display name for a level value. Falls back to numeric string."""
    return LEVEL_NAMES.get(level, str(level))


def passes(threshold: int, level: int) -> bool:
    """True if a field or sink at ``threshold`` is active for ``level``."""
    return threshold != LevelFilter.OFF and threshold <= level


@dataclass(frozen=True)
class Record:
    """
    Immutable log record. Produced by calling code, consumed by adapters.

    ``target`` is the hierarchical origin (``app.net``) used for allow/deny
    filtering; ``module_path`` is the code module when it differs.
    ``timestamp`` is captured at creation so rendering the same record twice
    yields the same bytes.
    """
    level: Level
    message: str
    target: str = ""
    module_path: str | None = None
    file: str | None = None
    line: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not isinstance(self.level, Level):
            object.__setattr__(self, "level", Level(self.level))

    @classmethod
    def create(
        cls,
        level: int | str,
        message: str,
        target: str = "",
        module_path: str | None = None,
        file: str | None = None,
        line: int | None = None,
    ) -> "Record":
        """Factory method with auto-timestamp and level name resolution."""
        if isinstance(level, str):
            resolved = Level.from_name(level)
        else:
            resolved = Level(level)
        return cls(
            level=resolved,
            message=message,
            target=target,
            module_path=module_path,
            file=file,
            line=line,
        )

    @property
    def level_name(self) -> str:
        return level_name(self.level)
