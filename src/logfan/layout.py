"""
Field layout: which parts of a line are written, and in what order.

A ``Format`` is an ordered tuple of ``FormatPart``. Each part names a field
kind and carries its own decoration (``prefix``/``suffix``, written only when
the part renders) and whether it is separated from its neighbours by an
automatically managed single space.

Default layout:
    12:00:00 [ERROR] (140213) app.net: [net.py:42] connection refused
"""

from dataclasses import dataclass
from enum import Enum

from logfan.records import LevelFilter


class FieldKind(str, Enum):
    TIME = "time"
    LEVEL = "level"
    THREAD = "thread"
    TARGET = "target"
    LOCATION = "location"
    MODULE_PATH = "module_path"
    LITERAL = "literal"
    MESSAGE = "message"


@dataclass(frozen=True)
class FormatPart:
    """
    One renderable part of a line.

    ``threshold`` None means the part follows the per-field threshold held by
    the Config (time, level, thread, ...). Literal and message parts have no
    Config threshold and default to ERROR, i.e. always shown.
    """
    kind: FieldKind
    threshold: LevelFilter | None = None
    spaced: bool = False
    text: str = ""
    prefix: str = ""
    suffix: str = ""


@dataclass(frozen=True)
class Format:
    parts: tuple[FormatPart, ...] = ()

    def __iter__(self):
        return iter(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def kinds(self) -> list[FieldKind]:
        return [p.kind for p in self.parts]

    @classmethod
    def default(cls) -> "Format":
        return (
            FormatBuilder()
            .time(spaced=True)
            .level(spaced=True, prefix="[", suffix="]")
            .thread(spaced=True, prefix="(", suffix=")")
            .target(spaced=True, suffix=":")
            .location(spaced=True, prefix="[", suffix="]")
            .message(spaced=True)
            .build()
        )


class FormatBuilder:
    """
    Incremental builder for a Format.

    Usage:
        fmt = (FormatBuilder()
               .time(spaced=True)
               .literal("<").level().literal(">")
               .message(spaced=True)
               .build())
    """

    def __init__(self) -> None:
        self._parts: list[FormatPart] = []

    def _push(self, part: FormatPart) -> "FormatBuilder":
        self._parts.append(part)
        return self

    def time(self, threshold: LevelFilter | None = None, *, spaced: bool = False,
             prefix: str = "", suffix: str = "") -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.TIME, threshold, spaced, "", prefix, suffix))

    def level(self, threshold: LevelFilter | None = None, *, spaced: bool = False,
              prefix: str = "", suffix: str = "") -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.LEVEL, threshold, spaced, "", prefix, suffix))

    def thread(self, threshold: LevelFilter | None = None, *, spaced: bool = False,
               prefix: str = "", suffix: str = "") -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.THREAD, threshold, spaced, "", prefix, suffix))

    def target(self, threshold: LevelFilter | None = None, *, spaced: bool = False,
               prefix: str = "", suffix: str = "") -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.TARGET, threshold, spaced, "", prefix, suffix))

    def location(self, threshold: LevelFilter | None = None, *, spaced: bool = False,
                 prefix: str = "", suffix: str = "") -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.LOCATION, threshold, spaced, "", prefix, suffix))

    def module_path(self, threshold: LevelFilter | None = None, *, spaced: bool = False,
                    prefix: str = "", suffix: str = "") -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.MODULE_PATH, threshold, spaced, "", prefix, suffix))

    def message(self, threshold: LevelFilter = LevelFilter.ERROR, *,
                spaced: bool = False) -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.MESSAGE, threshold, spaced))

    def literal(self, text: str, threshold: LevelFilter = LevelFilter.ERROR, *,
                spaced: bool = False) -> "FormatBuilder":
        return self._push(FormatPart(FieldKind.LITERAL, threshold, spaced, text))

    def build(self) -> Format:
        return Format(tuple(self._parts))
