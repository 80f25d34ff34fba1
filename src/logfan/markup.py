"""
Inline color markup for messages.

    colorize("<red>failed</> after <bold>3</> retries")

Tags: any color name (``<red>``, ``<bright-cyan>``), a background color
(``<on-red>``), styles (``<bold>``, ``<dim>``, ``<italic>``, ``<underline>``),
icons (``<info>``, ``<warn>``, ``<cross>``, ``<tick>``) and ``</>`` or any
closing tag to reset. Unknown tags are left as written.
"""

import re

from logfan.colors import ESC, RESET, Color

_TAG = re.compile(r"<(/?)([a-z0-9_\-]*)>", re.IGNORECASE)

STYLES = {
    "bold": f"{ESC}1m",
    "b": f"{ESC}1m",
    "dim": f"{ESC}2m",
    "italic": f"{ESC}3m",
    "i": f"{ESC}3m",
    "underline": f"{ESC}4m",
    "u": f"{ESC}4m",
}

ICONS = {
    "info": "ℹ",
    "warn": "⚠",
    "cross": "✖",
    "tick": "✔",
}


def _escape_for(name: str) -> str | None:
    key = name.lower()
    if key in STYLES:
        return STYLES[key]
    if key in ICONS:
        return ICONS[key]
    try:
        if key.startswith("on-") or key.startswith("on_"):
            return Color.named(key[3:]).background_sgr
        return Color.named(key).sgr
    except ValueError:
        return None


def colorize(text: str) -> str:
    """Replace markup tags with ANSI escape sequences."""
    def substitute(match: re.Match) -> str:
        closing, name = match.group(1), match.group(2)
        if closing:
            return RESET
        escape = _escape_for(name)
        return match.group(0) if escape is None else escape

    return _TAG.sub(substitute, text)


def strip(text: str) -> str:
    """Remove markup tags, keeping icons. Unknown tags are left as written."""
    def substitute(match: re.Match) -> str:
        closing, name = match.group(1), match.group(2)
        if closing:
            return ""
        if name.lower() in ICONS:
            return ICONS[name.lower()]
        return "" if _escape_for(name) is not None else match.group(0)

    return _TAG.sub(substitute, text)
