"""
Terminal colors.

A ``Color`` renders to an ANSI SGR escape sequence. Named colors use the
standard 8-color codes; ``Color.ansi256`` and ``Color.rgb`` cover extended
palettes for terminals that support them.
"""

from dataclasses import dataclass

ESC = "\033["
RESET = "\033[0m"

_NAMED = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}


@dataclass(frozen=True)
class Color:
    """A foreground color, stored as the SGR parameters that select it."""
    params: str
    label: str = ""

    @property
    def sgr(self) -> str:
        """Escape sequence that sets this color as foreground."""
        return f"{ESC}{self.params}m"

    @property
    def background_sgr(self) -> str:
        """Escape sequence that sets this color as background."""
        head, _, rest = self.params.partition(";")
        if head == "38":
            return f"{ESC}48;{rest}m"
        return f"{ESC}{int(head) + 10}m"

    def paint(self, text: str) -> str:
        return f"{self.sgr}{text}{RESET}"

    @classmethod
    def named(cls, name: str) -> "Color":
        """Resolve ``red``, ``bright-red``, ``bright_red`` and the like."""
        key = name.lower().replace("_", "-")
        bright = key.startswith("bright-")
        if bright:
            key = key[len("bright-"):]
        if key not in _NAMED:
            raise ValueError(
                f"Unknown color '{name}'. "
                f"Valid colors: {', '.join(_NAMED)} (optionally prefixed with 'bright-')"
            )
        code = _NAMED[key] + (60 if bright else 0)
        return cls(str(code), name.lower())

    @classmethod
    def ansi256(cls, index: int) -> "Color":
        if not 0 <= index <= 255:
            raise ValueError(f"ANSI 256 color index out of range: {index}")
        return cls(f"38;5;{index}", f"ansi256({index})")

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Color":
        for component in (r, g, b):
            if not 0 <= component <= 255:
                raise ValueError(f"RGB component out of range: {component}")
        return cls(f"38;2;{r};{g};{b}", f"rgb({r},{g},{b})")

    @classmethod
    def parse(cls, value: str) -> "Color":
        """
        Parse a color spec as written in configuration files:
        ``red``, ``bright-cyan``, ``#ff8800``, ``rgb(255,136,0)`` or ``ansi256(208)``.
        """
        text = value.strip().lower()
        if text.startswith("#") and len(text) == 7:
            return cls.rgb(int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))
        if text.startswith("rgb(") and text.endswith(")"):
            parts = [int(p) for p in text[4:-1].split(",")]
            if len(parts) != 3:
                raise ValueError(f"Invalid rgb color '{value}'")
            return cls.rgb(*parts)
        if text.startswith("ansi256(") and text.endswith(")"):
            return cls.ansi256(int(text[8:-1]))
        return cls.named(text)

    def __str__(self) -> str:
        return self.label or self.params


BLACK = Color.named("black")
RED = Color.named("red")
GREEN = Color.named("green")
YELLOW = Color.named("yellow")
BLUE = Color.named("blue")
MAGENTA = Color.named("magenta")
CYAN = Color.named("cyan")
WHITE = Color.named("white")
