from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from termplot.errors import ColorParseError


RESET = "\x1b[0m"


class AnsiColor(Enum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    BRIGHT_BLACK = 90
    BRIGHT_RED = 91
    BRIGHT_GREEN = 92
    BRIGHT_YELLOW = 93
    BRIGHT_BLUE = 94
    BRIGHT_MAGENTA = 95
    BRIGHT_CYAN = 96
    BRIGHT_WHITE = 97


@dataclass(frozen=True)
class TrueColor:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"{name} must be an int in 0..255, got {value!r}")


Color: TypeAlias = AnsiColor | TrueColor


class ColorBlend(Enum):
    """How a pixel write treats a cell that already holds a color."""

    OVERWRITE = "overwrite"
    KEEP_FIRST = "keep_first"


def sgr_sequence(color: Color) -> str:
    if isinstance(color, AnsiColor):
        return f"\x1b[{color.value}m"
    if isinstance(color, TrueColor):
        return f"\x1b[38;2;{color.r};{color.g};{color.b}m"
    raise TypeError(f"Unsupported color: {type(color)!r}")


def parse_color(text: str) -> Color:
    """
    Parse a color name or hex string.
    Accepts: 'red', 'bright-blue', 'Bright Cyan', '#RRGGBB' or 'RRGGBB'.
    """
    if not isinstance(text, str):
        raise ColorParseError(f"color must be a string, got {type(text)!r}")
    raw = text.strip()
    if not raw:
        raise ColorParseError("color must be a non-empty string")

    name = raw.upper().replace("-", "_").replace(" ", "_")
    if name in AnsiColor.__members__:
        return AnsiColor[name]

    val = raw.lstrip("#")
    if len(val) != 6:
        raise ColorParseError(f"unknown color: {text!r}")
    try:
        return TrueColor(int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
    except ValueError as exc:
        raise ColorParseError(f"invalid hex color: {text!r}") from exc
