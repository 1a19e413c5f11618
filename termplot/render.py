from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from termplot.color import RESET, Color, sgr_sequence
from termplot.errors import RenderSinkError, SinkFullError
from termplot.raster.braille import GLYPHS


BORDER_TOP_LEFT = "┌"
BORDER_TOP_RIGHT = "┐"
BORDER_BOTTOM_LEFT = "└"
BORDER_BOTTOM_RIGHT = "┘"
BORDER_HORIZONTAL = "─"
BORDER_VERTICAL = "│"


class TextWriter(Protocol):
    def write(self, text: str, /) -> object: ...


class AnsiColorState:
    """Tracks the last emitted foreground color so escapes are only written on change."""

    def __init__(self) -> None:
        self._last: Color | None = None

    @property
    def last(self) -> Color | None:
        return self._last

    def transition(self, color: Color | None) -> str:
        if color == self._last:
            return ""
        self._last = color
        if color is None:
            return RESET
        return sgr_sequence(color)

    def end_row(self) -> str:
        if self._last is None:
            return ""
        self._last = None
        return RESET


class TextSink:
    """Reusable text buffer for render_to; clear() between frames keeps the instance."""

    def __init__(self, max_chars: int | None = None) -> None:
        if max_chars is not None and max_chars < 0:
            raise ValueError("max_chars must be >= 0")
        self._max_chars = max_chars
        self._chunks: list[str] = []
        self._length = 0

    @property
    def max_chars(self) -> int | None:
        return self._max_chars

    def write(self, text: str) -> int:
        size = len(text)
        if self._max_chars is not None and self._length + size > self._max_chars:
            raise SinkFullError(f"sink capacity exceeded: {self._length + size} > {self._max_chars}")
        self._chunks.append(text)
        self._length += size
        return size

    def getvalue(self) -> str:
        if len(self._chunks) > 1:
            self._chunks[:] = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def clear(self) -> None:
        self._chunks.clear()
        self._length = 0

    def __len__(self) -> int:
        return self._length


def center_title(title: str, width: int) -> str:
    pad = max(0, width - len(title))
    left = pad // 2
    return " " * left + title + " " * (pad - left)


def write_frame(
    sink: TextWriter,
    masks: Sequence[int],
    colors: Sequence[Color | None],
    text_layer: Sequence[str | None],
    width: int,
    height: int,
    *,
    show_border: bool = True,
    title: str | None = None,
) -> None:
    try:
        _write_frame(sink, masks, colors, text_layer, width, height, show_border=show_border, title=title)
    except (OSError, ValueError, SinkFullError) as exc:
        raise RenderSinkError(f"render sink rejected write: {exc}") from exc


def _write_frame(
    sink: TextWriter,
    masks: Sequence[int],
    colors: Sequence[Color | None],
    text_layer: Sequence[str | None],
    width: int,
    height: int,
    *,
    show_border: bool,
    title: str | None,
) -> None:
    if title is not None:
        sink.write(center_title(title, width + 2) + "\n")

    if show_border:
        sink.write(BORDER_TOP_LEFT + BORDER_HORIZONTAL * width + BORDER_TOP_RIGHT + "\n")

    state = AnsiColorState()
    parts: list[str] = []
    for row in range(height):
        parts.clear()
        if show_border:
            parts.append(BORDER_VERTICAL)
        base = row * width
        for idx in range(base, base + width):
            ch = text_layer[idx]
            if ch is None:
                ch = GLYPHS[masks[idx]]
            parts.append(state.transition(colors[idx]))
            parts.append(ch)
        parts.append(state.end_row())
        if show_border:
            parts.append(BORDER_VERTICAL)
        parts.append("\n")
        sink.write("".join(parts))

    if show_border:
        sink.write(BORDER_BOTTOM_LEFT + BORDER_HORIZONTAL * width + BORDER_BOTTOM_RIGHT)


def glyph_rows(masks: Sequence[int], width: int, height: int) -> str:
    rows = []
    for row in range(height):
        base = row * width
        rows.append("".join(GLYPHS[m] for m in masks[base : base + width]) + "\n")
    return "".join(rows)
