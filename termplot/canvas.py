from __future__ import annotations

import io

import numpy as np

from termplot.color import Color, ColorBlend
from termplot.raster import bresenham, clip_segment, dot_mask, draw_circle, fill_circle
from termplot.raster.braille import CELL_PIXEL_HEIGHT, CELL_PIXEL_WIDTH
from termplot.render import TextWriter, glyph_rows, write_frame


class BrailleCanvas:
    """Character-cell canvas packing a 2x4 dot grid per cell into Braille glyphs.

    Two addressing modes share one implementation: screen coordinates have the
    origin at the top-left with y growing downward, cartesian coordinates have
    the origin at the bottom-left with y growing upward. Anything outside
    [0, pixel_width()) x [0, pixel_height()) is ignored.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        self._width = int(width)
        self._height = int(height)
        self.blend_mode = ColorBlend.OVERWRITE
        size = self._width * self._height
        self._buffer = np.zeros(size, dtype=np.uint8)
        self._colors: list[Color | None] = [None] * size
        self._text_layer: list[str | None] = [None] * size

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def pixel_width(self) -> int:
        return self._width * CELL_PIXEL_WIDTH

    def pixel_height(self) -> int:
        return self._height * CELL_PIXEL_HEIGHT

    def clear(self) -> None:
        self._buffer.fill(0)
        size = len(self._colors)
        self._colors[:] = [None] * size
        self._text_layer[:] = [None] * size

    # --- inspection ---

    def cell_mask(self, col: int, row: int) -> int:
        return int(self._buffer[self._cell_index(col, row)])

    def cell_color(self, col: int, row: int) -> Color | None:
        return self._colors[self._cell_index(col, row)]

    def cell_char(self, col: int, row: int) -> str | None:
        return self._text_layer[self._cell_index(col, row)]

    def get_pixel_screen(self, x: int, y: int) -> bool:
        if not self._in_bounds(x, y):
            return False
        index = (y // CELL_PIXEL_HEIGHT) * self._width + (x // CELL_PIXEL_WIDTH)
        return bool(self._buffer[index] & dot_mask(x % CELL_PIXEL_WIDTH, y % CELL_PIXEL_HEIGHT))

    def get_pixel(self, x: int, y: int) -> bool:
        return self.get_pixel_screen(x, self._flip_y(y))

    # --- pixels ---

    def set_pixel(self, x: int, y: int, color: Color | None = None) -> None:
        self._set_pixel_impl(x, self._flip_y(y), color)

    def set_pixel_screen(self, x: int, y: int, color: Color | None = None) -> None:
        self._set_pixel_impl(x, y, color)

    def unset_pixel(self, x: int, y: int) -> None:
        self._unset_pixel_impl(x, self._flip_y(y))

    def unset_pixel_screen(self, x: int, y: int) -> None:
        self._unset_pixel_impl(x, y)

    def toggle_pixel(self, x: int, y: int, color: Color | None = None) -> None:
        self._toggle_pixel_impl(x, self._flip_y(y), color)

    def toggle_pixel_screen(self, x: int, y: int, color: Color | None = None) -> None:
        self._toggle_pixel_impl(x, y, color)

    # --- lines and shapes ---

    def line(self, x0: int, y0: int, x1: int, y1: int, color: Color | None = None) -> None:
        self._line_impl(int(x0), int(y0), int(x1), int(y1), color, cartesian=True)

    def line_screen(self, x0: int, y0: int, x1: int, y1: int, color: Color | None = None) -> None:
        self._line_impl(int(x0), int(y0), int(x1), int(y1), color, cartesian=False)

    def rect(self, x: int, y: int, w: int, h: int, color: Color | None = None) -> None:
        """Stroke a rectangle whose top-left corner is (x, y) in screen coordinates."""
        self._rect_impl(int(x), int(y), int(w), int(h), color, cartesian=False)

    def rect_filled(self, x: int, y: int, w: int, h: int, color: Color | None = None) -> None:
        self._rect_filled_impl(int(x), int(y), int(w), int(h), color, cartesian=False)

    def rect_cartesian(self, x: int, y: int, w: int, h: int, color: Color | None = None) -> None:
        """Stroke a rectangle whose bottom-left corner is (x, y) in cartesian coordinates."""
        self._rect_impl(int(x), int(y), int(w), int(h), color, cartesian=True)

    def rect_filled_cartesian(self, x: int, y: int, w: int, h: int, color: Color | None = None) -> None:
        self._rect_filled_impl(int(x), int(y), int(w), int(h), color, cartesian=True)

    def circle(self, xc: int, yc: int, r: int, color: Color | None = None) -> None:
        draw_circle(lambda px, py: self.set_pixel(px, py, color), int(xc), int(yc), int(r))

    def circle_screen(self, xc: int, yc: int, r: int, color: Color | None = None) -> None:
        draw_circle(lambda px, py: self.set_pixel_screen(px, py, color), int(xc), int(yc), int(r))

    def circle_filled(self, xc: int, yc: int, r: int, color: Color | None = None) -> None:
        fill_circle(lambda x0, y0, x1, y1: self.line(x0, y0, x1, y1, color), int(xc), int(yc), int(r))

    def circle_filled_screen(self, xc: int, yc: int, r: int, color: Color | None = None) -> None:
        fill_circle(lambda x0, y0, x1, y1: self.line_screen(x0, y0, x1, y1, color), int(xc), int(yc), int(r))

    # --- text ---

    def set_char(self, col: int, row: int, ch: str, color: Color | None = None) -> None:
        """Place a character at a cell; row 0 is the bottom text row."""
        self._set_char_impl(col, self._height - 1 - row, ch, color)

    def set_char_screen(self, col: int, row: int, ch: str, color: Color | None = None) -> None:
        self._set_char_impl(col, row, ch, color)

    # --- rendering ---

    def render(self) -> str:
        return self.render_with_options(True, None)

    def render_with_options(self, show_border: bool, title: str | None = None) -> str:
        out = io.StringIO()
        self.render_to(out, show_border, title)
        return out.getvalue()

    def render_to(self, sink: TextWriter, show_border: bool = True, title: str | None = None) -> None:
        """Write the frame into a caller-owned sink; raises RenderSinkError if the sink rejects a write."""
        write_frame(
            sink,
            self._buffer.tolist(),
            self._colors,
            self._text_layer,
            self._width,
            self._height,
            show_border=show_border,
            title=title,
        )

    def render_no_color(self) -> str:
        return glyph_rows(self._buffer.tolist(), self._width, self._height)

    # --- internals ---

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.pixel_width() and 0 <= y < self.pixel_height()

    def _flip_y(self, y: int) -> int:
        return self.pixel_height() - 1 - y

    def _cell_index(self, col: int, row: int) -> int:
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise IndexError(f"cell out of range: ({col}, {row})")
        return row * self._width + col

    def _set_pixel_impl(self, x: int, y: int, color: Color | None) -> None:
        if not self._in_bounds(x, y):
            return
        index = (y // CELL_PIXEL_HEIGHT) * self._width + (x // CELL_PIXEL_WIDTH)
        self._buffer[index] |= dot_mask(x % CELL_PIXEL_WIDTH, y % CELL_PIXEL_HEIGHT)

        if color is None:
            return
        if self.blend_mode is ColorBlend.OVERWRITE:
            self._colors[index] = color
        elif self.blend_mode is ColorBlend.KEEP_FIRST:
            if self._colors[index] is None:
                self._colors[index] = color
        else:
            raise TypeError(f"Unsupported blend mode: {self.blend_mode!r}")

    def _unset_pixel_impl(self, x: int, y: int) -> None:
        if not self._in_bounds(x, y):
            return
        index = (y // CELL_PIXEL_HEIGHT) * self._width + (x // CELL_PIXEL_WIDTH)
        self._buffer[index] &= ~dot_mask(x % CELL_PIXEL_WIDTH, y % CELL_PIXEL_HEIGHT) & 0xFF
        if self._buffer[index] == 0:
            self._colors[index] = None

    def _toggle_pixel_impl(self, x: int, y: int, color: Color | None) -> None:
        if not self._in_bounds(x, y):
            return
        index = (y // CELL_PIXEL_HEIGHT) * self._width + (x // CELL_PIXEL_WIDTH)
        if self._buffer[index] & dot_mask(x % CELL_PIXEL_WIDTH, y % CELL_PIXEL_HEIGHT):
            self._unset_pixel_impl(x, y)
        else:
            self._set_pixel_impl(x, y, color)

    def _line_impl(self, x0: int, y0: int, x1: int, y1: int, color: Color | None, *, cartesian: bool) -> None:
        clipped = clip_segment(x0, y0, x1, y1, self.pixel_width(), self.pixel_height())
        if clipped is None:
            return
        plot = self.set_pixel if cartesian else self.set_pixel_screen
        for x, y in bresenham(*clipped):
            plot(x, y, color)

    def _rect_impl(self, x: int, y: int, w: int, h: int, color: Color | None, *, cartesian: bool) -> None:
        if w <= 0 or h <= 0:
            return
        x1 = x + w - 1
        y1 = y + h - 1
        self._line_impl(x, y, x1, y, color, cartesian=cartesian)
        self._line_impl(x1, y, x1, y1, color, cartesian=cartesian)
        self._line_impl(x1, y1, x, y1, color, cartesian=cartesian)
        self._line_impl(x, y1, x, y, color, cartesian=cartesian)

    def _rect_filled_impl(self, x: int, y: int, w: int, h: int, color: Color | None, *, cartesian: bool) -> None:
        if w <= 0 or h <= 0:
            return
        for cy in range(y, y + h):
            self._line_impl(x, cy, x + w - 1, cy, color, cartesian=cartesian)

    def _set_char_impl(self, col: int, row: int, ch: str, color: Color | None) -> None:
        if not isinstance(ch, str) or len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        if not (0 <= col < self._width and 0 <= row < self._height):
            return
        index = row * self._width + col
        self._text_layer[index] = ch
        if color is not None:
            self._colors[index] = color
