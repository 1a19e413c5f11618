from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
import math
from typing import Any

import numpy as np

from termplot.canvas import BrailleCanvas
from termplot.color import Color
from termplot.scales import (
    DEFAULT_PADDING,
    DEGENERATE_SPAN,
    Range,
    as_points,
    axis_ticks,
    finite_mask,
    format_ticks_for_axis,
    get_auto_range,
    map_coords,
    map_to_pixels,
    round_half_away,
)


LOGGER = logging.getLogger(__name__)

PIE_RADIUS_FILL = 0.95
X_LABEL_MIN = 0.05
X_LABEL_MAX = 0.90

ValueSeries = Sequence[tuple[float, Color | None]]


class ChartContext:
    """Chart primitives drawn onto an owned BrailleCanvas.

    Each primitive autoranges from its own input; combine primitives with a
    shared scale by mapping data yourself or by using draw_axes/draw_grid.
    """

    def __init__(self, width: int, height: int) -> None:
        self.canvas = BrailleCanvas(width, height)

    @staticmethod
    def get_auto_range(points: Any, padding: float = DEFAULT_PADDING) -> tuple[Range, Range]:
        return get_auto_range(points, padding)

    def map_coords(self, x: float, y: float, x_range: Range, y_range: Range) -> tuple[int, int]:
        return map_coords(x, y, x_range, y_range, self.canvas.pixel_width(), self.canvas.pixel_height())

    # --- charts ---

    def scatter(self, points: Any, color: Color | None = None) -> None:
        arr = as_points(points)
        if arr.shape[0] == 0:
            return
        x_range, y_range = get_auto_range(arr, DEFAULT_PADDING)
        valid = arr[finite_mask(arr)]
        _log_dropped("scatter", arr.shape[0] - valid.shape[0])
        px, py, ok = self._to_pixels(valid, x_range, y_range)
        _log_dropped("scatter", valid.shape[0] - int(np.count_nonzero(ok)))
        for x, y in zip(px[ok].tolist(), py[ok].tolist()):
            self.canvas.set_pixel(x, y, color)

    def line_chart(self, points: Any, color: Color | None = None) -> None:
        arr = as_points(points)
        if arr.shape[0] < 2:
            return
        x_range, y_range = get_auto_range(arr, DEFAULT_PADDING)
        self._draw_segments(arr, x_range, y_range, color, closed=False)

    def polygon(self, vertices: Any, color: Color | None = None) -> None:
        arr = as_points(vertices)
        if arr.shape[0] < 2:
            return
        x_range, y_range = get_auto_range(arr, DEFAULT_PADDING)
        self._draw_segments(arr, x_range, y_range, color, closed=True)

    def bar_chart(self, values: ValueSeries) -> None:
        if len(values) == 0:
            return
        max_val = 0.0
        for value, _ in values:
            if math.isfinite(value):
                max_val = max(max_val, float(value))
        if max_val <= DEGENERATE_SPAN:
            LOGGER.debug("bar_chart skipped: no positive finite values")
            return

        w_px = self.canvas.pixel_width()
        h_px = self.canvas.pixel_height()
        bar_width = max(w_px // len(values), 1)

        for i, (value, color) in enumerate(values):
            if not math.isfinite(value) or value <= 0.0:
                continue
            bar_height = min(round_half_away(value / max_val * h_px), h_px)
            x_start = i * bar_width
            if x_start >= w_px:
                break
            x_end = min(x_start + bar_width, w_px)
            for x in range(x_start, x_end):
                self.canvas.line(x, 0, x, bar_height, color)

    def pie_chart(self, slices: ValueSeries) -> None:
        total = sum(float(v) for v, _ in slices if math.isfinite(v) and v > 0.0)
        if total <= DEGENERATE_SPAN:
            LOGGER.debug("pie_chart skipped: no positive finite slices")
            return

        w_px = self.canvas.pixel_width()
        h_px = self.canvas.pixel_height()
        cx = w_px // 2
        cy = h_px // 2
        radius = int(min(w_px, h_px) / 2.0 * PIE_RADIUS_FILL)
        current_angle = 0.0

        for value, color in slices:
            if not math.isfinite(value) or value <= 0.0:
                continue
            end_angle = current_angle + (value / total) * 2.0 * math.pi
            end_x = cx + int(radius * math.cos(end_angle))
            end_y = cy + int(radius * math.sin(end_angle))
            self.canvas.line(cx, cy, end_x, end_y, color)
            current_angle = end_angle

    def draw_circle(self, center: tuple[float, float], radius_norm: float, color: Color | None = None) -> None:
        w_px = float(self.canvas.pixel_width())
        h_px = float(self.canvas.pixel_height())
        r_px = int(radius_norm * min(w_px, h_px))
        cx_px = int(center[0] * (w_px - 1.0))
        cy_px = int(center[1] * (h_px - 1.0))
        self.canvas.circle(cx_px, cy_px, r_px, color)

    def plot_function(
        self,
        func: Callable[[float], float],
        min_x: float,
        max_x: float,
        color: Color | None = None,
    ) -> None:
        steps = self.canvas.pixel_width()
        points: list[tuple[float, float]] = []
        dropped = 0
        for x in np.linspace(min_x, max_x, steps + 1).tolist():
            try:
                y = float(func(x))
            except (ArithmeticError, ValueError):
                y = math.nan
            if math.isfinite(y):
                points.append((x, y))
            else:
                dropped += 1
        _log_dropped("plot_function", dropped)
        self.line_chart(points, color)

    # --- annotations ---

    def text(self, text: str, x_norm: float, y_norm: float, color: Color | None = None) -> None:
        w = self.canvas.width
        h = self.canvas.height
        col = _cell_from_norm(x_norm, w)
        row = _cell_from_norm(y_norm, h)
        for i, ch in enumerate(text):
            if col + i >= w:
                break
            self.canvas.set_char(col + i, row, ch, color)

    def draw_axes(self, x_range: Range, y_range: Range, color: Color | None = None) -> None:
        w_px = self.canvas.pixel_width()
        h_px = self.canvas.pixel_height()
        self.canvas.line(0, 0, 0, h_px - 1, color)
        self.canvas.line(0, 0, w_px - 1, 0, color)

        y_labels = format_ticks_for_axis(axis_ticks(y_range[0], y_range[1]))
        last = len(y_labels) - 1
        for i, label in enumerate(y_labels):
            self.text(label, 0.0, i / last, color)

        x_labels = format_ticks_for_axis(axis_ticks(x_range[0], x_range[1]))
        last = len(x_labels) - 1
        for i, label in enumerate(x_labels):
            safe_x = min(max(i / last, X_LABEL_MIN), X_LABEL_MAX)
            self.text(label, safe_x, 0.0, color)

    def draw_grid(self, divs_x: int, divs_y: int, color: Color | None = None) -> None:
        w_px = self.canvas.pixel_width()
        h_px = self.canvas.pixel_height()
        for i in range(1, divs_x):
            x = round_half_away(i / divs_x * w_px)
            self.canvas.line(x, 0, x, h_px, color)
        for i in range(1, divs_y):
            y = round_half_away(i / divs_y * h_px)
            self.canvas.line(0, y, w_px, y, color)

    # --- internals ---

    def _to_pixels(
        self,
        arr: np.ndarray,
        x_range: Range,
        y_range: Range,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return map_to_pixels(
            arr[:, 0],
            arr[:, 1],
            x_range,
            y_range,
            self.canvas.pixel_width(),
            self.canvas.pixel_height(),
        )

    def _draw_segments(
        self,
        arr: np.ndarray,
        x_range: Range,
        y_range: Range,
        color: Color | None,
        *,
        closed: bool,
    ) -> None:
        ok = finite_mask(arr)
        _log_dropped("segments", int(arr.shape[0] - np.count_nonzero(ok)))
        safe = np.where(ok[:, None], arr, 0.0)
        px, py, mapped = self._to_pixels(safe, x_range, y_range)
        ok = ok & mapped
        n = arr.shape[0]
        count = n if closed else n - 1
        for i in range(count):
            j = (i + 1) % n
            if not (ok[i] and ok[j]):
                continue
            self.canvas.line(int(px[i]), int(py[i]), int(px[j]), int(py[j]), color)


def _cell_from_norm(norm: float, cells: int) -> int:
    value = norm * max(cells - 1, 0)
    if math.isnan(value) or value <= 0.0:
        return 0
    if math.isinf(value):
        return cells
    return round_half_away(value)


def _log_dropped(primitive: str, count: int) -> None:
    if count > 0:
        LOGGER.debug("%s dropped %d non-finite point(s)", primitive, count)
