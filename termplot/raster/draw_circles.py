from __future__ import annotations

from collections.abc import Callable, Iterator


PointSink = Callable[[int, int], None]
SpanSink = Callable[[int, int, int, int], None]


def midpoint_steps(radius: int) -> Iterator[tuple[int, int]]:
    """Yield the (x, y) offsets of one octant, starting at (0, radius)."""
    x = 0
    y = radius
    d = 3 - 2 * radius
    yield x, y
    while y >= x:
        x += 1
        if d > 0:
            y -= 1
            d = d + 4 * (x - y) + 10
        else:
            d = d + 4 * x + 6
        yield x, y


def draw_circle(plot: PointSink, xc: int, yc: int, radius: int) -> None:
    if radius < 0:
        return
    for x, y in midpoint_steps(radius):
        _plot_octants(plot, xc, yc, x, y)


def fill_circle(span: SpanSink, xc: int, yc: int, radius: int) -> None:
    if radius < 0:
        return
    for x, y in midpoint_steps(radius):
        _fill_octant_spans(span, xc, yc, x, y)


def _plot_octants(plot: PointSink, cx: int, cy: int, x: int, y: int) -> None:
    for px, py in (
        (cx + x, cy + y),
        (cx - x, cy + y),
        (cx + x, cy - y),
        (cx - x, cy - y),
        (cx + y, cy + x),
        (cx - y, cy + x),
        (cx + y, cy - x),
        (cx - y, cy - x),
    ):
        if px >= 0 and py >= 0:
            plot(px, py)


def _fill_octant_spans(span: SpanSink, cx: int, cy: int, x: int, y: int) -> None:
    span(cx - x, cy + y, cx + x, cy + y)
    span(cx - x, cy - y, cx + x, cy - y)
    span(cx - y, cy + x, cx + y, cy + x)
    span(cx - y, cy - x, cx + y, cy - x)
