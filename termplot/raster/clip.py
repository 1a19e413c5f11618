from __future__ import annotations


OUT_LEFT = 1
OUT_RIGHT = 2
OUT_TOP = 4
OUT_BOTTOM = 8


def compute_outcode(x: int, y: int, width: int, height: int) -> int:
    code = 0
    if x < 0:
        code |= OUT_LEFT
    elif x >= width:
        code |= OUT_RIGHT
    if y < 0:
        code |= OUT_TOP
    elif y >= height:
        code |= OUT_BOTTOM
    return code


def clip_segment(
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    width: int,
    height: int,
) -> tuple[int, int, int, int] | None:
    """Clip a segment to [0, width) x [0, height).

    Returns the clipped endpoints, or None when no part of the segment is inside.
    """
    outcode0 = compute_outcode(x0, y0, width, height)
    outcode1 = compute_outcode(x1, y1, width, height)

    while True:
        if not (outcode0 | outcode1):
            return (x0, y0, x1, y1)
        if outcode0 & outcode1:
            return None

        outcode_out = outcode0 if outcode0 else outcode1
        if outcode_out & OUT_BOTTOM:
            x = x0 + _div_trunc((x1 - x0) * (height - 1 - y0), y1 - y0)
            y = height - 1
        elif outcode_out & OUT_TOP:
            x = x0 + _div_trunc((x1 - x0) * (0 - y0), y1 - y0)
            y = 0
        elif outcode_out & OUT_RIGHT:
            y = y0 + _div_trunc((y1 - y0) * (width - 1 - x0), x1 - x0)
            x = width - 1
        else:
            y = y0 + _div_trunc((y1 - y0) * (0 - x0), x1 - x0)
            x = 0

        if outcode_out == outcode0:
            x0, y0 = x, y
            outcode0 = compute_outcode(x0, y0, width, height)
        else:
            x1, y1 = x, y
            outcode1 = compute_outcode(x1, y1, width, height)


def _div_trunc(num: int, den: int) -> int:
    # Integer division rounding toward zero, unlike Python's floor division.
    # Truncated intersections can land just outside the canvas, so a segment that
    # passes close to a corner may be rejected even though its Bresenham path crosses it.
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den > 0) else -q
