from __future__ import annotations

from termplot.charts import ChartContext
from termplot.display import DEFAULT_RESERVED_ROWS, resolve_default_chart_size


def chart(
    width: int | None = None,
    height: int | None = None,
    *,
    reserved_rows: int = DEFAULT_RESERVED_ROWS,
) -> ChartContext:
    if width is not None and width <= 0:
        raise ValueError("width must be > 0")
    if height is not None and height <= 0:
        raise ValueError("height must be > 0")
    if width is None or height is None:
        default_w, default_h = resolve_default_chart_size(reserved_rows=reserved_rows)
        width = default_w if width is None else width
        height = default_h if height is None else height
    return ChartContext(width=width, height=height)
