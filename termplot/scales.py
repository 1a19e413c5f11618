from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np


DEGENERATE_SPAN = 1e-9
DEFAULT_PADDING = 0.05
DEFAULT_TICK_COUNT = 4
# Keeps far off-canvas pixel offsets inside int64.
MAX_PIXEL_OFFSET = float(2**53)

Range = tuple[float, float]


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def x_range(self) -> Range:
        return (self.xmin, self.xmax)

    @property
    def y_range(self) -> Range:
        return (self.ymin, self.ymax)


def as_points(points: Any) -> np.ndarray:
    """Coerce a sequence of (x, y) pairs or an (N, 2) array to float64 of shape (N, 2)."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {arr.shape}")
    return arr


def finite_mask(arr: np.ndarray) -> np.ndarray:
    return np.isfinite(arr).all(axis=1)


def compute_limits(points: Any, padding: float = DEFAULT_PADDING) -> DataLimits:
    arr = as_points(points)
    valid = arr[finite_mask(arr)]
    if valid.shape[0] == 0:
        return DataLimits(xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)

    xmin = float(np.min(valid[:, 0]))
    xmax = float(np.max(valid[:, 0]))
    ymin = float(np.min(valid[:, 1]))
    ymax = float(np.max(valid[:, 1]))

    xmin, xmax = _pad_axis(xmin, xmax, padding)
    ymin, ymax = _pad_axis(ymin, ymax, padding)
    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def _pad_axis(lo: float, hi: float, padding: float) -> Range:
    span = hi - lo
    if abs(span) < DEGENERATE_SPAN:
        span = 1.0
    padded_lo = lo - span * padding
    padded_hi = hi + span * padding
    if not (math.isfinite(padded_lo) and math.isfinite(padded_hi)):
        # Padding past the float64 range; keep the raw data bounds.
        return (lo, hi)
    return (padded_lo, padded_hi)


def get_auto_range(points: Any, padding: float = DEFAULT_PADDING) -> tuple[Range, Range]:
    limits = compute_limits(points, padding)
    return limits.x_range, limits.y_range


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def map_coords(
    x: float,
    y: float,
    x_range: Range,
    y_range: Range,
    width: int,
    height: int,
) -> tuple[int, int]:
    """Map a data point onto [0, width-1] x [0, height-1] cartesian pixels."""
    px = round_half_away(_unit_ratio(x, x_range) * (width - 1.0))
    py = round_half_away(_unit_ratio(y, y_range) * (height - 1.0))
    return px, py


def map_to_pixels(
    xs: np.ndarray,
    ys: np.ndarray,
    x_range: Range,
    y_range: Range,
    width: int,
    height: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized map_coords.

    Returns pixel x, pixel y and a mask of the entries that mapped to finite
    coordinates; masked-out entries hold 0.
    """
    with np.errstate(invalid="ignore", over="ignore"):
        fx = _unit_ratio(np.asarray(xs, dtype=np.float64), x_range) * (width - 1.0)
        fy = _unit_ratio(np.asarray(ys, dtype=np.float64), y_range) * (height - 1.0)
        ok = np.isfinite(fx) & np.isfinite(fy)
        fx = np.clip(np.where(ok, fx, 0.0), -MAX_PIXEL_OFFSET, MAX_PIXEL_OFFSET)
        fy = np.clip(np.where(ok, fy, 0.0), -MAX_PIXEL_OFFSET, MAX_PIXEL_OFFSET)
    px = (np.sign(fx) * np.floor(np.abs(fx) + 0.5)).astype(np.int64)
    py = (np.sign(fy) * np.floor(np.abs(fy) + 0.5)).astype(np.int64)
    return px, py, ok


def _unit_ratio(value: Any, value_range: Range) -> Any:
    lo, hi = value_range
    span = hi - lo
    if math.isfinite(span):
        return (value - lo) / max(span, DEGENERATE_SPAN)
    # Span overflows float64; halving both sides keeps the ratio exact.
    return (value / 2.0 - lo / 2.0) / max(hi / 2.0 - lo / 2.0, DEGENERATE_SPAN)


def axis_ticks(vmin: float, vmax: float, count: int = DEFAULT_TICK_COUNT) -> list[float]:
    """Evenly spaced tick values including both ends of the range."""
    if count < 2:
        raise ValueError("count must be >= 2")
    step = (vmax - vmin) / (count - 1)
    ticks = [vmin + step * i for i in range(count - 1)]
    ticks.append(vmax)
    return ticks


def format_tick(value: float) -> str:
    return f"{value:.1f}"


def format_ticks_for_axis(ticks: Sequence[float]) -> list[str]:
    return [format_tick(float(v)) for v in ticks]
