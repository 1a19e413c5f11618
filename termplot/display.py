from __future__ import annotations

import logging
import os
import shutil


LOGGER = logging.getLogger(__name__)

DEFAULT_FALLBACK_SIZE = (80, 24)
DEFAULT_RESERVED_ROWS = 3
DEFAULT_MIN_WIDTH = 10
DEFAULT_MIN_HEIGHT = 3
BORDER_COLUMNS = 2
WIDTH_ENV = "TERMPLOT_WIDTH"
HEIGHT_ENV = "TERMPLOT_HEIGHT"


def resolve_default_chart_size(
    *,
    reserved_rows: int = DEFAULT_RESERVED_ROWS,
    min_width: int = DEFAULT_MIN_WIDTH,
    min_height: int = DEFAULT_MIN_HEIGHT,
    fallback: tuple[int, int] = DEFAULT_FALLBACK_SIZE,
) -> tuple[int, int]:
    """Chart size in cells that fits the current terminal next to a border and title."""
    if reserved_rows < 0:
        raise ValueError("reserved_rows must be >= 0")
    if min_width <= 0 or min_height <= 0:
        raise ValueError("min_width/min_height must be > 0")

    env_width = _env_dimension(WIDTH_ENV)
    env_height = _env_dimension(HEIGHT_ENV)
    if env_width is not None and env_height is not None:
        return (env_width, env_height)

    columns, lines = _detect_terminal_size(fallback)
    width = max(min_width, columns - BORDER_COLUMNS)
    height = max(min_height, lines - reserved_rows)
    if env_width is not None:
        width = env_width
    if env_height is not None:
        height = env_height
    return (width, height)


def _env_dimension(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


def _detect_terminal_size(fallback: tuple[int, int]) -> tuple[int, int]:
    size = shutil.get_terminal_size(fallback=fallback)
    if size.columns <= 0 or size.lines <= 0:
        LOGGER.debug("terminal reported %sx%s, using fallback %s", size.columns, size.lines, fallback)
        return fallback
    return (size.columns, size.lines)
