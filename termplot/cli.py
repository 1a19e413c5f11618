from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
import logging
import math
import os
import sys

import numpy as np

from termplot.api import chart
from termplot.charts import ChartContext
from termplot.color import AnsiColor, Color, ColorBlend, parse_color
from termplot.render import center_title


LOGGER = logging.getLogger(__name__)

BLEND_CHOICES = {"overwrite": ColorBlend.OVERWRITE, "keep-first": ColorBlend.KEEP_FIRST}


def _demo_bars(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    data = [
        (30.0, color or AnsiColor.RED),
        (55.0, AnsiColor.GREEN),
        (90.0, AnsiColor.BLUE),
        (45.0, AnsiColor.YELLOW),
        (70.0, AnsiColor.MAGENTA),
        (25.0, None),
    ]
    ctx.bar_chart(data)
    bar_cells = max(ctx.canvas.width // len(data), 1)
    for i, label in enumerate(("Jan", "Feb", "Mar", "Apr", "May", "Jun")):
        col = i * bar_cells + max((bar_cells - len(label)) // 2, 0)
        ctx.text(label, col / max(ctx.canvas.width - 1, 1), 0.0, AnsiColor.WHITE)


def _demo_scatter(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    ctx.scatter(rng.uniform(0.0, 60.0, size=(150, 2)), color or AnsiColor.RED)
    ctx.scatter(rng.uniform(40.0, 100.0, size=(150, 2)), AnsiColor.CYAN)


def _demo_line(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    walk = np.cumsum(rng.normal(0.0, 1.0, size=200))
    points = np.column_stack((np.arange(walk.size, dtype=np.float64), walk))
    ctx.line_chart(points, color or AnsiColor.GREEN)


def _demo_pie(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    ctx.pie_chart(
        [
            (30.0, color or AnsiColor.RED),
            (20.0, AnsiColor.BLUE),
            (15.0, AnsiColor.GREEN),
            (25.0, AnsiColor.YELLOW),
            (10.0, AnsiColor.WHITE),
        ]
    )
    ctx.draw_circle((0.5, 0.5), 0.475, AnsiColor.BRIGHT_BLACK)


def _demo_geometry(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    ctx.draw_circle((0.5, 0.5), 0.4, color or AnsiColor.GREEN)
    ctx.polygon([(0.1, 0.1), (0.5, 0.9), (0.9, 0.1)], AnsiColor.MAGENTA)


def _demo_function(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    ctx.draw_grid(4, 4, AnsiColor.BRIGHT_BLACK)
    ctx.plot_function(lambda x: math.sin(x) * math.exp(-0.1 * x), 0.0, 6.0 * math.pi, color or AnsiColor.CYAN)


def _demo_axes(ctx: ChartContext, color: Color | None, rng: np.random.Generator) -> None:
    min_x, max_x = -2.0 * math.pi, 2.0 * math.pi
    ctx.plot_function(math.sin, min_x, max_x, color or AnsiColor.YELLOW)
    ctx.draw_axes((min_x, max_x), (-1.0, 1.0), AnsiColor.WHITE)


DEMOS: dict[str, Callable[[ChartContext, Color | None, np.random.Generator], None]] = {
    "bars": _demo_bars,
    "scatter": _demo_scatter,
    "line": _demo_line,
    "pie": _demo_pie,
    "geometry": _demo_geometry,
    "function": _demo_function,
    "axes": _demo_axes,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termplot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Render one of the built-in demo charts to stdout.")
    demo.add_argument("name", choices=sorted(DEMOS))
    demo.add_argument(
        "--width",
        type=int,
        default=None,
        help="Chart width in cells. Default: fit the terminal.",
    )
    demo.add_argument(
        "--height",
        type=int,
        default=None,
        help="Chart height in cells. Default: fit the terminal.",
    )
    demo.add_argument(
        "--title",
        default=None,
        help="Title line above the chart. Kept when NO_COLOR is set; the border is not.",
    )
    demo.add_argument("--no-border", action="store_true")
    demo.add_argument("--color", type=parse_color, default=None, help="Primary series color (name or #RRGGBB).")
    demo.add_argument("--blend", choices=sorted(BLEND_CHOICES), default="overwrite")
    demo.add_argument("--seed", type=int, default=0)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "demo":
        ctx = chart(width=args.width, height=args.height)
        ctx.canvas.blend_mode = BLEND_CHOICES[args.blend]
        LOGGER.info("rendering demo %s at %dx%d cells", args.name, ctx.canvas.width, ctx.canvas.height)
        DEMOS[args.name](ctx, args.color, np.random.default_rng(args.seed))
        if os.environ.get("NO_COLOR"):
            frame = ctx.canvas.render_no_color()
            if args.title is not None:
                frame = center_title(args.title, ctx.canvas.width) + "\n" + frame
        else:
            frame = ctx.canvas.render_with_options(not args.no_border, args.title)
        sys.stdout.write(frame)
        if not frame.endswith("\n"):
            sys.stdout.write("\n")
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
