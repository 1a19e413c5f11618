from termplot.api import chart
from termplot.canvas import BrailleCanvas
from termplot.charts import ChartContext
from termplot.color import AnsiColor, Color, ColorBlend, TrueColor, parse_color
from termplot.errors import ColorParseError, RenderSinkError, SinkFullError, TermplotError
from termplot.render import AnsiColorState, TextSink

__all__ = [
    "AnsiColor",
    "AnsiColorState",
    "BrailleCanvas",
    "ChartContext",
    "Color",
    "ColorBlend",
    "ColorParseError",
    "RenderSinkError",
    "SinkFullError",
    "TermplotError",
    "TextSink",
    "TrueColor",
    "chart",
    "parse_color",
]
