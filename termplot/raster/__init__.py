from .braille import BLANK_GLYPH, BRAILLE_BASE, GLYPHS, dot_mask, glyph
from .clip import clip_segment, compute_outcode
from .draw_circles import draw_circle, fill_circle
from .draw_lines import bresenham

__all__ = [
    "BLANK_GLYPH",
    "BRAILLE_BASE",
    "GLYPHS",
    "bresenham",
    "clip_segment",
    "compute_outcode",
    "dot_mask",
    "draw_circle",
    "fill_circle",
    "glyph",
]
