from __future__ import annotations


BRAILLE_BASE = 0x2800

# Dot bits indexed [sub_y][sub_x]; matches the Unicode Braille Patterns block:
#  1 4      0x01 0x08
#  2 5      0x02 0x10
#  3 6      0x04 0x20
#  7 8      0x40 0x80
DOT_MASKS: tuple[tuple[int, int], ...] = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)

CELL_PIXEL_WIDTH = 2
CELL_PIXEL_HEIGHT = 4


def dot_mask(sub_x: int, sub_y: int) -> int:
    if 0 <= sub_x < CELL_PIXEL_WIDTH and 0 <= sub_y < CELL_PIXEL_HEIGHT:
        return DOT_MASKS[sub_y][sub_x]
    return 0


def glyph(mask: int) -> str:
    return chr(BRAILLE_BASE + (int(mask) & 0xFF))


BLANK_GLYPH = glyph(0)
GLYPHS: tuple[str, ...] = tuple(glyph(mask) for mask in range(256))
