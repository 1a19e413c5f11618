from __future__ import annotations

import unittest

from termplot import AnsiColor, BrailleCanvas, ColorBlend, TrueColor


def _lit_count(canvas: BrailleCanvas) -> int:
    return sum(
        bin(canvas.cell_mask(col, row)).count("1")
        for row in range(canvas.height)
        for col in range(canvas.width)
    )


SCREEN_DOT_BITS = {
    (0, 0): 0x01,
    (0, 1): 0x02,
    (0, 2): 0x04,
    (0, 3): 0x40,
    (1, 0): 0x08,
    (1, 1): 0x10,
    (1, 2): 0x20,
    (1, 3): 0x80,
}


class BrailleCanvasTests(unittest.TestCase):
    def test_pixel_dimensions_derive_from_cells(self) -> None:
        for w, h in [(0, 0), (1, 1), (3, 5), (40, 10)]:
            canvas = BrailleCanvas(w, h)
            self.assertEqual(canvas.pixel_width(), 2 * w)
            self.assertEqual(canvas.pixel_height(), 4 * h)
            canvas.clear()
            self.assertEqual(canvas.pixel_width(), 2 * w)
            self.assertEqual(canvas.pixel_height(), 4 * h)

    def test_dimensions_are_read_only(self) -> None:
        canvas = BrailleCanvas(2, 2)
        with self.assertRaises(AttributeError):
            canvas.width = 5  # type: ignore[misc]

    def test_negative_dimensions_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BrailleCanvas(-1, 2)

    def test_each_sub_pixel_sets_its_own_bit(self) -> None:
        for (sx, sy), bit in SCREEN_DOT_BITS.items():
            canvas = BrailleCanvas(1, 1)
            canvas.set_pixel_screen(sx, sy)
            self.assertEqual(canvas.cell_mask(0, 0), bit, msg=f"sub-pixel {(sx, sy)}")

    def test_setting_several_sub_pixels_ors_bits(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_pixel_screen(0, 0)
        canvas.set_pixel_screen(1, 3)
        self.assertEqual(canvas.cell_mask(0, 0), 0x81)
        for sx, sy in SCREEN_DOT_BITS:
            canvas.set_pixel_screen(sx, sy)
        self.assertEqual(canvas.cell_mask(0, 0), 0xFF)

    def test_cartesian_origin_is_bottom_left(self) -> None:
        canvas = BrailleCanvas(1, 2)
        canvas.set_pixel(0, 0)
        self.assertEqual(canvas.cell_mask(0, 1), 0x40)
        self.assertEqual(canvas.cell_mask(0, 0), 0)
        self.assertTrue(canvas.get_pixel(0, 0))
        self.assertTrue(canvas.get_pixel_screen(0, 7))

    def test_out_of_bounds_pixels_are_ignored(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_pixel_screen(-1, 0)
        canvas.set_pixel_screen(2, 0)
        canvas.set_pixel_screen(0, 4)
        canvas.set_pixel(0, -1)
        canvas.set_pixel(0, 4)
        canvas.unset_pixel_screen(5, 5)
        canvas.toggle_pixel_screen(-3, 1)
        self.assertEqual(canvas.cell_mask(0, 0), 0)
        self.assertFalse(canvas.get_pixel_screen(9, 9))

    def test_unset_last_pixel_clears_color(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.unset_pixel_screen(0, 0)
        self.assertEqual(canvas.cell_mask(0, 0), 0)
        self.assertIsNone(canvas.cell_color(0, 0))

    def test_unset_one_of_several_keeps_color(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.set_pixel_screen(1, 0, AnsiColor.RED)
        canvas.unset_pixel_screen(0, 0)
        self.assertEqual(canvas.cell_mask(0, 0), 0x08)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.RED)

    def test_cartesian_unset_mirrors_set(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_pixel(1, 0, AnsiColor.GREEN)
        canvas.unset_pixel(1, 0)
        self.assertEqual(canvas.cell_mask(0, 0), 0)
        self.assertIsNone(canvas.cell_color(0, 0))

    def test_toggle_flips_pixel_and_color(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.toggle_pixel_screen(0, 1, AnsiColor.BLUE)
        self.assertEqual(canvas.cell_mask(0, 0), 0x02)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.BLUE)
        canvas.toggle_pixel_screen(0, 1, AnsiColor.BLUE)
        self.assertEqual(canvas.cell_mask(0, 0), 0)
        self.assertIsNone(canvas.cell_color(0, 0))

    def test_cartesian_toggle(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.toggle_pixel(0, 3)
        self.assertEqual(canvas.cell_mask(0, 0), 0x01)
        canvas.toggle_pixel(0, 3)
        self.assertEqual(canvas.cell_mask(0, 0), 0)

    def test_keep_first_blend_keeps_first_color(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.blend_mode = ColorBlend.KEEP_FIRST
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.set_pixel_screen(1, 0, AnsiColor.BLUE)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.RED)

    def test_overwrite_blend_keeps_latest_color(self) -> None:
        canvas = BrailleCanvas(1, 1)
        self.assertIs(canvas.blend_mode, ColorBlend.OVERWRITE)
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.set_pixel_screen(1, 0, AnsiColor.BLUE)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.BLUE)

    def test_keep_first_accepts_new_color_after_cell_empties(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.blend_mode = ColorBlend.KEEP_FIRST
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.unset_pixel_screen(0, 0)
        canvas.set_pixel_screen(0, 0, TrueColor(1, 2, 3))
        self.assertEqual(canvas.cell_color(0, 0), TrueColor(1, 2, 3))

    def test_uncolored_write_keeps_existing_color(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.set_pixel_screen(1, 1)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.RED)

    def test_line_outside_on_one_side_draws_nothing(self) -> None:
        canvas = BrailleCanvas(2, 1)
        canvas.line_screen(-5, -1, -1, -3)
        canvas.line_screen(10, 0, 20, 3)
        canvas.line(0, 10, 3, 12)
        self.assertEqual(_lit_count(canvas), 0)

    def test_horizontal_line_is_clipped_to_canvas(self) -> None:
        canvas = BrailleCanvas(2, 1)
        canvas.line_screen(-10, 1, 10, 1)
        self.assertEqual(canvas.cell_mask(0, 0), 0x12)
        self.assertEqual(canvas.cell_mask(1, 0), 0x12)
        self.assertEqual(_lit_count(canvas), 4)

    def test_diagonal_line_is_clipped_on_both_ends(self) -> None:
        canvas = BrailleCanvas(2, 1)
        canvas.line_screen(-2, -2, 5, 5)
        self.assertEqual(canvas.cell_mask(0, 0), 0x11)
        self.assertEqual(canvas.cell_mask(1, 0), 0x84)

    def test_cartesian_line(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.line(0, 0, 0, 3, AnsiColor.CYAN)
        self.assertEqual(canvas.cell_mask(0, 0), 0x47)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.CYAN)

    def test_single_point_line(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.line_screen(1, 2, 1, 2)
        self.assertEqual(canvas.cell_mask(0, 0), 0x20)

    def test_rect_outlines_and_fills(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.rect(0, 0, 2, 4)
        self.assertEqual(canvas.cell_mask(0, 0), 0xFF)

        canvas = BrailleCanvas(1, 1)
        canvas.rect_filled(0, 0, 2, 4)
        self.assertEqual(canvas.cell_mask(0, 0), 0xFF)

    def test_rect_hollow_interior(self) -> None:
        canvas = BrailleCanvas(3, 2)
        canvas.rect(0, 0, 6, 8)
        self.assertFalse(canvas.get_pixel_screen(2, 3))
        self.assertTrue(canvas.get_pixel_screen(5, 7))
        filled = BrailleCanvas(3, 2)
        filled.rect_filled(0, 0, 6, 8)
        self.assertTrue(filled.get_pixel_screen(2, 3))

    def test_rect_screen_and_cartesian_corners(self) -> None:
        screen = BrailleCanvas(1, 1)
        screen.rect(0, 0, 2, 1)
        self.assertEqual(screen.cell_mask(0, 0), 0x09)

        cartesian = BrailleCanvas(1, 1)
        cartesian.rect_cartesian(0, 0, 2, 1)
        self.assertEqual(cartesian.cell_mask(0, 0), 0xC0)

        filled = BrailleCanvas(1, 1)
        filled.rect_filled_cartesian(0, 0, 1, 2)
        self.assertEqual(filled.cell_mask(0, 0), 0x44)

    def test_empty_rect_draws_nothing(self) -> None:
        canvas = BrailleCanvas(2, 2)
        canvas.rect(1, 1, 0, 3)
        canvas.rect_filled(1, 1, 3, 0)
        self.assertEqual(_lit_count(canvas), 0)

    def test_rect_partially_off_canvas_is_clipped(self) -> None:
        canvas = BrailleCanvas(2, 1)
        canvas.rect_filled(-3, -3, 5, 5)
        self.assertEqual(canvas.cell_mask(0, 0), 0x1B)

    def test_circle_stroke_hits_cardinal_points(self) -> None:
        canvas = BrailleCanvas(10, 5)
        canvas.circle(10, 10, 5, AnsiColor.GREEN)
        for x, y in [(15, 10), (5, 10), (10, 15), (10, 5)]:
            self.assertTrue(canvas.get_pixel(x, y), msg=f"{(x, y)}")
        self.assertFalse(canvas.get_pixel(10, 10))

    def test_filled_circle_covers_interior(self) -> None:
        canvas = BrailleCanvas(10, 5)
        canvas.circle_filled(10, 10, 5)
        for x, y in [(10, 10), (12, 11), (15, 10), (10, 5)]:
            self.assertTrue(canvas.get_pixel(x, y), msg=f"{(x, y)}")
        self.assertFalse(canvas.get_pixel(16, 16))

    def test_screen_circle_variants(self) -> None:
        canvas = BrailleCanvas(10, 5)
        canvas.circle_screen(10, 4, 3)
        self.assertTrue(canvas.get_pixel_screen(10, 1))
        self.assertTrue(canvas.get_pixel_screen(10, 7))
        filled = BrailleCanvas(10, 5)
        filled.circle_filled_screen(10, 4, 3)
        self.assertTrue(filled.get_pixel_screen(10, 4))

    def test_circle_near_origin_skips_negative_points(self) -> None:
        canvas = BrailleCanvas(4, 2)
        canvas.circle(0, 0, 3)
        canvas.circle_filled(0, 0, 2)
        self.assertTrue(canvas.get_pixel(3, 0))
        self.assertTrue(canvas.get_pixel(0, 3))

    def test_set_char_uses_cartesian_rows(self) -> None:
        canvas = BrailleCanvas(2, 2)
        canvas.set_char(1, 0, "A", AnsiColor.RED)
        self.assertEqual(canvas.cell_char(1, 1), "A")
        self.assertEqual(canvas.cell_color(1, 1), AnsiColor.RED)
        canvas.set_char_screen(0, 0, "B")
        self.assertEqual(canvas.cell_char(0, 0), "B")
        self.assertIsNone(canvas.cell_color(0, 0))

    def test_set_char_ignores_blend_mode(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.blend_mode = ColorBlend.KEEP_FIRST
        canvas.set_pixel_screen(0, 0, AnsiColor.RED)
        canvas.set_char_screen(0, 0, "x", AnsiColor.BLUE)
        self.assertEqual(canvas.cell_color(0, 0), AnsiColor.BLUE)

    def test_set_char_out_of_range_ignored_and_validates_char(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_char(3, 0, "A")
        canvas.set_char(0, 5, "A")
        self.assertIsNone(canvas.cell_char(0, 0))
        with self.assertRaises(ValueError):
            canvas.set_char(0, 0, "AB")

    def test_clear_resets_all_layers(self) -> None:
        canvas = BrailleCanvas(3, 2)
        canvas.rect_filled(0, 0, 6, 8, AnsiColor.RED)
        canvas.set_char_screen(1, 1, "Z", AnsiColor.BLUE)
        canvas.clear()
        for row in range(2):
            for col in range(3):
                self.assertEqual(canvas.cell_mask(col, row), 0)
                self.assertIsNone(canvas.cell_color(col, row))
                self.assertIsNone(canvas.cell_char(col, row))
        self.assertEqual((canvas.width, canvas.height), (3, 2))

    def test_cell_accessors_reject_out_of_range(self) -> None:
        canvas = BrailleCanvas(1, 1)
        with self.assertRaises(IndexError):
            canvas.cell_mask(1, 0)


if __name__ == "__main__":
    unittest.main()
