import unittest

from reportlab.pdfbase.pdfmetrics import stringWidth

from label_templates.utils import (
    font_name_for,
    placeholder,
    text_block_height,
    wrap_text_to_width,
)
from label_types import DrawText, FillBox


class LabelUtilsTests(unittest.TestCase):
    def test_wrap_text_to_width_empty(self) -> None:
        self.assertEqual(list(wrap_text_to_width("", "Helvetica", 12, 100)), [])
        self.assertEqual(list(wrap_text_to_width("Hello", "Helvetica", 12, 0)), [])

    def test_wrap_text_to_width_single_line(self) -> None:
        lines = list(wrap_text_to_width("Hello world", "Helvetica", 12, 1000))
        self.assertEqual(lines, ["Hello world"])

    def test_wrap_text_to_width_enforces_width(self) -> None:
        max_width = 30
        lines = list(wrap_text_to_width("Hello world", "Helvetica", 12, max_width))
        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertLessEqual(stringWidth(line, "Helvetica", 12), max_width)

    def test_wrap_keeps_explicit_line_breaks(self) -> None:
        lines = list(wrap_text_to_width("One\nTwo", "Helvetica", 12, 1000))
        self.assertEqual(lines, ["One", "Two"])

    def test_long_word_after_short_word(self) -> None:
        lines = list(wrap_text_to_width("a Supercalifragilistic", "Helvetica", 12, 40))
        self.assertEqual(lines[0], "a")
        self.assertEqual("".join(lines[1:]), "Supercalifragilistic")

    def test_font_names(self) -> None:
        self.assertEqual(font_name_for(False, False), "Helvetica")
        self.assertEqual(font_name_for(True, False), "Helvetica-Bold")
        self.assertEqual(font_name_for(False, True), "Helvetica-Oblique")
        self.assertEqual(font_name_for(True, True), "Helvetica-BoldOblique")

    def test_text_block_height(self) -> None:
        self.assertEqual(text_block_height(0, 12), 0.0)
        self.assertAlmostEqual(text_block_height(2, 10), 24.0)

    def test_placeholder(self) -> None:
        result = placeholder("[Image]", "#F0F0F0", "no data")
        self.assertTrue(result.degraded)
        self.assertEqual(result.reason, "no data")
        self.assertEqual(result.instructions[0], FillBox(fill="#F0F0F0"))
        self.assertEqual(
            result.instructions[1],
            DrawText("[Image]", font_size=10.0, align="center", valign="middle"),
        )


if __name__ == "__main__":
    unittest.main()
