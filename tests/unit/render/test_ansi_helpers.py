from __future__ import annotations

import unittest

from lazyhistory.ansi import (
    char_display_width,
    clip_ansi_line,
    display_width,
    pad_to_width,
    strip_ansi,
    truncate_text,
)


class AnsiHelperTests(unittest.TestCase):
    def test_width_ignores_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\033[31mred\033[0m"), 3)
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(char_display_width("\u0301"), 0)

    def test_clip_keeps_escape_sequences(self) -> None:
        clipped = clip_ansi_line("\033[1mbold text\033[0m", 4)

        self.assertEqual(clipped, "\033[1mbold")
        self.assertEqual(strip_ansi(clipped), "bold")

    def test_clip_does_not_split_wide_characters(self) -> None:
        self.assertEqual(clip_ansi_line("日本語", 5), "日本")

    def test_clip_flattens_line_breaks(self) -> None:
        self.assertEqual(clip_ansi_line("a\tb\nc", 10), "a b c")
        self.assertEqual(clip_ansi_line("abc", 0), "")

    def test_truncate_marks_the_cut(self) -> None:
        self.assertEqual(truncate_text("docker compose up", 10), "docker co…")
        self.assertEqual(truncate_text("docker compose up", 10, "..."), "docker ...")
        self.assertEqual(truncate_text("short", 10), "short")
        self.assertEqual(truncate_text("abcdef", 2, "..."), "ab")

    def test_pad_to_width(self) -> None:
        self.assertEqual(pad_to_width("ab", 4), "ab  ")
        self.assertEqual(pad_to_width("\033[1mab\033[0m", 3), "\033[1mab\033[0m ")
        self.assertEqual(pad_to_width("abcdef", 3), "abcdef")


if __name__ == "__main__":
    unittest.main()
