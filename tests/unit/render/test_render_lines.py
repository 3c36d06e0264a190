"""Tests for composed screen rows across views.

Uses the plain theme so assertions can match visible text exactly.
"""

from __future__ import annotations

import unittest
from dataclasses import replace
from datetime import datetime, timedelta

from lazyhistory.ansi import display_width
from lazyhistory.history.types import CommandEntry, DirectoryStat, ShellKind
from lazyhistory.render import (
    CLEAR_SCREEN,
    footer_hints,
    format_command_row,
    format_duration,
    format_timestamp,
    render_frame,
    render_lines,
)
from lazyhistory.runtime.machine import update
from lazyhistory.runtime.messages import DirectoryHistoryLoaded, DirectoryTreeLoaded
from lazyhistory.runtime.state import ViewMode, new_session
from lazyhistory.ui_theme import DEFAULT_THEME, PLAIN_THEME

NOW = datetime(2024, 3, 13, 12, 0)
PROJECT = "/home/user/project"


def _entry(command: str, minutes_ago: int, shell: ShellKind = ShellKind.BASH, **kwargs) -> CommandEntry:
    return CommandEntry(
        id=command,
        command=command,
        directory=PROJECT,
        timestamp=NOW - timedelta(minutes=minutes_ago),
        shell=shell,
        **kwargs,
    )


COMMANDS = (
    _entry("git status", 5),
    _entry("pytest -x", 30, exit_code=1, duration=timedelta(seconds=42)),
    _entry("ls", 90, shell=ShellKind.ZSH),
)


def _loaded(commands=COMMANDS, **session_kwargs):
    session_kwargs.setdefault("width", 160)
    state = new_session(PROJECT, **session_kwargs)
    state, _ = update(state, DirectoryHistoryLoaded(PROJECT, tuple(commands)), NOW)
    return state


def _press(state, *keys):
    for key in keys:
        state, _ = update(state, key, NOW)
    return state


def _render(state, theme=PLAIN_THEME):
    return render_lines(state, theme, NOW)


class HistoryViewRenderTests(unittest.TestCase):
    def test_frame_fills_height_with_footer_last(self) -> None:
        state = _loaded()
        lines = _render(state)

        self.assertEqual(len(lines), state.height)
        self.assertEqual(lines[-1], " · ".join(footer_hints(state)))

    def test_header_rows(self) -> None:
        lines = _render(_loaded())

        self.assertEqual(lines[0], "/ > home > user > project (3 commands) · ← to go up")
        self.assertEqual(lines[1], "Directory History - project (3 commands)")
        self.assertEqual(lines[2], "Last command: 11:55 (5m ago)")
        self.assertEqual(lines[4], "  # │ Command")

    def test_rows_show_status_and_duration(self) -> None:
        lines = _render(_loaded())

        self.assertTrue(lines[5].startswith("▶   1 │ git status"))
        self.assertTrue(lines[5].endswith("│ 11:55 (5m ago) │ [bash] │ ok"))
        self.assertTrue(lines[6].startswith("    2 │ pytest -x"))
        self.assertTrue(lines[6].endswith("│ [bash] │ x1 │ 42s"))
        self.assertIn("[zsh]", lines[7])

    def test_lines_never_exceed_width(self) -> None:
        state = _loaded(width=30)
        for theme in (PLAIN_THEME, DEFAULT_THEME):
            with self.subTest(theme=theme.name):
                for line in render_lines(state, theme, NOW):
                    self.assertLessEqual(display_width(line), 30)

    def test_filtered_count_in_header(self) -> None:
        state = _press(_loaded(), "f", "s", "s", "s")

        lines = _render(state)

        self.assertEqual(lines[1], "Directory History - project (1 of 3 commands)")
        self.assertEqual(lines[3], "Filters: Shell: zsh")
        self.assertIn("d: date filter", lines[4])

    def test_search_mode_header_shows_cursor(self) -> None:
        lines = _render(_press(_loaded(), "/", "g", "i"))
        self.assertEqual(lines[1], "Directory History - project (1 of 3 commands)  Search: gi_")

    def test_scroll_indicator(self) -> None:
        commands = [_entry(f"echo {index}", index) for index in range(30)]
        state = _loaded(commands, height=12)

        lines = _render(state)
        self.assertIn("Showing 1-4 of 30 commands (↓ more below)", lines)

        lines = _render(_press(state, *["j"] * 10))
        self.assertIn("Showing 8-11 of 30 commands (↑ more above, ↓ more below)", lines)

    def test_preview_shows_selected_command_details(self) -> None:
        lines = _render(_press(_loaded(), "j", " "))

        self.assertIn("Command Preview", lines)
        self.assertIn("Command: pytest -x", lines)
        self.assertIn("Exit Code: 1", lines)
        self.assertIn("Duration: 42s", lines)
        self.assertIn("Directory: /home/user/project", lines)

    def test_control_bytes_are_escaped(self) -> None:
        row = format_command_row(_entry("echo \x1b[2Jboom", 1), 0, False, 120, PLAIN_THEME, NOW)

        self.assertNotIn("\x1b", row)
        self.assertIn("echo \\x1b[2Jboom", row)

    def test_selected_row_uses_reverse_video(self) -> None:
        row = format_command_row(COMMANDS[0], 0, True, 120, DEFAULT_THEME, NOW)
        self.assertTrue(row.startswith(DEFAULT_THEME.reverse))


class EmptyStateRenderTests(unittest.TestCase):
    def test_no_commands(self) -> None:
        lines = _render(_loaded(()))

        self.assertIn("No commands recorded in this directory yet.", lines)
        self.assertEqual(lines[0], "/ > home > user > project (no commands) · ← to go up")

    def test_everything_filtered_out(self) -> None:
        lines = _render(_press(_loaded(), "f", "s"))
        self.assertIn("All commands are filtered out.", lines)

    def test_no_search_match(self) -> None:
        lines = _render(_press(_loaded(), "/", "z", "z"))
        self.assertIn("No commands found matching search criteria in this directory.", lines)


class OtherViewRenderTests(unittest.TestCase):
    def test_error_view(self) -> None:
        state = replace(_loaded(), last_error="database is locked")

        lines = _render(state)

        self.assertEqual(lines[0], "Error: database is locked")
        self.assertEqual(lines[2], "Press 'r' to retry or 'q' to quit.")
        self.assertEqual(lines[-1], "")
        self.assertEqual(len(lines), state.height)

    def test_tree_view(self) -> None:
        stats = (
            DirectoryStat("/home", 1, NOW - timedelta(days=30)),
            DirectoryStat("/home/user", 2, NOW - timedelta(hours=3)),
            DirectoryStat(PROJECT, 3, NOW - timedelta(minutes=5)),
        )
        state = new_session(PROJECT, view_mode=ViewMode.TREE, width=120)
        state, _ = update(state, DirectoryTreeLoaded(stats), NOW)

        lines = _render(state)

        self.assertEqual(lines[0], "/ > home > user > project (browsing tree) · ← to go up")
        self.assertEqual(lines[1], "Directory Tree (3 directories)")
        self.assertEqual(lines[4], "▾ home (1) Feb 12")
        self.assertEqual(lines[5], "├─ ▾ user (2) 09:00 today")
        self.assertEqual(lines[6], "│  ├─   project (3) < 1h ago")
        self.assertEqual(lines[7], "Current: /home/user/project")

    def test_empty_tree(self) -> None:
        state = new_session(PROJECT, view_mode=ViewMode.TREE)
        self.assertIn("No directories with command history found.", _render(state))

    def test_search_view(self) -> None:
        state = _loaded(search="git")

        lines = _render(state)

        self.assertEqual(lines[1], "Search Commands")
        self.assertEqual(lines[2], "Search: git")
        self.assertTrue(lines[4].startswith("▶   1 │ git status"))

    def test_tiny_terminal_keeps_footer_only(self) -> None:
        state = _loaded(height=1)
        self.assertEqual(_render(state), [" · ".join(footer_hints(state))])


class FormattingTests(unittest.TestCase):
    def test_format_duration(self) -> None:
        cases = {0: "0s", 59: "59s", 60: "1m", 3599: "59m", 3600: "1h", 86400 * 2 + 5: "2d"}
        for seconds, expected in cases.items():
            with self.subTest(seconds=seconds):
                self.assertEqual(format_duration(timedelta(seconds=seconds)), expected)

    def test_format_timestamp(self) -> None:
        cases = {
            datetime(2024, 3, 13, 11, 58): "11:58 (2m ago)",
            datetime(2024, 3, 13, 9, 30, 15): "09:30:15",
            datetime(2024, 3, 12, 20, 0): "yesterday 20:00",
            datetime(2024, 3, 10, 8, 0): "Sun 08:00",
            datetime(2024, 2, 1, 9, 0): "02-01 09:00",
        }
        for moment, expected in cases.items():
            with self.subTest(moment=moment):
                self.assertEqual(format_timestamp(moment, NOW), expected)

    def test_render_frame_joins_rows(self) -> None:
        written: list[str] = []
        render_frame(["a", "b"], written.append)
        self.assertEqual(written, [CLEAR_SCREEN + "a\r\nb"])


if __name__ == "__main__":
    unittest.main()
