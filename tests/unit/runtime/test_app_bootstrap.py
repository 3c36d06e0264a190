"""Tests for interactive session bootstrap and the HistoryBrowser facade."""

from __future__ import annotations

import os
import unittest
from dataclasses import replace
from datetime import datetime
from types import SimpleNamespace
from unittest import mock

from lazyhistory.history.storage import MemoryHistoryStorage
from lazyhistory.history.types import CommandEntry, ShellKind
from lazyhistory.runtime.app import HistoryBrowser, run_browser
from lazyhistory.runtime.messages import LoadRequest
from lazyhistory.runtime.state import ViewMode

PINNED = CommandEntry(
    id="c1",
    command="make release",
    directory="/srv/app",
    timestamp=datetime(2024, 3, 13, 12, 0),
    shell=ShellKind.BASH,
)


class RunBrowserTests(unittest.TestCase):
    def _run(self, **kwargs):
        captured = {}

        def fake_loop(state, terminal, stdin_fd, scheduler, render):
            captured["state"] = state
            captured["stdin_fd"] = stdin_fd
            captured["render"] = render
            return replace(state, quitting=True, selected_command=PINNED)

        fake_sys = SimpleNamespace(
            stdin=SimpleNamespace(fileno=lambda: 10),
            stdout=SimpleNamespace(fileno=lambda: 11),
        )
        with (
            mock.patch("lazyhistory.runtime.app.sys", fake_sys),
            mock.patch(
                "lazyhistory.runtime.app.shutil.get_terminal_size",
                return_value=os.terminal_size((120, 30)),
            ),
            mock.patch("lazyhistory.runtime.app.TerminalController") as terminal_cls,
            mock.patch("lazyhistory.runtime.app.LoadScheduler") as scheduler_cls,
            mock.patch("lazyhistory.runtime.app.run_main_loop", side_effect=fake_loop),
        ):
            result = run_browser(MemoryHistoryStorage(), "/srv/app", **kwargs)

        captured["terminal_cls"] = terminal_cls
        captured["scheduler"] = scheduler_cls.return_value
        return result, captured

    def test_returns_pinned_command(self) -> None:
        result, captured = self._run()

        self.assertEqual(result, PINNED)
        self.assertEqual(captured["stdin_fd"], 10)
        captured["terminal_cls"].assert_called_once_with(10, 11)

    def test_session_uses_terminal_size_and_requests_initial_loads(self) -> None:
        _, captured = self._run()

        state = captured["state"]
        self.assertEqual((state.width, state.height), (120, 30))
        self.assertIs(state.view_mode, ViewMode.HISTORY)
        captured["scheduler"].schedule_all.assert_called_once_with(
            [LoadRequest.history("/srv/app"), LoadRequest.tree()]
        )

    def test_tree_and_search_flags_pick_start_view(self) -> None:
        _, tree_run = self._run(tree=True)
        _, search_run = self._run(search="make")

        self.assertIs(tree_run["state"].view_mode, ViewMode.TREE)
        self.assertIs(search_run["state"].view_mode, ViewMode.SEARCH)
        self.assertEqual(search_run["state"].filters.query, "make")

    def test_render_writes_frame_through_terminal(self) -> None:
        _, captured = self._run(no_color=True)

        captured["render"](captured["state"])

        terminal = captured["terminal_cls"].return_value
        terminal.write.assert_called_once()
        frame = terminal.write.call_args.args[0]
        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertIn("Directory History", frame)


class HistoryBrowserTests(unittest.TestCase):
    def setUp(self) -> None:
        self.storage = MemoryHistoryStorage()
        self.runner = mock.Mock(return_value=PINNED)
        self.browser = HistoryBrowser(self.storage, theme_name="ocean", style="friendly", runner=self.runner)

    def _expect_call(self, directory: str, *, tree: bool = False, search: str = "") -> None:
        self.runner.assert_called_with(
            self.storage,
            directory,
            tree=tree,
            search=search,
            theme_name="ocean",
            style="friendly",
            no_color=False,
        )

    def test_defaults_to_current_directory(self) -> None:
        self.assertEqual(self.browser.current_directory, ".")
        self.assertEqual(self.browser.select_command(), PINNED)
        self._expect_call(".")

    def test_show_directory_history_sets_directory(self) -> None:
        self.browser.show_directory_history("/srv/app")

        self.assertEqual(self.browser.current_directory, "/srv/app")
        self._expect_call("/srv/app")

    def test_empty_directory_means_current(self) -> None:
        self.browser.set_current_directory("")
        self.assertEqual(self.browser.current_directory, ".")

    def test_show_directory_tree(self) -> None:
        self.browser.set_current_directory("/srv")
        self.browser.show_directory_tree()
        self._expect_call("/srv", tree=True)

    def test_filter_commands_starts_search(self) -> None:
        self.browser.filter_commands("docker")
        self._expect_call(".", search="docker")

    def test_quit_without_pin_returns_none(self) -> None:
        self.runner.return_value = None
        self.assertIsNone(self.browser.select_command())


if __name__ == "__main__":
    unittest.main()
