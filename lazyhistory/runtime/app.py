"""Browse-session bootstrap and the ``HistoryBrowser`` facade.

``run_browser`` builds the session, starts the background loader, owns the
terminal for the duration of the loop, and returns the pinned command.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable

from ..highlight import DEFAULT_STYLE
from ..history.storage import HistoryStorage
from ..history.types import CommandEntry
from ..render import render_frame, render_lines
from ..ui_theme import resolve_theme
from .loader import HistoryLoader
from .loop import run_main_loop
from .machine import initial_requests
from .scheduler import LoadScheduler
from .state import DEFAULT_HEIGHT, DEFAULT_WIDTH, SessionState, ViewMode, new_session
from .terminal import TerminalController

_logger = logging.getLogger(__name__)


def run_browser(
    storage: HistoryStorage,
    directory: str = ".",
    *,
    tree: bool = False,
    search: str = "",
    theme_name: str | None = None,
    style: str | None = DEFAULT_STYLE,
    no_color: bool = False,
) -> CommandEntry | None:
    """Run one interactive session and return the pinned command, if any."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    size = shutil.get_terminal_size((DEFAULT_WIDTH, DEFAULT_HEIGHT))
    state = new_session(
        directory,
        view_mode=ViewMode.TREE if tree else ViewMode.HISTORY,
        search=search,
        width=size.columns,
        height=size.lines,
    )
    theme = resolve_theme(theme_name, no_color=no_color)
    _logger.info("Browsing %s (view=%s, theme=%s)", directory, state.view_mode.value, theme.name)

    loader = HistoryLoader(storage)
    scheduler = LoadScheduler(loader.run)
    scheduler.schedule_all(initial_requests(state))

    terminal = TerminalController(stdin_fd, stdout_fd)

    def render(current: SessionState) -> None:
        render_frame(render_lines(current, theme, style=style), terminal.write)

    final = run_main_loop(state, terminal, stdin_fd, scheduler, render)
    return final.selected_command


class HistoryBrowser:
    """Directory-scoped entry points over one storage handle.

    Each ``show_*``/``select``/``filter`` call runs a full interactive session
    and returns the command the user pinned, or ``None`` when they quit.
    """

    def __init__(
        self,
        storage: HistoryStorage,
        *,
        theme_name: str | None = None,
        style: str | None = DEFAULT_STYLE,
        no_color: bool = False,
        runner: Callable[..., CommandEntry | None] = run_browser,
    ) -> None:
        self.storage = storage
        self.current_directory = "."
        self._theme_name = theme_name
        self._style = style
        self._no_color = no_color
        self._runner = runner

    def _run(self, *, tree: bool = False, search: str = "") -> CommandEntry | None:
        return self._runner(
            self.storage,
            self.current_directory,
            tree=tree,
            search=search,
            theme_name=self._theme_name,
            style=self._style,
            no_color=self._no_color,
        )

    def set_current_directory(self, directory: str) -> None:
        self.current_directory = directory or "."

    def show_directory_history(self, directory: str) -> CommandEntry | None:
        self.set_current_directory(directory)
        return self._run()

    def show_directory_tree(self) -> CommandEntry | None:
        return self._run(tree=True)

    def select_command(self) -> CommandEntry | None:
        return self._run()

    def filter_commands(self, pattern: str) -> CommandEntry | None:
        return self._run(search=pattern)


__all__ = ["run_browser", "HistoryBrowser"]
