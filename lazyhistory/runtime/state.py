"""Immutable browser session state.

Every transition returns a new ``SessionState`` via ``dataclasses.replace``;
containers are tuples or freshly copied dicts so no two states share mutable
data.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..filtering import EMPTY_FILTERS, FilterState
from ..history.types import CommandEntry, DirectoryStat
from ..paths import breadcrumbs
from ..tree_model import DirectoryTreeNode
from .messages import LoadRequest

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

# Rows taken by breadcrumbs, header, summary, column headers, and footer.
LIST_CHROME_ROWS = 8
FILTER_PANEL_ROWS = 3


class ViewMode(Enum):
    HISTORY = "history"
    TREE = "tree"
    SEARCH = "search"


class FilterMode(Enum):
    """Which predicate the user touched last; shown in the filter panel."""

    NONE = "none"
    TEXT = "text"
    DATE = "date"
    SHELL = "shell"


@dataclass(frozen=True)
class SessionState:
    current_dir: str
    view_mode: ViewMode = ViewMode.HISTORY
    commands: tuple[CommandEntry, ...] = ()
    filtered: tuple[CommandEntry, ...] = ()
    directories: tuple[DirectoryStat, ...] = ()
    tree: tuple[DirectoryTreeNode, ...] = ()
    expansion: Mapping[str, bool] = field(default_factory=dict)
    filters: FilterState = EMPTY_FILTERS
    filter_mode: FilterMode = FilterMode.NONE
    search_mode: bool = False
    show_filters: bool = False
    show_preview: bool = False
    selected_index: int = 0
    scroll_offset: int = 0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    breadcrumbs: tuple[str, ...] = ()
    quitting: bool = False
    last_error: str | None = None
    failed_request: LoadRequest | None = None
    selected_command: CommandEntry | None = None


def new_session(
    current_dir: str,
    *,
    view_mode: ViewMode = ViewMode.HISTORY,
    search: str = "",
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> SessionState:
    """Create the initial state for one browse invocation.

    A non-empty ``search`` opens ``SearchView`` with the query pre-applied to
    whatever history loads next.
    """
    filters = EMPTY_FILTERS
    filter_mode = FilterMode.NONE
    if search:
        view_mode = ViewMode.SEARCH
        filters = FilterState(query=search)
        filter_mode = FilterMode.TEXT
    return SessionState(
        current_dir=current_dir,
        view_mode=view_mode,
        filters=filters,
        filter_mode=filter_mode,
        width=max(1, width),
        height=max(1, height),
        breadcrumbs=tuple(breadcrumbs(current_dir)),
    )


def visible_items(state: SessionState) -> tuple[object, ...]:
    """Rows the selection index points into for the active view."""
    if state.view_mode is ViewMode.TREE:
        return state.tree
    return state.filtered


def visible_lines(state: SessionState) -> int:
    """Number of list rows that fit in the viewport for the active view."""
    rows = state.height - LIST_CHROME_ROWS
    if state.view_mode is not ViewMode.TREE:
        if state.show_filters:
            rows -= FILTER_PANEL_ROWS
        if state.show_preview and state.filtered:
            rows //= 2
    return max(1, rows)


def selected_node(state: SessionState) -> DirectoryTreeNode | None:
    if state.view_mode is not ViewMode.TREE:
        return None
    if 0 <= state.selected_index < len(state.tree):
        return state.tree[state.selected_index]
    return None


def highlighted_command(state: SessionState) -> CommandEntry | None:
    if state.view_mode is ViewMode.TREE:
        return None
    if 0 <= state.selected_index < len(state.filtered):
        return state.filtered[state.selected_index]
    return None


def selected_command(state: SessionState) -> CommandEntry | None:
    """Return the pinned command, falling back to the highlighted history row."""
    if state.selected_command is not None:
        return state.selected_command
    if state.view_mode is ViewMode.HISTORY:
        return highlighted_command(state)
    return None


__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "LIST_CHROME_ROWS",
    "FILTER_PANEL_ROWS",
    "ViewMode",
    "FilterMode",
    "SessionState",
    "new_session",
    "visible_items",
    "visible_lines",
    "selected_node",
    "highlighted_command",
    "selected_command",
]
