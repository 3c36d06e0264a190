"""Session state machine: ``(state, event) -> (state, load requests)``.

All functions here are pure. They never touch storage or the terminal; any
data they need is requested through ``LoadRequest`` values that the event
loop runs in the background and feeds back as load-result events.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ..filtering import (
    EMPTY_FILTERS,
    DatePreset,
    FilterState,
    apply_filters,
    next_date_preset,
    next_shell_filter,
    preset_for_digit,
    with_date_preset,
    with_query,
    with_shell,
)
from ..paths import breadcrumbs, normalize_separators, parent_directory
from ..tree_model import build_directory_tree, collapse_all, expand_all, remember_expansion
from .messages import (
    DirectoryHistoryLoaded,
    DirectoryTreeLoaded,
    Event,
    LoadFailed,
    LoadKind,
    LoadRequest,
    Resize,
)
from .state import (
    FilterMode,
    SessionState,
    ViewMode,
    selected_node,
    visible_items,
    visible_lines,
)

Transition = tuple[SessionState, list[LoadRequest]]

QUIT_KEYS = frozenset({"q", "CTRL_C"})
INTERRUPT_KEYS = frozenset({"CTRL_C"})
UP_KEYS = frozenset({"UP", "k"})
DOWN_KEYS = frozenset({"DOWN", "j"})
BACK_KEYS = frozenset({"BACKSPACE", "LEFT"})

HISTORY_RESULT_KINDS = frozenset({LoadKind.HISTORY, LoadKind.SEARCH})
TREE_RESULT_KINDS = frozenset({LoadKind.TREE})


def initial_requests(state: SessionState) -> list[LoadRequest]:
    """Loads issued when a session starts: current history plus the tree."""
    return [LoadRequest.history(state.current_dir), LoadRequest.tree()]


def update(state: SessionState, event: Event, now: datetime | None = None) -> Transition:
    """Apply one event. Once ``quitting`` is set every event is ignored."""
    if state.quitting:
        return state, []
    if isinstance(event, Resize):
        return handle_resize(state, event), []
    if isinstance(event, DirectoryHistoryLoaded):
        return apply_history_loaded(state, event), []
    if isinstance(event, DirectoryTreeLoaded):
        return apply_tree_loaded(state, event), []
    if isinstance(event, LoadFailed):
        return replace(state, last_error=event.error, failed_request=event.request), []
    if isinstance(event, str):
        return handle_key(state, event, now or datetime.now())
    return state, []


# Load results and resize.


def handle_resize(state: SessionState, event: Resize) -> SessionState:
    resized = replace(state, width=max(1, event.width), height=max(1, event.height))
    return _follow_selection(resized, resized.selected_index)


def apply_history_loaded(state: SessionState, event: DirectoryHistoryLoaded) -> SessionState:
    """Install a directory's commands and re-run the active filters over them.

    Responses are applied even when the user has since moved to another
    directory; the next navigation re-requests fresh data.
    """
    commands = tuple(event.commands)
    loaded = replace(
        state,
        commands=commands,
        filtered=tuple(apply_filters(commands, state.filters)),
        selected_index=0,
        scroll_offset=0,
    )
    return _clear_error_for(loaded, HISTORY_RESULT_KINDS)


def apply_tree_loaded(state: SessionState, event: DirectoryTreeLoaded) -> SessionState:
    stats = tuple(event.stats)
    expansion = remember_expansion(stats, state.expansion, state.current_dir)
    loaded = replace(state, directories=stats, expansion=expansion)
    return _rebuild_tree(_clear_error_for(loaded, TREE_RESULT_KINDS))


def _clear_error_for(state: SessionState, kinds: frozenset[LoadKind]) -> SessionState:
    """Drop the error only when this result answers the load that failed."""
    if state.failed_request is not None and state.failed_request.kind not in kinds:
        return state
    return replace(state, last_error=None, failed_request=None)


# Selection and scrolling.


def _follow_selection(state: SessionState, index: int) -> SessionState:
    """Select ``index`` (clamped) and scroll just enough to keep it on screen."""
    count = len(visible_items(state))
    index = min(max(0, index), max(0, count - 1))
    rows = visible_lines(state)
    scroll = state.scroll_offset
    if index < scroll:
        scroll = index
    elif index > scroll + rows - 1:
        scroll = index - rows + 1
    scroll = max(0, min(scroll, max(0, count - rows)))
    if index == state.selected_index and scroll == state.scroll_offset:
        return state
    return replace(state, selected_index=index, scroll_offset=scroll)


def move_selection(state: SessionState, delta: int) -> SessionState:
    """Move the cursor by ``delta`` rows; stops at either end, never wraps."""
    max_index = max(0, len(visible_items(state)) - 1)
    target = min(max(state.selected_index + delta, 0), max_index)
    if target == state.selected_index:
        return state
    return _follow_selection(state, target)


def move_up(state: SessionState) -> SessionState:
    return move_selection(state, -1)


def move_down(state: SessionState) -> SessionState:
    return move_selection(state, 1)


# Filters.


def _refilter(state: SessionState, filters: FilterState, **changes: object) -> SessionState:
    """Swap in ``filters`` wholesale, re-filter, and reset the cursor."""
    return replace(
        state,
        filters=filters,
        filtered=tuple(apply_filters(state.commands, filters)),
        selected_index=0,
        scroll_offset=0,
        **changes,
    )


def clear_all_filters(state: SessionState) -> SessionState:
    return _refilter(state, EMPTY_FILTERS, search_mode=False, filter_mode=FilterMode.NONE)


def enter_search_mode(state: SessionState) -> SessionState:
    return _refilter(
        state,
        with_query(state.filters, ""),
        search_mode=True,
        filter_mode=FilterMode.TEXT,
    )


def toggle_date_filter(state: SessionState, now: datetime) -> SessionState:
    """Enable the date filter on Today, or clear every filter when disabling."""
    if state.filters.date.enabled:
        return clear_all_filters(state)
    return _refilter(
        state,
        with_date_preset(state.filters, DatePreset.TODAY, now),
        filter_mode=FilterMode.DATE,
    )


def select_date_preset(state: SessionState, preset: DatePreset, now: datetime) -> SessionState:
    if not state.filters.date.enabled:
        return state
    return _refilter(
        state,
        with_date_preset(state.filters, preset, now),
        filter_mode=FilterMode.DATE,
    )


def cycle_date_preset(state: SessionState, now: datetime) -> SessionState:
    return select_date_preset(state, next_date_preset(state.filters.date.preset), now)


def cycle_shell_filter(state: SessionState) -> SessionState:
    return _refilter(
        state,
        with_shell(state.filters, next_shell_filter(state.filters.shell)),
        filter_mode=FilterMode.SHELL,
    )


def _handle_search_input(state: SessionState, key: str) -> SessionState:
    if key == "ESC":
        return _refilter(state, with_query(state.filters, ""), search_mode=False)
    if key == "ENTER":
        return _refilter(state, state.filters, search_mode=False)
    if key == "BACKSPACE":
        if not state.filters.query:
            return state
        return _refilter(state, with_query(state.filters, state.filters.query[:-1]))
    if len(key) == 1 and key.isprintable():
        return _refilter(state, with_query(state.filters, state.filters.query + key))
    return state


def _handle_filter_panel_key(state: SessionState, key: str, now: datetime) -> SessionState | None:
    """Return the new state for filter-panel keys, or ``None`` if ``key`` is not one."""
    if key == "d":
        return toggle_date_filter(state, now)
    if key == "s":
        return cycle_shell_filter(state)
    if key == "c":
        return clear_all_filters(state)
    if key == "n":
        return cycle_date_preset(state, now)
    preset = preset_for_digit(key)
    if preset is not None:
        return select_date_preset(state, preset, now)
    return None


# Views and directories.


def _rebuild_tree(state: SessionState) -> SessionState:
    tree = tuple(build_directory_tree(state.directories, state.expansion, state.current_dir))
    rebuilt = replace(state, tree=tree)
    if rebuilt.view_mode is ViewMode.TREE:
        return _follow_selection(rebuilt, rebuilt.selected_index)
    return rebuilt


def switch_view_mode(state: SessionState) -> SessionState:
    """Tab: History <-> Tree; Search returns to History."""
    target = ViewMode.TREE if state.view_mode is ViewMode.HISTORY else ViewMode.HISTORY
    return _follow_selection(replace(state, view_mode=target), state.selected_index)


def navigate_to_directory(state: SessionState, directory: str) -> Transition:
    """Make ``directory`` current in HistoryView and request its commands."""
    moved = replace(
        state,
        current_dir=directory,
        breadcrumbs=tuple(breadcrumbs(directory)),
        view_mode=ViewMode.HISTORY,
        selected_index=0,
        scroll_offset=0,
        search_mode=False,
        filters=with_query(state.filters, ""),
        commands=(),
        filtered=(),
    )
    return moved, [LoadRequest.history(directory)]


def navigate_to_parent(state: SessionState) -> Transition:
    parent = parent_directory(state.current_dir)
    if not parent:
        return state, []
    return navigate_to_directory(state, parent)


def set_node_expanded(state: SessionState, path: str, expanded: bool) -> SessionState:
    expansion = dict(state.expansion)
    expansion[path] = expanded
    return _rebuild_tree(replace(state, expansion=expansion))


def tree_right(state: SessionState) -> Transition:
    """Toggle a node that has children; enter a leaf directory."""
    node = selected_node(state)
    if node is None:
        return state, []
    if node.has_children:
        return set_node_expanded(state, node.path, not node.expanded), []
    return navigate_to_directory(state, node.path)


def tree_left(state: SessionState) -> SessionState:
    """Collapse an open node, otherwise jump to its parent row when visible."""
    node = selected_node(state)
    if node is None:
        return state
    if node.expanded and node.has_children:
        return set_node_expanded(state, node.path, False)
    parent = parent_directory(node.path)
    if not parent:
        return state
    for index, candidate in enumerate(state.tree):
        if normalize_separators(candidate.path) == normalize_separators(parent):
            return _follow_selection(state, index)
    return state


def select_item(state: SessionState) -> Transition:
    """Enter: pin a command and finish, or open the selected tree directory."""
    if state.view_mode is ViewMode.TREE:
        node = selected_node(state)
        if node is None:
            return state, []
        return navigate_to_directory(state, node.path)
    if not 0 <= state.selected_index < len(state.filtered):
        return state, []
    return replace(state, selected_command=state.filtered[state.selected_index], quitting=True), []


def refresh_requests(state: SessionState) -> list[LoadRequest]:
    if state.view_mode is ViewMode.TREE:
        return [LoadRequest.tree()]
    return [LoadRequest.history(state.current_dir)]


def quit_session(state: SessionState) -> SessionState:
    return replace(state, quitting=True)


def handle_key(state: SessionState, key: str, now: datetime) -> Transition:
    if key in INTERRUPT_KEYS:
        return quit_session(state), []

    if state.last_error is not None:
        if key in QUIT_KEYS:
            return quit_session(state), []
        if key == "r":
            if state.failed_request is not None:
                return state, [state.failed_request]
            return state, refresh_requests(state)
        return state, []

    if state.search_mode:
        return _handle_search_input(state, key), []

    if key in QUIT_KEYS:
        return quit_session(state), []
    if key == "TAB":
        return switch_view_mode(state), []
    if key == "/" and state.view_mode is not ViewMode.TREE:
        return enter_search_mode(state), []
    if key == "f":
        toggled = replace(state, show_filters=not state.show_filters)
        return _follow_selection(toggled, toggled.selected_index), []

    if state.show_filters:
        handled = _handle_filter_panel_key(state, key, now)
        if handled is not None:
            return handled, []

    if key in UP_KEYS:
        return move_up(state), []
    if key in DOWN_KEYS:
        return move_down(state), []
    if key == "ENTER":
        return select_item(state)
    if key == " ":
        previewed = replace(state, show_preview=not state.show_preview)
        return _follow_selection(previewed, previewed.selected_index), []
    if key == "t":
        tree_state = _follow_selection(replace(state, view_mode=ViewMode.TREE), state.selected_index)
        return tree_state, [LoadRequest.tree()]
    if key == "h":
        history_state = _follow_selection(replace(state, view_mode=ViewMode.HISTORY), state.selected_index)
        return history_state, [LoadRequest.history(state.current_dir)]
    if key == "r":
        return state, refresh_requests(state)

    if state.view_mode is ViewMode.TREE:
        if key == "e":
            return _rebuild_tree(replace(state, expansion=expand_all(state.directories, state.expansion))), []
        if key == "c":
            return _rebuild_tree(replace(state, expansion=collapse_all(state.directories, state.expansion))), []
        if key in BACK_KEYS:
            return tree_left(state), []
        if key == "RIGHT":
            return tree_right(state)
        return state, []

    if key in BACK_KEYS and state.view_mode is ViewMode.HISTORY:
        return navigate_to_parent(state)
    return state, []


__all__ = [
    "Transition",
    "QUIT_KEYS",
    "initial_requests",
    "update",
    "handle_key",
    "handle_resize",
    "apply_history_loaded",
    "apply_tree_loaded",
    "move_selection",
    "move_up",
    "move_down",
    "clear_all_filters",
    "enter_search_mode",
    "toggle_date_filter",
    "select_date_preset",
    "cycle_date_preset",
    "cycle_shell_filter",
    "switch_view_mode",
    "navigate_to_directory",
    "navigate_to_parent",
    "set_node_expanded",
    "tree_left",
    "tree_right",
    "select_item",
    "refresh_requests",
    "quit_session",
]
