"""Rendering engine for the history browser.

``render_lines`` turns a ``SessionState`` into styled screen rows without
touching the terminal; ``render_frame`` writes one fully composed frame.
Colors come from a ``UITheme`` chosen once per session.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from datetime import datetime, timedelta

from ..ansi import clip_ansi_line, pad_to_width, truncate_text
from ..filtering import comparable_datetime
from ..highlight import DEFAULT_STYLE, colorize_command, sanitize_terminal_text
from ..history.types import CommandEntry, ShellKind
from ..paths import display_name
from ..runtime.state import (
    SessionState,
    ViewMode,
    highlighted_command,
    visible_lines,
)
from ..tree_model import DirectoryTreeNode
from ..ui_theme import UITheme

COMMAND_COLUMN_RESERVE = 50
MIN_COMMAND_WIDTH = 20
PATH_COLUMN_RESERVE = 35

CLEAR_SCREEN = "\033[H\033[J"


def format_duration(duration: timedelta) -> str:
    """Compact duration: whole seconds, minutes, hours, or days."""
    seconds = max(0, int(duration.total_seconds()))
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def format_timestamp(timestamp: datetime, now: datetime) -> str:
    """Relative-friendly timestamp for list rows."""
    moment = comparable_datetime(timestamp, now)
    since = now - moment
    if moment.date() == now.date():
        if since < timedelta(hours=1):
            return f"{moment:%H:%M} ({format_duration(since)} ago)"
        return f"{moment:%H:%M:%S}"
    if since < timedelta(days=1):
        return f"yesterday {moment:%H:%M}"
    if since < timedelta(days=7):
        return f"{moment:%a %H:%M}"
    return f"{moment:%m-%d %H:%M}"


def format_last_used(last_used: datetime | None, now: datetime) -> str:
    if last_used is None:
        return "never"
    moment = comparable_datetime(last_used, now)
    since = now - moment
    if since < timedelta(hours=1):
        return "< 1h ago"
    if since < timedelta(days=1):
        return f"{moment:%H:%M} today"
    if since < timedelta(days=7):
        return f"{moment:%a %H:%M}"
    return f"{moment:%b %d}"


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + theme.reset


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _dim(text: str, theme: UITheme) -> str:
    return _styled(text, theme.footer_dim, theme)


def render_breadcrumbs(state: SessionState, theme: UITheme) -> str:
    crumbs = state.breadcrumbs or (".",)
    parts = [
        _styled(display_name(crumb), theme.breadcrumb_current if index == len(crumbs) - 1 else theme.breadcrumb, theme)
        for index, crumb in enumerate(crumbs)
    ]
    line = _dim(" > ", theme).join(parts)
    if state.view_mode is ViewMode.TREE:
        context = " (browsing tree)"
    elif state.commands:
        context = f" ({len(state.commands)} commands)"
    else:
        context = " (no commands)"
    line += _dim(context, theme)
    if len(crumbs) > 1:
        line += _dim(" · ← to go up", theme)
    return line


def format_command_row(
    entry: CommandEntry,
    index: int,
    selected: bool,
    width: int,
    theme: UITheme,
    now: datetime,
) -> str:
    """One history row: index, command, time, shell, exit status, duration."""
    command_width = max(MIN_COMMAND_WIDTH, width - COMMAND_COLUMN_RESERVE)
    command = pad_to_width(truncate_text(sanitize_terminal_text(entry.command), command_width, "..."), command_width)
    exit_text = "ok" if entry.exit_code == 0 else f"x{entry.exit_code}"
    exit_style = theme.exit_ok if entry.exit_code == 0 else theme.exit_failed
    columns = [
        f"{index + 1:3d}",
        _styled(command, theme.command, theme),
        _styled(format_timestamp(entry.timestamp, now), theme.timestamp, theme),
        _styled(f"[{entry.shell.label}]", theme.shell_badge, theme),
        _styled(exit_text, exit_style, theme),
    ]
    if entry.duration > timedelta(seconds=1):
        columns.append(_styled(format_duration(entry.duration), theme.duration, theme))
    line = " │ ".join(columns)
    if selected:
        return selected_with_ansi("▶ " + line, theme)
    return "  " + line


def format_tree_row(node: DirectoryTreeNode, selected: bool, current_dir: str, width: int, theme: UITheme, now: datetime) -> str:
    indent = ""
    if node.level > 0:
        indent = "│  " * (node.level - 1) + "├─ "
    if node.has_children:
        marker = "▾ " if node.expanded else "▸ "
    else:
        marker = "  "
    path_width = max(MIN_COMMAND_WIDTH, width - PATH_COLUMN_RESERVE - len(indent))
    label = truncate_text(display_name(node.path), path_width)
    if node.path == current_dir:
        name_style = theme.tree_current
    elif node.stat.is_active:
        name_style = theme.tree_dir
    else:
        name_style = theme.tree_inactive
    count = _styled(f"({node.stat.command_count})", theme.tree_count, theme)
    last_used = _dim(format_last_used(node.stat.last_used, now), theme)
    line = (
        f"{_styled(indent + marker, theme.tree_marker, theme)}"
        f"{_styled(label, name_style, theme)} {count} {last_used}"
    )
    if selected:
        return selected_with_ansi(line, theme)
    return line


def render_filter_panel(state: SessionState, theme: UITheme) -> list[str]:
    filters = state.filters
    parts = [_dim("Filters:", theme)]
    if filters.query:
        parts.append(f"Text: {_styled(filters.query, theme.search_query, theme)}")
    if filters.date.enabled:
        parts.append(f"Date: {_styled(filters.date.preset.title, theme.filter_active, theme)}")
    if filters.shell != ShellKind.UNKNOWN:
        parts.append(f"Shell: {_styled(filters.shell.label, theme.filter_active, theme)}")
    if not filters.is_active:
        parts.append(_dim("None active", theme))
    hints = ["d: date filter", "s: shell filter", "c: clear all", "f: hide filters"]
    if filters.date.enabled:
        hints.extend(["1-6: date presets", "n: next preset"])
    return [" ".join(parts), _styled(" · ".join(hints), theme.filter_hint, theme), ""]


def render_preview(entry: CommandEntry, theme: UITheme, style: str | None) -> list[str]:
    lines = [_styled("Command Preview", theme.title, theme)]
    if theme.reset:
        command = colorize_command(entry.command, entry.shell, style)
    else:
        command = sanitize_terminal_text(entry.command)
    command_lines = command.splitlines() or [""]
    lines.append(f"Command: {command_lines[0]}")
    lines.extend(f"         {extra}" for extra in command_lines[1:])
    lines.append(f"Directory: {_dim(entry.directory, theme)}")
    lines.append(f"Executed: {_dim(f'{entry.timestamp:%Y-%m-%d %H:%M:%S}', theme)}")
    lines.append(f"Shell: {_dim(entry.shell.label, theme)}")
    if entry.exit_code:
        lines.append(f"Exit Code: {_styled(str(entry.exit_code), theme.exit_failed, theme)}")
    else:
        lines.append(f"Exit Code: {_dim('0 (success)', theme)}")
    if entry.duration > timedelta(0):
        lines.append(f"Duration: {_dim(format_duration(entry.duration), theme)}")
    if entry.tags:
        lines.append(f"Tags: {_dim(', '.join(entry.tags), theme)}")
    return lines


def _scroll_indicator(start: int, end: int, total: int, noun: str, theme: UITheme) -> str:
    text = f"Showing {start + 1}-{end} of {total} {noun}"
    hints = []
    if start > 0:
        hints.append("↑ more above")
    if end < total:
        hints.append("↓ more below")
    if hints:
        text += f" ({', '.join(hints)})"
    return _dim(text, theme)


def footer_hints(state: SessionState) -> list[str]:
    if state.view_mode is ViewMode.TREE:
        if state.tree:
            return ["↑/k up", "↓/j down", "→ expand/enter", "← collapse/up", "enter browse", "e/c all", "h history", "r refresh", "q quit"]
        return ["h history view", "r refresh", "q quit"]
    if state.search_mode:
        return ["type to search", "enter apply filter", "esc cancel", "ctrl-c quit"]
    if state.view_mode is ViewMode.SEARCH:
        return ["↑/k up", "↓/j down", "enter select", "/ new search", "tab history", "q quit"]
    if state.show_filters:
        return ["↑/k up", "↓/j down", "enter select", "d date", "s shell", "c clear", "f hide filters", "q quit"]
    if state.filtered:
        return ["↑/k up", "↓/j down", "enter select", "space preview", "← parent dir", "t browse dirs", "/ search", "f filters", "r refresh", "q quit"]
    return ["t browse directories", "← parent dir", "r refresh", "q quit"]


def render_footer(state: SessionState, theme: UITheme) -> str:
    return _styled(" · ".join(footer_hints(state)), theme.footer_dim, theme)


def _history_header(state: SessionState) -> str:
    name = display_name(state.current_dir)
    if state.current_dir in {"", "."}:
        name = "current directory"
    shown = len(state.filtered)
    total = len(state.commands)
    if shown != total:
        header = f"Directory History - {name} ({shown} of {total} commands)"
    else:
        header = f"Directory History - {name} ({shown} commands)"
    if state.search_mode:
        header += f"  Search: {state.filters.query}_"
    return header


def _empty_history_lines(state: SessionState, theme: UITheme) -> list[str]:
    if state.filters.query:
        texts = [
            "No commands found matching search criteria in this directory.",
            "   Try a different search term or clear filters with 'c'",
        ]
    elif not state.commands:
        texts = [
            "No commands recorded in this directory yet.",
            "   Commands will appear here as you execute them in this directory.",
            "   Use 't' to browse other directories with command history.",
        ]
    else:
        texts = [
            "All commands are filtered out.",
            "   Clear filters with 'c' to see all commands.",
        ]
    return [_dim(text, theme) for text in texts]


def _command_list_lines(state: SessionState, theme: UITheme, now: datetime, style: str | None) -> list[str]:
    rows = visible_lines(state)
    start = state.scroll_offset
    end = min(start + rows, len(state.filtered))
    lines = [
        format_command_row(state.filtered[index], index, index == state.selected_index, state.width, theme, now)
        for index in range(start, end)
    ]
    if len(state.filtered) > rows:
        lines.append(_scroll_indicator(start, end, len(state.filtered), "commands", theme))
    if state.show_preview:
        entry = highlighted_command(state)
        if entry is not None:
            lines.append("")
            lines.extend(render_preview(entry, theme, style))
    return lines


def _render_history(state: SessionState, theme: UITheme, now: datetime, style: str | None) -> list[str]:
    lines = [render_breadcrumbs(state, theme), _styled(_history_header(state), theme.title, theme)]
    if state.commands:
        last = format_timestamp(state.commands[0].timestamp, now)
        lines.append(_dim(f"Last command: {last}", theme))
    if state.show_filters:
        lines.extend(render_filter_panel(state, theme))
    lines.append("")
    if not state.filtered:
        lines.extend(_empty_history_lines(state, theme))
    else:
        lines.append(_dim(f"{'#':>3} │ Command", theme))
        lines.extend(_command_list_lines(state, theme, now, style))
    return lines


def _render_search(state: SessionState, theme: UITheme, now: datetime, style: str | None) -> list[str]:
    prompt = f"Search: {state.filters.query}"
    if state.search_mode:
        prompt += "_"
    lines = [
        render_breadcrumbs(state, theme),
        _styled("Search Commands", theme.title, theme),
        _styled(prompt, theme.search_query, theme),
    ]
    if state.show_filters:
        lines.extend(render_filter_panel(state, theme))
    lines.append("")
    if not state.filtered:
        if state.filters.query:
            lines.append(_dim("No commands found matching search criteria.", theme))
    else:
        lines.extend(_command_list_lines(state, theme, now, style))
    return lines


def _render_tree(state: SessionState, theme: UITheme, now: datetime) -> list[str]:
    lines = [
        render_breadcrumbs(state, theme),
        _styled(f"Directory Tree ({len(state.directories)} directories)", theme.title, theme),
    ]
    if state.tree:
        lines.append(_dim("→ expand/collapse folders, Enter to browse directory history", theme))
    lines.append("")
    if not state.tree:
        if not state.directories:
            lines.append(_dim("No directories with command history found.", theme))
            lines.append(_dim("   Execute some commands to start building your history!", theme))
        else:
            lines.append(_dim("Building directory tree...", theme))
        return lines

    rows = visible_lines(state)
    start = state.scroll_offset
    end = min(start + rows, len(state.tree))
    for index in range(start, end):
        node = state.tree[index]
        lines.append(format_tree_row(node, index == state.selected_index, state.current_dir, state.width, theme, now))
    if len(state.tree) > rows:
        lines.append(_scroll_indicator(start, end, len(state.tree), "directories", theme))
    if state.current_dir:
        lines.append(_styled(f"Current: {state.current_dir}", theme.breadcrumb, theme))
    return lines


def render_error(state: SessionState, theme: UITheme) -> list[str]:
    return [
        _styled(f"Error: {state.last_error}", theme.error, theme),
        "",
        _dim("Press 'r' to retry or 'q' to quit.", theme),
    ]


def render_lines(
    state: SessionState,
    theme: UITheme,
    now: datetime | None = None,
    *,
    style: str | None = DEFAULT_STYLE,
) -> list[str]:
    """Compose the screen rows for ``state``; at most ``state.height`` rows.

    The footer always occupies the last row; every row is clipped to the
    terminal width.
    """
    now = now or datetime.now()
    if state.last_error is not None:
        body = render_error(state, theme)
    elif state.view_mode is ViewMode.TREE:
        body = _render_tree(state, theme, now)
    elif state.view_mode is ViewMode.SEARCH:
        body = _render_search(state, theme, now, style)
    else:
        body = _render_history(state, theme, now, style)

    footer = render_footer(state, theme) if state.last_error is None else ""
    body_rows = max(0, state.height - 1)
    lines = body[:body_rows]
    lines.extend([""] * (body_rows - len(lines)))
    lines.append(footer)
    return [_finish_line(line, state.width, theme) for line in lines[: max(1, state.height)]]


def _finish_line(line: str, width: int, theme: UITheme) -> str:
    clipped = clip_ansi_line(line, width)
    if "\033" in clipped and theme.reset:
        clipped += theme.reset
    return clipped


def render_frame(lines: list[str], write: Callable[[str], None] | None = None) -> None:
    """Write a composed frame in one call, replacing the previous one."""
    frame = CLEAR_SCREEN + "\r\n".join(lines)
    if write is None:
        os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))
        return
    write(frame)


__all__ = [
    "format_duration",
    "format_timestamp",
    "format_last_used",
    "format_command_row",
    "format_tree_row",
    "render_breadcrumbs",
    "render_filter_panel",
    "render_preview",
    "render_error",
    "footer_hints",
    "render_footer",
    "render_lines",
    "render_frame",
]
