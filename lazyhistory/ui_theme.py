"""UI theme definitions and selection helpers.

Themes color the browser chrome only. Syntax highlighting of the command
preview is a separate pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title: str
    breadcrumb: str
    breadcrumb_current: str
    timestamp: str
    shell_badge: str
    command: str
    exit_ok: str
    exit_failed: str
    duration: str
    tree_marker: str
    tree_dir: str
    tree_current: str
    tree_inactive: str
    tree_count: str
    filter_active: str
    filter_hint: str
    search_query: str
    footer_key: str
    footer_dim: str
    error: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    breadcrumb="\033[38;5;250m",
    breadcrumb_current="\033[1;38;5;81m",
    timestamp="\033[38;5;109m",
    shell_badge="\033[38;5;214m",
    command="\033[38;5;252m",
    exit_ok="\033[38;5;42m",
    exit_failed="\033[38;5;203m",
    duration="\033[2;38;5;250m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_current="\033[1;38;5;81m",
    tree_inactive="\033[2;38;5;250m",
    tree_count="\033[38;5;109m",
    filter_active="\033[1;38;5;229m",
    filter_hint="\033[2;38;5;250m",
    search_query="\033[1;38;5;81m",
    footer_key="\033[38;5;229m",
    footer_dim="\033[2;38;5;250m",
    error="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    breadcrumb="\033[38;5;153m",
    breadcrumb_current="\033[1;38;5;45m",
    timestamp="\033[38;5;73m",
    shell_badge="\033[38;5;215m",
    command="\033[38;5;252m",
    exit_ok="\033[38;5;84m",
    exit_failed="\033[38;5;209m",
    duration="\033[2;38;5;110m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_current="\033[1;38;5;39m",
    tree_inactive="\033[2;38;5;110m",
    tree_count="\033[38;5;73m",
    filter_active="\033[1;38;5;153m",
    filter_hint="\033[2;38;5;110m",
    search_query="\033[1;38;5;45m",
    footer_key="\033[38;5;153m",
    footer_dim="\033[2;38;5;110m",
    error="\033[1;38;5;209m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    title="",
    breadcrumb="",
    breadcrumb_current="",
    timestamp="",
    shell_badge="",
    command="",
    exit_ok="",
    exit_failed="",
    duration="",
    tree_marker="",
    tree_dir="",
    tree_current="",
    tree_inactive="",
    tree_count="",
    filter_active="",
    filter_hint="",
    search_query="",
    footer_key="",
    footer_dim="",
    error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return the concrete theme for a requested name and color mode."""
    if no_color or (name and str(name).strip().lower() == PLAIN_THEME.name):
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
