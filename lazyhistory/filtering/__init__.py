"""Filter engine: composable text/shell/date predicates and date presets."""

from __future__ import annotations

from .dates import DatePreset, next_date_preset, preset_for_digit, resolve_date_range
from .filters import (
    EMPTY_FILTERS,
    DateFilter,
    FilterState,
    apply_filters,
    clear_filters,
    comparable_datetime,
    matches_date,
    matches_filters,
    matches_query,
    matches_shell,
    next_shell_filter,
    with_date_preset,
    with_query,
    with_shell,
)

__all__ = [
    "DatePreset",
    "next_date_preset",
    "preset_for_digit",
    "resolve_date_range",
    "DateFilter",
    "FilterState",
    "EMPTY_FILTERS",
    "next_shell_filter",
    "comparable_datetime",
    "matches_query",
    "matches_shell",
    "matches_date",
    "matches_filters",
    "apply_filters",
    "clear_filters",
    "with_query",
    "with_shell",
    "with_date_preset",
]
