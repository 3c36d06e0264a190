"""Text, shell, and date predicates over an already-loaded command list.

Filtering never re-sorts: callers pass commands newest-first and receive the
surviving commands in the same relative order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime

from ..history.types import CommandEntry, ShellKind
from .dates import DatePreset, resolve_date_range

_SHELL_CYCLE: tuple[ShellKind, ...] = (
    ShellKind.UNKNOWN,
    ShellKind.POWERSHELL,
    ShellKind.BASH,
    ShellKind.ZSH,
    ShellKind.CMD,
)


@dataclass(frozen=True)
class DateFilter:
    enabled: bool = False
    preset: DatePreset = DatePreset.NONE
    start: datetime | None = None
    end: datetime | None = None


@dataclass(frozen=True)
class FilterState:
    """Active predicates; ``ShellKind.UNKNOWN`` means no shell filter."""

    query: str = ""
    shell: ShellKind = ShellKind.UNKNOWN
    date: DateFilter = DateFilter()

    @property
    def is_active(self) -> bool:
        return bool(self.query) or self.shell != ShellKind.UNKNOWN or self.date.enabled


EMPTY_FILTERS = FilterState()


def next_shell_filter(shell: ShellKind) -> ShellKind:
    """Advance Unknown -> PowerShell -> Bash -> Zsh -> Cmd -> Unknown."""
    try:
        index = _SHELL_CYCLE.index(shell)
    except ValueError:
        return ShellKind.UNKNOWN
    return _SHELL_CYCLE[(index + 1) % len(_SHELL_CYCLE)]


def comparable_datetime(moment: datetime, reference: datetime) -> datetime:
    """Coerce ``moment`` to the naive/aware flavor of ``reference``."""
    moment_aware = moment.tzinfo is not None
    reference_aware = reference.tzinfo is not None
    if moment_aware == reference_aware:
        return moment
    if moment_aware:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(reference.tzinfo)


def matches_query(entry: CommandEntry, query: str) -> bool:
    if not query:
        return True
    return query.casefold() in entry.command.casefold()


def matches_shell(entry: CommandEntry, shell: ShellKind) -> bool:
    if shell == ShellKind.UNKNOWN:
        return True
    return entry.shell == shell


def matches_date(entry: CommandEntry, date_filter: DateFilter) -> bool:
    """Inclusive ``[start, end]`` check; disabled or unresolved filters pass."""
    if not date_filter.enabled or date_filter.start is None or date_filter.end is None:
        return True
    timestamp = comparable_datetime(entry.timestamp, date_filter.start)
    return date_filter.start <= timestamp <= date_filter.end


def matches_filters(entry: CommandEntry, filters: FilterState) -> bool:
    return (
        matches_query(entry, filters.query)
        and matches_shell(entry, filters.shell)
        and matches_date(entry, filters.date)
    )


def apply_filters(commands: Iterable[CommandEntry], filters: FilterState) -> list[CommandEntry]:
    """Return commands passing every enabled predicate, order preserved."""
    return [entry for entry in commands if matches_filters(entry, filters)]


def clear_filters(_filters: FilterState | None = None) -> FilterState:
    """Return the canonical empty filter state."""
    return EMPTY_FILTERS


def with_query(filters: FilterState, query: str) -> FilterState:
    return replace(filters, query=query)


def with_shell(filters: FilterState, shell: ShellKind) -> FilterState:
    return replace(filters, shell=shell)


def with_date_preset(filters: FilterState, preset: DatePreset, now: datetime) -> FilterState:
    """Enable the date filter on ``preset`` with bounds resolved against ``now``."""
    start, end = resolve_date_range(preset, now)
    return replace(filters, date=DateFilter(enabled=True, preset=preset, start=start, end=end))


__all__ = [
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
