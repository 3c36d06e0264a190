"""Named date presets and their resolved time windows."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import IntEnum


class DatePreset(IntEnum):
    """Date window presets; the integer value is the quick-select digit."""

    NONE = 0
    TODAY = 1
    YESTERDAY = 2
    THIS_WEEK = 3
    LAST_WEEK = 4
    THIS_MONTH = 5
    LAST_MONTH = 6

    @property
    def title(self) -> str:
        if self is DatePreset.NONE:
            return "Custom"
        return self.name.replace("_", " ").title()


_PRESET_CYCLE: tuple[DatePreset, ...] = (
    DatePreset.TODAY,
    DatePreset.YESTERDAY,
    DatePreset.THIS_WEEK,
    DatePreset.LAST_WEEK,
    DatePreset.THIS_MONTH,
    DatePreset.LAST_MONTH,
)


def next_date_preset(preset: DatePreset) -> DatePreset:
    """Advance Today -> Yesterday -> ... -> Last Month -> Today."""
    try:
        index = _PRESET_CYCLE.index(preset)
    except ValueError:
        return DatePreset.TODAY
    return _PRESET_CYCLE[(index + 1) % len(_PRESET_CYCLE)]


def preset_for_digit(key: str) -> DatePreset | None:
    """Map quick-select keys ``"1"``..``"6"`` to presets."""
    if len(key) != 1 or key not in "123456":
        return None
    return DatePreset(int(key))


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _first_of_month(year: int, month: int, like: datetime) -> datetime:
    return like.replace(year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)


def _add_months(moment: datetime, months: int) -> datetime:
    """Return the first day of the month ``months`` away from ``moment``'s month."""
    month_index = moment.year * 12 + (moment.month - 1) + months
    return _first_of_month(month_index // 12, month_index % 12 + 1, moment)


def resolve_date_range(preset: DatePreset, now: datetime) -> tuple[datetime, datetime]:
    """Return ``(start, end)`` for ``preset`` relative to ``now``.

    Weeks start on Monday (Sunday is day 7). Results keep ``now``'s tzinfo.
    ``DatePreset.NONE`` resolves to an empty window at ``now``.
    """
    today = _midnight(now)
    if preset is DatePreset.TODAY:
        return today, today + timedelta(days=1)
    if preset is DatePreset.YESTERDAY:
        start = today - timedelta(days=1)
        return start, start + timedelta(days=1)
    if preset in {DatePreset.THIS_WEEK, DatePreset.LAST_WEEK}:
        monday = today - timedelta(days=now.isoweekday() - 1)
        if preset is DatePreset.LAST_WEEK:
            monday -= timedelta(days=7)
        return monday, monday + timedelta(days=7)
    if preset is DatePreset.THIS_MONTH:
        start = _add_months(now, 0)
        return start, _add_months(now, 1)
    if preset is DatePreset.LAST_MONTH:
        return _add_months(now, -1), _add_months(now, 0)
    return now, now


__all__ = [
    "DatePreset",
    "next_date_preset",
    "preset_for_digit",
    "resolve_date_range",
]
