from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from lazyhistory.filtering import (
    EMPTY_FILTERS,
    DatePreset,
    FilterState,
    apply_filters,
    clear_filters,
    comparable_datetime,
    matches_date,
    matches_query,
    matches_shell,
    next_shell_filter,
    with_date_preset,
    with_query,
    with_shell,
)
from lazyhistory.history.types import CommandEntry, ShellKind

NOW = datetime(2024, 3, 13, 12, 0, 0)


def _entry(command: str, age: timedelta, shell: ShellKind = ShellKind.BASH) -> CommandEntry:
    return CommandEntry(
        id=command,
        command=command,
        directory="/home/user/project",
        timestamp=NOW - age,
        shell=shell,
    )


def _scenario_commands() -> list[CommandEntry]:
    return [
        _entry("git status", timedelta(0)),
        _entry("npm install", timedelta(hours=1)),
        _entry("git commit", timedelta(hours=2)),
        _entry("docker ps", timedelta(hours=25)),
    ]


class FilterScenarioTests(unittest.TestCase):
    def test_query_then_shell_then_today(self) -> None:
        commands = _scenario_commands()

        by_query = apply_filters(commands, with_query(EMPTY_FILTERS, "git"))
        self.assertEqual([entry.command for entry in by_query], ["git status", "git commit"])

        filters = with_shell(with_query(EMPTY_FILTERS, "git"), ShellKind.BASH)
        self.assertEqual(apply_filters(commands, filters), by_query)

        today_only = with_date_preset(EMPTY_FILTERS, DatePreset.TODAY, NOW)
        self.assertEqual(
            [entry.command for entry in apply_filters(commands, today_only)],
            ["git status", "npm install", "git commit"],
        )

        combined = with_date_preset(filters, DatePreset.TODAY, NOW)
        self.assertEqual(apply_filters(commands, combined), by_query)

    def test_conjunction_equals_intersection_of_single_predicates(self) -> None:
        commands = _scenario_commands() + [
            _entry("git push", timedelta(minutes=5), ShellKind.ZSH),
            _entry("GIT log", timedelta(days=3), ShellKind.BASH),
        ]
        query = with_query(EMPTY_FILTERS, "git")
        shell = with_shell(EMPTY_FILTERS, ShellKind.BASH)
        date = with_date_preset(EMPTY_FILTERS, DatePreset.THIS_WEEK, NOW)
        combined = FilterState(query="git", shell=ShellKind.BASH, date=date.date)

        expected = [
            entry
            for entry in commands
            if entry in apply_filters(commands, query)
            and entry in apply_filters(commands, shell)
            and entry in apply_filters(commands, date)
        ]

        self.assertEqual(apply_filters(commands, combined), expected)

    def test_clear_is_idempotent_and_restores_everything(self) -> None:
        commands = _scenario_commands()
        busy = with_date_preset(with_shell(with_query(EMPTY_FILTERS, "x"), ShellKind.CMD), DatePreset.TODAY, NOW)

        self.assertEqual(clear_filters(busy), EMPTY_FILTERS)
        self.assertEqual(clear_filters(clear_filters(busy)), EMPTY_FILTERS)
        self.assertEqual(apply_filters(commands, clear_filters(busy)), commands)

    def test_order_is_preserved(self) -> None:
        commands = list(reversed(_scenario_commands()))
        result = apply_filters(commands, with_query(EMPTY_FILTERS, "git"))

        self.assertEqual([entry.command for entry in result], ["git commit", "git status"])


class PredicateTests(unittest.TestCase):
    def test_query_is_case_insensitive_and_empty_passes(self) -> None:
        entry = _entry("Docker Compose Up", timedelta(0))
        self.assertTrue(matches_query(entry, "compose"))
        self.assertTrue(matches_query(entry, ""))
        self.assertFalse(matches_query(entry, "kubectl"))

    def test_unknown_shell_means_no_filter(self) -> None:
        entry = _entry("dir", timedelta(0), ShellKind.CMD)
        self.assertTrue(matches_shell(entry, ShellKind.UNKNOWN))
        self.assertTrue(matches_shell(entry, ShellKind.CMD))
        self.assertFalse(matches_shell(entry, ShellKind.BASH))

    def test_date_bounds_are_inclusive(self) -> None:
        filters = with_date_preset(EMPTY_FILTERS, DatePreset.TODAY, NOW)
        start, end = filters.date.start, filters.date.end

        at_start = _entry("a", NOW - start)
        at_end = _entry("b", NOW - end)
        before = _entry("c", NOW - start + timedelta(microseconds=1))

        self.assertTrue(matches_date(at_start, filters.date))
        self.assertTrue(matches_date(at_end, filters.date))
        self.assertFalse(matches_date(before, filters.date))

    def test_disabled_date_filter_passes_everything(self) -> None:
        self.assertTrue(matches_date(_entry("old", timedelta(days=400)), EMPTY_FILTERS.date))

    def test_aware_timestamps_compare_with_naive_bounds(self) -> None:
        aware = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)
        naive = comparable_datetime(aware, NOW)

        self.assertIsNone(naive.tzinfo)
        self.assertEqual(comparable_datetime(NOW, NOW), NOW)

    def test_shell_cycle_order(self) -> None:
        shell = ShellKind.UNKNOWN
        seen = []
        for _ in range(5):
            shell = next_shell_filter(shell)
            seen.append(shell)

        self.assertEqual(
            seen,
            [ShellKind.POWERSHELL, ShellKind.BASH, ShellKind.ZSH, ShellKind.CMD, ShellKind.UNKNOWN],
        )

    def test_is_active(self) -> None:
        self.assertFalse(EMPTY_FILTERS.is_active)
        self.assertTrue(with_query(EMPTY_FILTERS, "x").is_active)
        self.assertTrue(with_shell(EMPTY_FILTERS, ShellKind.ZSH).is_active)


if __name__ == "__main__":
    unittest.main()
