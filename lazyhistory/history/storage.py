"""Storage collaborator contract plus in-memory and JSON-file adapters.

The browser only depends on ``HistoryStorage``. ``get_directory_stats`` is an
optional capability; callers resolve it once with ``supports_directory_stats``.
Adapters here serialize access with a lock because background loads may run
while a previous load is still in flight.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from .types import CommandEntry, DirectoryStat

_logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Any failure reported by a storage backend."""


@runtime_checkable
class HistoryStorage(Protocol):
    def get_commands_by_directory(self, directory: str) -> list[CommandEntry]: ...

    def get_directories_with_history(self) -> list[str]: ...

    def search_commands(self, pattern: str, directory: str) -> list[CommandEntry]: ...

    def close(self) -> None: ...


@runtime_checkable
class DirectoryStatsProvider(Protocol):
    def get_directory_stats(self) -> list[DirectoryStat]: ...


def supports_directory_stats(storage: object) -> bool:
    """Return whether ``storage`` exposes the enriched directory-stats query."""
    return isinstance(storage, DirectoryStatsProvider)


def _newest_first(commands: list[CommandEntry]) -> list[CommandEntry]:
    return sorted(commands, key=lambda entry: entry.timestamp, reverse=True)


class MemoryHistoryStorage:
    """Lock-protected in-memory history store.

    Query results are ordered newest-first, matching what the browser expects
    from any storage backend.
    """

    def __init__(self, commands: list[CommandEntry] | None = None) -> None:
        self._lock = threading.Lock()
        self._commands: list[CommandEntry] = list(commands or [])
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("storage is closed")

    def save_command(self, entry: CommandEntry) -> None:
        entry.validate()
        with self._lock:
            self._check_open()
            self._commands.append(entry)

    def get_commands_by_directory(self, directory: str) -> list[CommandEntry]:
        with self._lock:
            self._check_open()
            matches = [entry for entry in self._commands if entry.directory == directory]
        return _newest_first(matches)

    def get_directories_with_history(self) -> list[str]:
        with self._lock:
            self._check_open()
            directories = {entry.directory for entry in self._commands}
        return sorted(directories)

    def search_commands(self, pattern: str, directory: str) -> list[CommandEntry]:
        folded = pattern.casefold()
        with self._lock:
            self._check_open()
            matches = [
                entry
                for entry in self._commands
                if (not directory or entry.directory == directory) and folded in entry.command.casefold()
            ]
        return _newest_first(matches)

    def get_directory_stats(self) -> list[DirectoryStat]:
        with self._lock:
            self._check_open()
            counts: dict[str, int] = {}
            last_used: dict[str, CommandEntry] = {}
            for entry in self._commands:
                counts[entry.directory] = counts.get(entry.directory, 0) + 1
                previous = last_used.get(entry.directory)
                if previous is None or entry.timestamp > previous.timestamp:
                    last_used[entry.directory] = entry
        return [
            DirectoryStat(
                path=path,
                command_count=counts[path],
                last_used=last_used[path].timestamp,
                is_active=True,
            )
            for path in sorted(counts)
        ]

    def close(self) -> None:
        with self._lock:
            self._closed = True


def read_history_file(path: Path) -> list[CommandEntry]:
    """Parse a JSON array or JSON-lines export of command records.

    A missing file is an empty history. Anything unreadable or malformed raises
    ``StorageError`` naming the file.
    """
    if not path.exists():
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"cannot read history file {path}: {exc}") from exc

    stripped = text.strip()
    if not stripped:
        return []
    try:
        if stripped.startswith("["):
            raw_records = json.loads(stripped)
        else:
            raw_records = [json.loads(line) for line in stripped.splitlines() if line.strip()]
    except json.JSONDecodeError as exc:
        raise StorageError(f"malformed history file {path}: {exc}") from exc

    entries: list[CommandEntry] = []
    for index, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            raise StorageError(f"malformed history file {path}: record {index} is not an object")
        try:
            entries.append(CommandEntry.from_json(raw))
        except ValueError as exc:
            raise StorageError(f"malformed history file {path}: record {index}: {exc}") from exc
    _logger.debug("Loaded %d history records from %s", len(entries), path)
    return entries


class JsonHistoryStorage(MemoryHistoryStorage):
    """History backed by a JSON export file, loaded once at construction."""

    def __init__(self, path: Path) -> None:
        super().__init__(read_history_file(path))
        self.path = path


__all__ = [
    "StorageError",
    "HistoryStorage",
    "DirectoryStatsProvider",
    "supports_directory_stats",
    "MemoryHistoryStorage",
    "JsonHistoryStorage",
    "read_history_file",
]
