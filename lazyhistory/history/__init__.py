"""Command-history records and the storage collaborator contract."""

from __future__ import annotations

from .storage import (
    DirectoryStatsProvider,
    HistoryStorage,
    JsonHistoryStorage,
    MemoryHistoryStorage,
    StorageError,
    read_history_file,
    supports_directory_stats,
)
from .types import CommandEntry, CommandValidationError, DirectoryStat, ShellKind

__all__ = [
    "ShellKind",
    "CommandEntry",
    "CommandValidationError",
    "DirectoryStat",
    "StorageError",
    "HistoryStorage",
    "DirectoryStatsProvider",
    "supports_directory_stats",
    "MemoryHistoryStorage",
    "JsonHistoryStorage",
    "read_history_file",
]
