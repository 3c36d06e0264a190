"""Execute ``LoadRequest`` values against the storage collaborator."""

from __future__ import annotations

import logging

from ..history.storage import HistoryStorage, supports_directory_stats
from ..history.types import DirectoryStat
from .messages import (
    DirectoryHistoryLoaded,
    DirectoryTreeLoaded,
    LoadFailed,
    LoadKind,
    LoadRequest,
    LoadResult,
)

_logger = logging.getLogger(__name__)


class HistoryLoader:
    """Turn load requests into load-result events.

    Whether storage offers ``get_directory_stats`` is decided once here rather
    than on every tree load. Storage exceptions never escape ``run``; they are
    reported as ``LoadFailed`` with the error text.
    """

    def __init__(self, storage: HistoryStorage) -> None:
        self.storage = storage
        self.supports_directory_stats = supports_directory_stats(storage)

    def run(self, request: LoadRequest) -> LoadResult:
        _logger.debug("Running %s load for %r", request.kind.value, request.directory)
        try:
            if request.kind is LoadKind.HISTORY:
                commands = self.storage.get_commands_by_directory(request.directory)
                return DirectoryHistoryLoaded(request.directory, tuple(commands))
            if request.kind is LoadKind.SEARCH:
                commands = self.storage.search_commands(request.pattern, request.directory)
                return DirectoryHistoryLoaded(request.directory, tuple(commands))
            return DirectoryTreeLoaded(tuple(self.load_directory_stats()))
        except Exception as exc:
            _logger.warning("%s load failed: %s", request.kind.value, exc)
            return LoadFailed(request, str(exc) or type(exc).__name__)

    def load_directory_stats(self) -> list[DirectoryStat]:
        """Prefer storage-side stats; otherwise derive them per directory.

        Directories whose command query fails are skipped in the fallback.
        """
        if self.supports_directory_stats:
            try:
                return list(self.storage.get_directory_stats())  # type: ignore[attr-defined]
            except Exception as exc:
                _logger.info("Directory stats unavailable, deriving from commands: %s", exc)

        stats: list[DirectoryStat] = []
        for directory in self.storage.get_directories_with_history():
            try:
                commands = self.storage.get_commands_by_directory(directory)
            except Exception as exc:
                _logger.debug("Skipping %s in tree: %s", directory, exc)
                continue
            last_used = max((entry.timestamp for entry in commands), default=None)
            stats.append(
                DirectoryStat(
                    path=directory,
                    command_count=len(commands),
                    last_used=last_used,
                    is_active=True,
                )
            )
        return stats


__all__ = ["HistoryLoader"]
