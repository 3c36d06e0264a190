"""Events consumed by the session state machine and load requests it emits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..history.types import CommandEntry, DirectoryStat


class LoadKind(Enum):
    HISTORY = "history"
    TREE = "tree"
    SEARCH = "search"


@dataclass(frozen=True)
class LoadRequest:
    """Storage work the event loop must run off the main thread."""

    kind: LoadKind
    directory: str = ""
    pattern: str = ""

    @classmethod
    def history(cls, directory: str) -> LoadRequest:
        return cls(LoadKind.HISTORY, directory=directory)

    @classmethod
    def tree(cls) -> LoadRequest:
        return cls(LoadKind.TREE)

    @classmethod
    def search(cls, pattern: str, directory: str = "") -> LoadRequest:
        return cls(LoadKind.SEARCH, directory=directory, pattern=pattern)


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class DirectoryHistoryLoaded:
    directory: str
    commands: tuple[CommandEntry, ...]


@dataclass(frozen=True)
class DirectoryTreeLoaded:
    stats: tuple[DirectoryStat, ...]


@dataclass(frozen=True)
class LoadFailed:
    request: LoadRequest
    error: str


LoadResult = DirectoryHistoryLoaded | DirectoryTreeLoaded | LoadFailed

# Key tokens come from ``lazyhistory.input.read_key``; any ``str`` is a key event.
Event = str | Resize | DirectoryHistoryLoaded | DirectoryTreeLoaded | LoadFailed


__all__ = [
    "LoadKind",
    "LoadRequest",
    "Resize",
    "DirectoryHistoryLoaded",
    "DirectoryTreeLoaded",
    "LoadFailed",
    "LoadResult",
    "Event",
]
