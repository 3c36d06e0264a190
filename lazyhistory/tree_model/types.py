"""Directory tree node datatype used by the tree view."""

from __future__ import annotations

from dataclasses import dataclass

from ..history.types import DirectoryStat


@dataclass(frozen=True)
class DirectoryTreeNode:
    """One directory row in the flattened tree, with its full child subtree."""

    stat: DirectoryStat
    level: int
    expanded: bool
    children: tuple[DirectoryTreeNode, ...] = ()

    @property
    def path(self) -> str:
        return self.stat.path

    @property
    def has_children(self) -> bool:
        return bool(self.children)
