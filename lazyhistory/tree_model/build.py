"""Build and flatten the directory hierarchy from per-directory stats."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..history.types import DirectoryStat
from ..paths import is_strict_ancestor, normalize_separators, parent_directory
from .types import DirectoryTreeNode


def _processing_order(stats: Iterable[DirectoryStat]) -> list[DirectoryStat]:
    """Sort by path length, then lexicographically, so parents precede children."""
    return sorted(stats, key=lambda stat: (len(stat.path), stat.path))


def default_expanded(path: str, current_dir: str) -> bool:
    """Directories above the current one start expanded; everything else collapsed."""
    return is_strict_ancestor(path, current_dir)


def is_expanded(path: str, expansion: Mapping[str, bool], current_dir: str) -> bool:
    if path in expansion:
        return bool(expansion[path])
    return default_expanded(path, current_dir)


def remember_expansion(
    stats: Iterable[DirectoryStat],
    expansion: Mapping[str, bool],
    current_dir: str,
) -> dict[str, bool]:
    """Return a copy of ``expansion`` with defaults recorded for unseen paths.

    Existing entries are kept verbatim; nothing is ever removed.
    """
    remembered = dict(expansion)
    for stat in _processing_order(stats):
        if stat.path not in remembered:
            remembered[stat.path] = default_expanded(stat.path, current_dir)
    return remembered


def build_directory_forest(
    stats: Iterable[DirectoryStat],
    expansion: Mapping[str, bool],
    current_dir: str,
) -> list[DirectoryTreeNode]:
    """Link stats into root nodes whose children are the stats one level below.

    A stat whose parent path is not itself in ``stats`` becomes a root. Paths
    are matched in slash-normalized form; duplicate paths keep the first stat.
    """
    ordered = _processing_order(stats)
    by_key: dict[str, DirectoryStat] = {}
    for stat in ordered:
        by_key.setdefault(normalize_separators(stat.path), stat)

    children_of: dict[str, list[str]] = {key: [] for key in by_key}
    root_keys: list[str] = []
    for key, stat in by_key.items():
        parent = parent_directory(stat.path)
        parent_key = normalize_separators(parent)
        if parent in {"", "."} or parent_key == key or parent_key not in by_key:
            root_keys.append(key)
        else:
            children_of[parent_key].append(key)

    def make_node(key: str, level: int) -> DirectoryTreeNode:
        stat = by_key[key]
        return DirectoryTreeNode(
            stat=stat,
            level=level,
            expanded=is_expanded(stat.path, expansion, current_dir),
            children=tuple(make_node(child_key, level + 1) for child_key in children_of[key]),
        )

    return [make_node(key, 0) for key in root_keys]


def flatten_tree(roots: Iterable[DirectoryTreeNode]) -> list[DirectoryTreeNode]:
    """Pre-order flatten that skips the subtree of every collapsed node."""
    flattened: list[DirectoryTreeNode] = []

    def walk(nodes: Iterable[DirectoryTreeNode]) -> None:
        for node in nodes:
            flattened.append(node)
            if node.expanded and node.children:
                walk(node.children)

    walk(roots)
    return flattened


def build_directory_tree(
    stats: Iterable[DirectoryStat],
    expansion: Mapping[str, bool],
    current_dir: str,
) -> list[DirectoryTreeNode]:
    """Return the visible tree rows for ``stats`` in display order."""
    return flatten_tree(build_directory_forest(stats, expansion, current_dir))


def expand_all(stats: Iterable[DirectoryStat], expansion: Mapping[str, bool]) -> dict[str, bool]:
    expanded = dict(expansion)
    for stat in stats:
        expanded[stat.path] = True
    return expanded


def collapse_all(stats: Iterable[DirectoryStat], expansion: Mapping[str, bool]) -> dict[str, bool]:
    collapsed = {path: False for path in expansion}
    for stat in stats:
        collapsed[stat.path] = False
    return collapsed


__all__ = [
    "default_expanded",
    "is_expanded",
    "remember_expansion",
    "build_directory_forest",
    "flatten_tree",
    "build_directory_tree",
    "expand_all",
    "collapse_all",
]
