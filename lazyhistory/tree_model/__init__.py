"""Directory hierarchy construction for the tree view.

Defines ``DirectoryTreeNode`` and turns flat ``DirectoryStat`` lists into the
pre-order row sequence the tree view displays and indexes into.
"""

from __future__ import annotations

from .build import (
    build_directory_forest,
    build_directory_tree,
    collapse_all,
    default_expanded,
    expand_all,
    flatten_tree,
    is_expanded,
    remember_expansion,
)
from .types import DirectoryTreeNode

__all__ = [
    "DirectoryTreeNode",
    "build_directory_forest",
    "build_directory_tree",
    "flatten_tree",
    "default_expanded",
    "is_expanded",
    "remember_expansion",
    "expand_all",
    "collapse_all",
]
