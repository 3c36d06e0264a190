"""String path helpers for recorded directories.

Recorded directories may come from POSIX or Windows shells, so these helpers
work on plain strings and accept both ``/`` and ``\\`` as separators instead
of going through ``pathlib`` for the host platform.
"""

from __future__ import annotations


def normalize_separators(path: str) -> str:
    """Return ``path`` with every backslash turned into a forward slash."""
    return path.replace("\\", "/")


def breadcrumbs(path: str) -> list[str]:
    """Return cumulative prefixes of ``path`` from its root down to itself.

    ``""`` and ``"."`` yield ``["."]``. A leading POSIX root is kept as its own
    ``"/"`` crumb, and a Windows drive (``C:``) is the first crumb.
    """
    if path in {"", "."}:
        return ["."]

    parts = normalize_separators(path).split("/")
    crumbs: list[str] = []
    current = ""
    for index, part in enumerate(parts):
        if index == 0 and part == "":
            current = "/"
            crumbs.append(current)
            continue
        if not part:
            continue
        if current in {"", "/"}:
            current = current + part
        else:
            current = f"{current}/{part}"
        crumbs.append(current)

    return crumbs or ["."]


def parent_directory(path: str) -> str:
    """Return the parent of ``path``, or ``""`` when it has none.

    ``""``, ``"."`` and ``"/"`` have no parent. A single trailing separator is
    ignored; a path without any separator has parent ``"."``.
    """
    if path in {"", ".", "/"}:
        return ""

    normalized = normalize_separators(path)
    if normalized.endswith("/"):
        normalized = normalized[:-1]

    last_sep = normalized.rfind("/")
    if last_sep == -1:
        return "."
    if last_sep == 0:
        return "/"
    return normalized[:last_sep]


def is_strict_ancestor(candidate: str, path: str) -> bool:
    """Return whether ``candidate`` is a proper ancestor directory of ``path``.

    Both paths are compared in slash-normalized form and only on whole path
    components, so ``/home/us`` is not an ancestor of ``/home/user``.
    """
    if not candidate or not path:
        return False
    candidate_norm = normalize_separators(candidate)
    path_norm = normalize_separators(path)
    if len(candidate_norm) > 1:
        candidate_norm = candidate_norm.rstrip("/")
    if len(path_norm) > 1:
        path_norm = path_norm.rstrip("/")
    if candidate_norm == path_norm:
        return False
    if candidate_norm == "/":
        return path_norm.startswith("/")
    return path_norm.startswith(candidate_norm + "/")


def display_name(path: str) -> str:
    """Return the last component of ``path`` for compact labels."""
    normalized = normalize_separators(path)
    if normalized in {"", "."}:
        return "."
    if normalized == "/":
        return "/"
    name = normalized.rstrip("/").rsplit("/", 1)[-1]
    return name or "/"


__all__ = [
    "normalize_separators",
    "breadcrumbs",
    "parent_directory",
    "is_strict_ancestor",
    "display_name",
]
