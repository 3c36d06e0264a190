"""ANSI-aware text measurement and line shaping utilities.

Rows are built with embedded color codes; these helpers measure and clip them
by terminal cells so escape sequences never count toward width.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns; East Asian wide/fullwidth characters
    consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible width of ``text`` in terminal cells, ignoring escapes."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept verbatim. Tabs and newlines inside the text are
    flattened to single spaces so one logical row stays one screen row.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        if ch in "\t\r\n":
            ch = " "
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def truncate_text(text: str, max_cols: int, ellipsis: str = "…") -> str:
    """Shorten plain ``text`` to ``max_cols`` cells, marking the cut with ``ellipsis``."""
    if max_cols <= 0:
        return ""
    if display_width(text) <= max_cols:
        return text
    if max_cols <= len(ellipsis):
        return clip_ansi_line(text, max_cols)
    return clip_ansi_line(text, max_cols - display_width(ellipsis)) + ellipsis


def pad_to_width(text: str, width: int) -> str:
    """Right-pad a styled string with spaces up to ``width`` visible cells."""
    gap = width - display_width(text)
    if gap <= 0:
        return text
    return text + " " * gap


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "clip_ansi_line",
    "truncate_text",
    "pad_to_width",
]
