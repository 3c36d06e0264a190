"""Shell-aware syntax highlighting for the command preview.

Commands are rendered with pygments using a lexer picked from the entry's
shell. Terminal control bytes are neutralized first so a recorded command can
never move the cursor or ring the bell while being previewed.
"""

from __future__ import annotations

import logging
import re

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import BashLexer, BatchLexer, PowerShellLexer, TextLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .history.types import ShellKind

DEFAULT_STYLE = "monokai"

_logger = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_LEXERS: dict[ShellKind, type[Lexer]] = {
    ShellKind.BASH: BashLexer,
    ShellKind.ZSH: BashLexer,
    ShellKind.POWERSHELL: PowerShellLexer,
    ShellKind.CMD: BatchLexer,
}
_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` if pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _logger.debug("Unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def lexer_for_shell(shell: ShellKind) -> Lexer:
    return _LEXERS.get(shell, TextLexer)()


def colorize_command(text: str, shell: ShellKind, style: str | None = DEFAULT_STYLE) -> str:
    """Highlight ``text`` as ``shell`` source; returns ANSI-colored text."""
    source = sanitize_terminal_text(text)
    formatter = _formatter_for_style(normalize_style(style))
    return highlight(source, lexer_for_shell(shell), formatter).rstrip("\n")


__all__ = [
    "DEFAULT_STYLE",
    "sanitize_terminal_text",
    "normalize_style",
    "lexer_for_shell",
    "colorize_command",
]
