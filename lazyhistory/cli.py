"""Command-line front door for lazyhistory.

Parses CLI options, resolves config defaults and the history file, then
either prints a directory's history (``--list``) or runs the interactive
browser and prints the command the user picked.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .history.storage import HistoryStorage, JsonHistoryStorage, StorageError
from .runtime import run_browser
from .runtime.config import (
    default_history_path,
    default_log_path,
    load_debug_logging,
    load_history_file,
    load_syntax_style,
    load_theme_name,
    save_syntax_style,
    save_theme_name,
)
from .runtime.loader import HistoryLoader
from .runtime.messages import LoadFailed, LoadRequest
from .ui_theme import available_theme_names

_logger = logging.getLogger(__name__)


def _setup_logging(debug: bool) -> None:
    """Send logs to a file; the terminal belongs to the browser."""
    log_path = default_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[logging.FileHandler(log_path, encoding="utf-8")],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyhistory",
        description="Browse, filter, and re-select shell commands recorded per directory.",
    )
    parser.add_argument("--dir", default=None, help="Directory whose history to show. Defaults to the current directory.")
    parser.add_argument("--search", default="", metavar="PATTERN", help="Start with this search query applied.")
    parser.add_argument("--tree", action="store_true", help="Start in the directory tree view.")
    parser.add_argument("--history-file", default=None, metavar="PATH", help="JSON or JSON-lines history export to read.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}, plain).",
    )
    parser.add_argument("--style", default=None, help="Pygments style for the command preview.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Remember the given --theme and --style in the config file.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--debug", action="store_true", help="Write debug-level logs.")
    parser.add_argument("--list", action="store_true", help="Print matching commands and exit without the browser.")
    return parser


def resolve_history_path(explicit: str | None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    return load_history_file() or default_history_path()


def resolve_directory(explicit: str | None) -> str:
    if explicit:
        return os.path.abspath(os.path.expanduser(explicit))
    return str(Path.cwd())


def list_commands(storage: HistoryStorage, directory: str, pattern: str) -> list[str]:
    """Return the non-interactive listing for ``directory``, newest first.

    Raises ``SystemExit`` when the storage query fails.
    """
    request = LoadRequest.search(pattern, directory) if pattern else LoadRequest.history(directory)
    result = HistoryLoader(storage).run(request)
    if isinstance(result, LoadFailed):
        raise SystemExit(f"Error: {result.error}")
    return [entry.command for entry in result.commands]


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run lazyhistory."""
    args = build_parser().parse_args(argv)
    _setup_logging(args.debug or load_debug_logging())

    if args.save_defaults:
        if args.theme:
            save_theme_name(args.theme)
        if args.style:
            save_syntax_style(args.style)

    directory = resolve_directory(args.dir)
    history_path = resolve_history_path(args.history_file)
    try:
        storage = JsonHistoryStorage(history_path)
    except StorageError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    try:
        if args.list:
            commands = list_commands(storage, directory, args.search)
            if not commands:
                if args.search:
                    print(f"No commands found matching: {args.search}")
                else:
                    print("No commands found in history.")
                return
            for command in commands:
                print(command)
            return

        if not sys.stdin.isatty() or not sys.stdout.isatty():
            raise SystemExit("Error: the browser needs an interactive terminal (use --list to print history).")

        pinned = run_browser(
            storage,
            directory,
            tree=args.tree,
            search=args.search,
            theme_name=args.theme or load_theme_name(),
            style=args.style or load_syntax_style(),
            no_color=args.no_color,
        )
    finally:
        storage.close()

    if pinned is not None:
        _logger.info("Selected command %s", pinned.id)
        print(pinned.command)
