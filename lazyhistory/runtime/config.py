"""Persistent JSON config helpers.

Stores the UI theme, preview syntax style, history file location, and the
debug-logging switch. Missing or malformed config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

from ..highlight import DEFAULT_STYLE
from ..ui_theme import DEFAULT_THEME, available_theme_names

APP_NAME = "lazyhistory"
CONFIG_FILENAME = "config.json"
HISTORY_FILENAME = "history.json"
LOG_FILENAME = "lazyhistory.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        _logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks a browse session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        _logger.warning("Could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def load_theme_name() -> str:
    """Return the configured theme, or ``default`` for unknown names."""
    name = _load_string("theme")
    if name is None:
        return DEFAULT_THEME.name
    name = name.lower()
    if name == "plain" or name in available_theme_names():
        return name
    return DEFAULT_THEME.name


def load_syntax_style() -> str:
    return _load_string("syntax_style") or DEFAULT_STYLE


def _save_value(key: str, value: object) -> None:
    data = load_config()
    data[key] = value
    save_config(data)


def save_theme_name(name: str) -> None:
    _save_value("theme", name.strip().lower())


def save_syntax_style(style: str) -> None:
    _save_value("syntax_style", style.strip())


def load_history_file() -> Path | None:
    """Return the configured history export path, ``~`` expanded."""
    value = _load_string("history_file")
    if value is None:
        return None
    return Path(value).expanduser()


def load_debug_logging() -> bool:
    """Only an explicit ``true`` enables debug logging."""
    value = load_config().get("debug_logging")
    return value if isinstance(value, bool) else False


def default_history_path() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / HISTORY_FILENAME


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_theme_name",
    "load_syntax_style",
    "save_theme_name",
    "save_syntax_style",
    "load_history_file",
    "load_debug_logging",
    "default_history_path",
    "default_log_path",
]
