"""Public runtime entry points.

The pure session state machine lives in ``machine`` and ``state``; this
package also groups the background loader, the event loop, and the
interactive bootstrap (``run_browser``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import HistoryBrowser
    from .loop import RuntimeLoopTiming


def run_browser(*args, **kwargs):
    """Lazily import the browser entrypoint to avoid package-import cycles."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "HistoryBrowser":
        from .app import HistoryBrowser as _HistoryBrowser

        return _HistoryBrowser
    if name == "RuntimeLoopTiming":
        from .loop import RuntimeLoopTiming as _RuntimeLoopTiming

        return _RuntimeLoopTiming
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_browser",
    "run_main_loop",
    "HistoryBrowser",
    "RuntimeLoopTiming",
]
