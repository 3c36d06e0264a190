"""Main interactive event loop for the terminal UI.

Each pass checks the terminal size, applies finished background loads,
redraws when the state changed, and waits briefly for one key press. All
behavior lives in ``machine.update``; this loop only wires inputs to it.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from os import terminal_size

from ..input import read_key
from .machine import update
from .messages import Event, Resize
from .scheduler import LoadScheduler
from .state import SessionState
from .terminal import TerminalController

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


def run_main_loop(
    state: SessionState,
    terminal: TerminalController,
    stdin_fd: int,
    scheduler: LoadScheduler,
    render: Callable[[SessionState], None],
    *,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    read: Callable[[int, int | None], str] = read_key,
    get_terminal_size: Callable[[tuple[int, int]], terminal_size] = shutil.get_terminal_size,
    clock: Callable[[], datetime] = datetime.now,
) -> SessionState:
    """Run until the session is quitting and return the final state."""

    def apply(current: SessionState, event: Event) -> SessionState:
        next_state, requests = update(current, event, clock())
        for request in requests:
            _logger.debug("Scheduling %s load for %r", request.kind.value, request.directory)
        scheduler.schedule_all(requests)
        return next_state

    dirty = True
    with terminal.raw_mode():
        while not state.quitting:
            term = get_terminal_size((state.width, state.height))
            if (term.columns, term.lines) != (state.width, state.height):
                state = apply(state, Resize(term.columns, term.lines))
                dirty = True

            for result in scheduler.drain_results():
                state = apply(state, result)
                dirty = True
            if state.quitting:
                break

            if dirty:
                render(state)
                dirty = False

            key = read(stdin_fd, timing.key_timeout_ms)
            if not key:
                continue
            next_state = apply(state, key)
            if next_state is not state:
                dirty = True
            state = next_state

    _logger.info(
        "Session ended in %s (pinned: %s)",
        state.current_dir,
        state.selected_command.id if state.selected_command is not None else "none",
    )
    return state


__all__ = ["RuntimeLoopTiming", "run_main_loop"]
