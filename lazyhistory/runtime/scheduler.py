"""Background worker that runs storage loads off the event loop."""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from queue import Empty, Queue

from .messages import LoadRequest, LoadResult

_logger = logging.getLogger(__name__)


class LoadScheduler:
    """Single-threaded FIFO load runner.

    Every scheduled request runs exactly once, in submission order; nothing is
    cancelled or coalesced. Results are collected with ``drain_results`` from
    the event loop, which applies them in arrival order.
    """

    def __init__(self, run_request: Callable[[LoadRequest], LoadResult]) -> None:
        self._run_request = run_request
        self._lock = threading.Lock()
        self._pending: deque[LoadRequest] = deque()
        self._running = False
        self._results: Queue[LoadResult] = Queue()

    def _worker(self) -> None:
        while True:
            with self._lock:
                if not self._pending:
                    self._running = False
                    return
                request = self._pending.popleft()
            try:
                result = self._run_request(request)
            except Exception:
                _logger.exception("Load worker failed on %s", request)
                continue
            self._results.put(result)

    def schedule(self, request: LoadRequest) -> None:
        with self._lock:
            self._pending.append(request)
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="lazyhistory-load",
            daemon=True,
        )
        worker.start()

    def schedule_all(self, requests: list[LoadRequest]) -> None:
        for request in requests:
            self.schedule(request)

    def drain_results(self) -> list[LoadResult]:
        """Return every completed result without blocking."""
        out: list[LoadResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._running or bool(self._pending)


__all__ = ["LoadScheduler"]
