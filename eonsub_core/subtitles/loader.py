# eonsub_core/subtitles/loader.py
# -*- coding: utf-8 -*-
"""
Background subtitle loading.

Files are prepared on a thread pool and published on the driver thread:

    loader = BackgroundLoader(engine)
    ticket = loader.submit(path)
    ...
    # on each clock tick, from the driver thread
    results = loader.publish_ready()

A cancelled ticket is dropped without touching the engine.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from ..models.results import LoadResult
from .errors import LoadCancelled

if TYPE_CHECKING:
    from .engine import PreparedLoad, SubtitleEngine

logger = logging.getLogger(__name__)


class LoadTicket:
    """Handle for one submitted load."""

    def __init__(self, path: Path, future: Future, cancel_event: threading.Event):
        self.path = path
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Request cancellation; a load already published is not undone."""
        self._cancel_event.set()
        self._future.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future.done()

    def wait(self, timeout: float | None = None) -> None:
        """Block until the prepare step finished (or was cancelled)."""
        if self._future.cancelled():
            return
        try:
            self._future.result(timeout=timeout)
        except (LoadCancelled, CancelledError):
            pass

    def prepared(self) -> PreparedLoad | None:
        """Prepared load once finished; None while running or when cancelled."""
        if self.cancelled or not self._future.done() or self._future.cancelled():
            return None
        try:
            return self._future.result()
        except (LoadCancelled, CancelledError):
            return None


class BackgroundLoader:
    """
    Runs SubtitleEngine.prepare_file on worker threads.

    Args:
        engine: Engine the loads are published to
        max_workers: Thread pool size
    """

    def __init__(self, engine: SubtitleEngine, max_workers: int = 2):
        self.engine = engine
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="subtitle-load")
        self._pending: list[LoadTicket] = []

    def submit(self, path: Path | str) -> LoadTicket:
        path = Path(path)
        cancel_event = threading.Event()
        future = self._executor.submit(self.engine.prepare_file, path, cancel_event)
        ticket = LoadTicket(path, future, cancel_event)
        self._pending.append(ticket)
        logger.debug("Queued subtitle load: %s", path)
        return ticket

    @property
    def pending(self) -> int:
        return len(self._pending)

    def publish_ready(self) -> list[LoadResult]:
        """
        Publish finished loads in submission order. Call from the driver thread.

        Stops at the first load still running so publication order matches
        submission order. Cancelled loads are discarded.
        """
        results: list[LoadResult] = []
        while self._pending:
            ticket = self._pending[0]
            if ticket.cancelled:
                self._pending.pop(0)
                logger.debug("Discarded cancelled subtitle load: %s", ticket.path)
                continue
            if not ticket.done():
                break
            self._pending.pop(0)
            prepared = ticket.prepared()
            if prepared is None:
                continue
            results.append(self.engine.publish(prepared))
        return results

    def cancel_all(self) -> None:
        for ticket in self._pending:
            ticket.cancel()

    def shutdown(self, wait: bool = True) -> None:
        self.cancel_all()
        self._executor.shutdown(wait=wait)
        self._pending.clear()

    def __enter__(self) -> BackgroundLoader:
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

