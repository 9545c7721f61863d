"""Background worker that runs persistence writes off the caller's thread."""

from __future__ import annotations

import logging
import threading
from queue import Queue, Empty
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SnapshotWriter:
    """Single threaded writer that applies store operations in submission order."""

    def __init__(self, name: str = "WatchlistSnapshotWriter"):
        self.name = name
        self.queue: "Queue[Callable[[], object]]" = Queue()
        self.worker: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self.worker is not None and self.worker.is_alive()

    def start(self) -> None:
        if self.running:
            return

        self._stop_event.clear()
        self.worker = threading.Thread(target=self._run, name=self.name, daemon=True)
        self.worker.start()
        logger.info("Snapshot writer started")

    def stop(self, timeout: float = 5) -> None:
        self.flush()
        self._stop_event.set()
        if self.worker:
            self.worker.join(timeout=timeout)
            self.worker = None
        logger.info("Snapshot writer stopped")

    def submit(self, task: Callable[[], object]) -> None:
        if not self.running:
            self.start()
        self.queue.put(task)

    def flush(self) -> None:
        """Block until every submitted write has been applied."""
        if self.running:
            self.queue.join()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                task = self.queue.get(timeout=0.5)
            except Empty:
                continue

            try:
                task()
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception("Snapshot write failed: %s", exc)
            finally:
                self.queue.task_done()
