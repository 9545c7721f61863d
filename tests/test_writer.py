"""Tests for background persistence writes."""

from __future__ import annotations

import threading

from watchlist_manager import create_watchlist
from watchlist_manager.storage import ItemStore, MemoryBackend
from watchlist_manager.writer import SnapshotWriter

from tests.conftest import BREAKING_BAD, FIGHT_CLUB, STORAGE_KEY


class GatedBackend(MemoryBackend):
    """Blocks writes until the test opens the gate."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = threading.Event()

    def set_item(self, key, value):
        self.gate.wait(timeout=5)
        super().set_item(key, value)

    def remove_item(self, key):
        self.gate.wait(timeout=5)
        super().remove_item(key)


def test_writer_runs_tasks_in_submission_order() -> None:
    writer = SnapshotWriter()
    seen = []

    for index in range(5):
        writer.submit(lambda index=index: seen.append(index))
    writer.flush()
    writer.stop()

    assert seen == [0, 1, 2, 3, 4]
    assert not writer.running


def test_writer_survives_failing_task() -> None:
    writer = SnapshotWriter()
    seen = []

    def boom():
        raise RuntimeError("disk on fire")

    writer.submit(boom)
    writer.submit(lambda: seen.append("after"))
    writer.stop()

    assert seen == ["after"]


def test_reads_do_not_wait_for_pending_writes(clock) -> None:
    backend = GatedBackend()
    watchlist = create_watchlist(backend, key=STORAGE_KEY, clock=clock, background_writes=True)

    watchlist.add(FIGHT_CLUB, "movie")

    assert watchlist.contains("550")
    assert watchlist.count() == 1
    assert STORAGE_KEY not in backend.entries

    backend.gate.set()
    watchlist.flush()
    assert [item.id for item in ItemStore(backend, STORAGE_KEY).load()] == ["550"]
    watchlist.close()


def test_clear_is_ordered_after_pending_saves(clock) -> None:
    backend = GatedBackend()
    watchlist = create_watchlist(backend, key=STORAGE_KEY, clock=clock, background_writes=True)

    watchlist.add(FIGHT_CLUB, "movie")
    watchlist.add(BREAKING_BAD, "tv")
    watchlist.clear_all()
    backend.gate.set()
    watchlist.close()

    assert STORAGE_KEY not in backend.entries


def test_close_drains_pending_writes(clock) -> None:
    backend = MemoryBackend()
    watchlist = create_watchlist(backend, key=STORAGE_KEY, clock=clock, background_writes=True)

    watchlist.add(FIGHT_CLUB, "movie")
    watchlist.close()

    reloaded = create_watchlist(backend, key=STORAGE_KEY, clock=clock, background_writes=False)
    assert reloaded.contains("550")
