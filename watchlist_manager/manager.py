"""Canonical in-memory watchlist with persistence and change notification."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Union

from .models import ALL_KINDS, ItemKind, WatchlistItem, build_item
from .queries import filter_items
from .storage import ItemStore
from .writer import SnapshotWriter

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class WatchlistEvent:
    """Published to observers after a mutation changed the collection."""

    action: str  # "added", "removed" or "cleared"
    item: Optional[WatchlistItem]
    count: int


Observer = Callable[[WatchlistEvent], None]


class WatchlistManager:
    """Owns the watchlist and keeps ids unique.

    The collection is hydrated from the store once, here in the constructor.
    After that the in-memory list is authoritative: reads never go back to the
    store, and every mutation updates memory first and then hands a snapshot
    to the store (inline, or through a ``SnapshotWriter`` when one is given).
    """

    def __init__(self, store: Optional[ItemStore] = None, clock: Optional[Callable[[], int]] = None,
                 writer: Optional[SnapshotWriter] = None):
        self.store = store if store is not None else ItemStore()
        self.writer = writer
        self._clock = clock or _now_ms
        self._items: List[WatchlistItem] = self.store.load()
        self._observers: List[Observer] = []
        self._closed = False
        logger.info("Watchlist hydrated with %d items", len(self._items))

    # -- reads ------------------------------------------------------------
    def contains(self, item_id: str) -> bool:
        item_id = str(item_id)
        return any(item.id == item_id for item in self._items)

    def count(self) -> int:
        return len(self._items)

    def items(self) -> List[WatchlistItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[WatchlistItem]:
        item_id = str(item_id)
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def filtered(self, kind: Union[ItemKind, str] = ALL_KINDS) -> List[WatchlistItem]:
        return filter_items(self._items, kind)

    # -- mutations --------------------------------------------------------
    def add(self, candidate: Mapping[str, Any], kind: Union[ItemKind, str]) -> WatchlistItem:
        """Prepend the candidate unless its id is already saved.

        Re-adding is a no-op that returns the stored item with its original
        ``added_at``.
        """
        self._ensure_open()
        raw_id = candidate.get("id")
        existing = self.get(raw_id) if raw_id is not None else None
        if existing is not None:
            logger.debug("Watchlist already holds %s, ignoring add", existing.id)
            return existing

        new_item = build_item(candidate, kind, self._clock())
        self._items.insert(0, new_item)
        logger.info("Added %s (%s) to watchlist", new_item.id, new_item.kind.value)
        self._persist()
        self._notify(WatchlistEvent("added", new_item, len(self._items)))
        return new_item

    def remove(self, item_id: str) -> bool:
        self._ensure_open()
        item = self.get(item_id)
        if item is None:
            return False

        self._items = [entry for entry in self._items if entry.id != item.id]
        logger.info("Removed %s from watchlist", item.id)
        self._persist()
        self._notify(WatchlistEvent("removed", item, len(self._items)))
        return True

    def toggle(self, candidate: Mapping[str, Any], kind: Union[ItemKind, str]) -> bool:
        """Remove the candidate if saved, add it otherwise. Returns the new membership."""
        item_id = candidate.get("id")
        if item_id is not None and self.contains(item_id):
            self.remove(item_id)
            return False
        self.add(candidate, kind)
        return True

    def clear_all(self) -> None:
        self._ensure_open()
        self._items = []
        if self.writer is not None:
            self.writer.submit(self.store.clear)
        else:
            self.store.clear()
        logger.info("Watchlist cleared")
        self._notify(WatchlistEvent("cleared", None, 0))

    # -- observers --------------------------------------------------------
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; the returned callable unregisters it."""
        self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # -- lifecycle --------------------------------------------------------
    def flush(self) -> None:
        if self.writer is not None:
            self.writer.flush()

    def close(self) -> None:
        if self._closed:
            return
        if self.writer is not None:
            self.writer.stop()
        self._observers.clear()
        self._closed = True

    def __enter__(self) -> "WatchlistManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- internals --------------------------------------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("watchlist manager is closed")

    def _persist(self) -> None:
        snapshot = list(self._items)
        if self.writer is not None:
            self.writer.submit(lambda: self.store.save(snapshot))
        else:
            self.store.save(snapshot)

    def _notify(self, event: WatchlistEvent) -> None:
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception("Watchlist observer failed: %s", exc)
