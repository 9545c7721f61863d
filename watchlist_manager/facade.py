"""The call surface presentation code uses."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from config import Config

from . import queries
from .manager import Observer, WatchlistManager
from .models import ALL_KINDS, ItemKind, WatchlistItem
from .queries import SortOrder
from .storage import ItemStore, KeyValueBackend
from .writer import SnapshotWriter

logger = logging.getLogger(__name__)


class WatchlistFacade:
    """Re-exports manager operations and query composition.

    Reads always go to the manager's in-memory list, so a read made right after
    a mutator returns sees that mutation whether or not the write has reached
    storage yet.
    """

    def __init__(self, manager: WatchlistManager):
        self.manager = manager

    # mutators
    def add(self, candidate: Mapping[str, Any], kind: Union[ItemKind, str]) -> WatchlistItem:
        return self.manager.add(candidate, kind)

    def remove(self, item_id: str) -> bool:
        return self.manager.remove(item_id)

    def toggle(self, candidate: Mapping[str, Any], kind: Union[ItemKind, str]) -> bool:
        return self.manager.toggle(candidate, kind)

    def clear_all(self) -> None:
        self.manager.clear_all()

    # reads
    def contains(self, item_id: str) -> bool:
        return self.manager.contains(item_id)

    def count(self) -> int:
        return self.manager.count()

    def items(self) -> List[WatchlistItem]:
        return self.manager.items()

    def filtered(self, kind: Union[ItemKind, str] = ALL_KINDS) -> List[WatchlistItem]:
        return self.manager.filtered(kind)

    @staticmethod
    def sorted(items: Iterable[WatchlistItem], order: Union[SortOrder, str] = SortOrder.NEWEST_FIRST) -> List[WatchlistItem]:
        return queries.sort_items(items, order)

    def view(self, kind: Union[ItemKind, str] = ALL_KINDS,
             order: Union[SortOrder, str] = SortOrder.NEWEST_FIRST) -> List[WatchlistItem]:
        return self.sorted(self.filtered(kind), order)

    # observers and lifecycle
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        return self.manager.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self.manager.unsubscribe(observer)

    def flush(self) -> None:
        self.manager.flush()

    def close(self) -> None:
        self.manager.close()

    def __enter__(self) -> "WatchlistFacade":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_watchlist(backend: Optional[KeyValueBackend] = None, *, key: Optional[str] = None,
                     clock: Optional[Callable[[], int]] = None,
                     background_writes: Optional[bool] = None) -> WatchlistFacade:
    """Build store, manager and facade, hydrating from storage once."""
    if background_writes is None:
        background_writes = Config.WATCHLIST_BACKGROUND_WRITES

    store = ItemStore(backend, key)
    writer = SnapshotWriter() if background_writes else None
    manager = WatchlistManager(store, clock=clock, writer=writer)
    logger.info(
        "Watchlist ready: backend=%s key=%s background_writes=%s",
        type(store.backend).__name__,
        store.key,
        background_writes,
    )
    return WatchlistFacade(manager)
