"""Persisted watchlist of saved movies and TV shows."""

from .facade import WatchlistFacade, create_watchlist
from .manager import WatchlistEvent, WatchlistManager
from .models import ALL_KINDS, ItemKind, WatchlistItem, build_item
from .queries import SortOrder, filter_items, sort_items
from .storage import (
    CorruptPersistedData,
    ItemStore,
    JSONFileBackend,
    KeyValueBackend,
    MemoryBackend,
    RedisBackend,
    StorageUnavailable,
    WatchlistStorageError,
    get_backend,
)

__all__ = [
    "ALL_KINDS",
    "CorruptPersistedData",
    "ItemKind",
    "ItemStore",
    "JSONFileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    "RedisBackend",
    "SortOrder",
    "StorageUnavailable",
    "WatchlistEvent",
    "WatchlistFacade",
    "WatchlistItem",
    "WatchlistManager",
    "WatchlistStorageError",
    "build_item",
    "create_watchlist",
    "filter_items",
    "get_backend",
    "sort_items",
]
