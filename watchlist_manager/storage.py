"""Key-value backends and the item store that persists the watchlist snapshot."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional, Sequence

import redis

from config import Config

from .models import WatchlistItem

logger = logging.getLogger(__name__)


class WatchlistStorageError(Exception):
    """Base class for persistence failures."""


class StorageUnavailable(WatchlistStorageError):
    """The backend is missing, disabled, full or throws on access."""


class CorruptPersistedData(WatchlistStorageError):
    """The stored value does not parse into the expected record shape."""


class KeyValueBackend(ABC):
    """String key-value storage, the same surface a browser's localStorage offers."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass


class MemoryBackend(KeyValueBackend):
    """In-process storage. ``capacity`` (bytes) emulates a storage quota."""

    def __init__(self, capacity: Optional[int] = None):
        self.entries: Dict[str, str] = {}
        self.capacity = capacity

    def get_item(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.capacity is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self.entries.items() if k != key)
            if used + len(value.encode("utf-8")) > self.capacity:
                raise StorageUnavailable(f"quota of {self.capacity} bytes exceeded")
        self.entries[key] = value

    def remove_item(self, key: str) -> None:
        self.entries.pop(key, None)


class JSONFileBackend(KeyValueBackend):
    """Keeps every key in one JSON object on disk."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or Config.WATCHLIST_STORAGE_FILE)
        self._lock = RLock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptPersistedData(f"{self.path} is not UTF-8: {exc}") from exc
        except OSError as exc:
            raise StorageUnavailable(f"cannot read {self.path}: {exc}") from exc
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise CorruptPersistedData(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptPersistedData(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailable(f"cannot write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_all().get(key)
            if value is not None and not isinstance(value, str):
                raise CorruptPersistedData(f"value under {key!r} is not a string")
            return value

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except CorruptPersistedData as exc:
                logger.warning("Discarding unreadable storage file %s: %s", self.path, exc)
                data = {}
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except CorruptPersistedData as exc:
                logger.warning("Discarding unreadable storage file %s: %s", self.path, exc)
                data = {}
            if key in data:
                del data[key]
                self._write_all(data)


class RedisBackend(KeyValueBackend):
    """Stores the snapshot as a plain Redis string."""

    def __init__(self, redis_url: Optional[str] = None, client=None):
        self.redis_url = redis_url or Config.REDIS_URL
        self.redis_client = client if client is not None else redis.from_url(self.redis_url)

    def get_item(self, key: str) -> Optional[str]:
        try:
            value = self.redis_client.get(key)
        except redis.RedisError as exc:
            raise StorageUnavailable(f"Redis read failed: {exc}") from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CorruptPersistedData(f"value under {key!r} is not UTF-8") from exc
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            self.redis_client.set(key, value)
        except redis.RedisError as exc:
            raise StorageUnavailable(f"Redis write failed: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self.redis_client.delete(key)
        except redis.RedisError as exc:
            raise StorageUnavailable(f"Redis delete failed: {exc}") from exc


def get_backend(name: Optional[str] = None) -> KeyValueBackend:
    """Pick the backend named in configuration."""
    name = (name or Config.WATCHLIST_STORAGE_BACKEND).lower()
    if name == "memory":
        return MemoryBackend()
    if name == "redis":
        return RedisBackend()
    if name == "file":
        return JSONFileBackend()
    raise ValueError(f"unknown storage backend: {name}")


class ItemStore:
    """Loads, saves and clears the serialized watchlist under one fixed key.

    Storage failures never leave this class: a bad or missing snapshot loads as
    an empty list, and failed writes are logged and reported through the
    boolean return value only.
    """

    def __init__(self, backend: Optional[KeyValueBackend] = None, key: Optional[str] = None):
        self.backend = backend if backend is not None else get_backend()
        self.key = key or Config.WATCHLIST_STORAGE_KEY

    def load(self) -> List[WatchlistItem]:
        try:
            raw = self.backend.get_item(self.key)
            if raw is None:
                return []
            return self._decode(raw)
        except CorruptPersistedData as exc:
            logger.warning("Persisted watchlist under %s is corrupt, starting empty: %s", self.key, exc)
        except StorageUnavailable as exc:
            logger.warning("Watchlist storage unavailable, starting empty: %s", exc)
        return []

    def save(self, items: Sequence[WatchlistItem]) -> bool:
        payload = json.dumps([item.to_dict() for item in items], ensure_ascii=False)
        try:
            self.backend.set_item(self.key, payload)
        except WatchlistStorageError as exc:
            logger.error("Failed to save watchlist (%d items): %s", len(items), exc)
            return False
        return True

    def clear(self) -> bool:
        try:
            self.backend.remove_item(self.key)
        except WatchlistStorageError as exc:
            logger.error("Failed to clear watchlist storage: %s", exc)
            return False
        return True

    def _decode(self, raw: str) -> List[WatchlistItem]:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as exc:
            raise CorruptPersistedData(f"not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise CorruptPersistedData("snapshot is not a list")

        items: List[WatchlistItem] = []
        seen = set()
        for index, record in enumerate(data):
            try:
                item = WatchlistItem.from_dict(record)
            except ValueError as exc:
                raise CorruptPersistedData(f"record {index}: {exc}") from exc
            if item.id in seen:
                logger.warning("Dropping duplicate watchlist id %s from snapshot", item.id)
                continue
            seen.add(item.id)
            items.append(item)
        return items
