"""Shared fixtures for the watchlist test-suite."""

from __future__ import annotations

from typing import Iterator

import pytest

from watchlist_manager import ItemStore, MemoryBackend, WatchlistFacade, WatchlistItem, create_watchlist
from watchlist_manager.models import ItemKind

STORAGE_KEY = "tmovies_watchlist"


class FakeClock:
    """Deterministic millisecond clock that advances on every read."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000) -> None:
        self.now = start
        self.step = step
        self.calls: list[int] = []

    def __call__(self) -> int:
        value = self.now
        self.calls.append(value)
        self.now += self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> ItemStore:
    return ItemStore(backend, STORAGE_KEY)


@pytest.fixture
def watchlist(backend: MemoryBackend, clock: FakeClock) -> Iterator[WatchlistFacade]:
    facade = create_watchlist(backend, key=STORAGE_KEY, clock=clock, background_writes=False)
    yield facade
    facade.close()


def make_item(item_id: str, *, kind: str = "movie", label: str | None = None, added_at: int = 0,
              thumbnail: str = "") -> WatchlistItem:
    return WatchlistItem(
        id=item_id,
        kind=ItemKind(kind),
        label=label or f"Title {item_id}",
        thumbnail=thumbnail,
        added_at=added_at,
    )


FIGHT_CLUB = {
    "id": "550",
    "title": "Fight Club",
    "original_title": "Fight Club",
    "poster_path": "/pB8BM7pdSp6B6Ie8DQlJp1wAwh6.jpg",
}

BREAKING_BAD = {
    "id": "1399",
    "name": "Breaking Bad",
    "poster_path": "/ggFHVNvVeFxEmojieBF5P0fWQga.jpg",
}
