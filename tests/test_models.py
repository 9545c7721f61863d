"""Tests for item construction and the persisted record codec."""

from __future__ import annotations

import pytest

from watchlist_manager.models import ItemKind, WatchlistItem, build_item

from tests.conftest import BREAKING_BAD, FIGHT_CLUB


def test_build_item_uses_title_and_poster() -> None:
    item = build_item(FIGHT_CLUB, "movie", 123)

    assert item == WatchlistItem("550", ItemKind.MOVIE, "Fight Club", "/pB8BM7pdSp6B6Ie8DQlJp1wAwh6.jpg", 123)


def test_build_item_falls_back_to_name_for_tv_shows() -> None:
    item = build_item(BREAKING_BAD, ItemKind.TV, 1)

    assert item.label == "Breaking Bad"
    assert item.kind is ItemKind.TV


def test_build_item_prefers_original_title_over_name() -> None:
    item = build_item({"id": 7, "original_title": "Amélie", "name": "Amelie"}, "movie", 1)

    assert item.id == "7"
    assert item.label == "Amélie"
    assert item.thumbnail == ""


@pytest.mark.parametrize(
    "candidate",
    [
        {"title": "No id"},
        {"id": "", "title": "Empty id"},
        {"id": "1", "title": "", "name": None},
    ],
)
def test_build_item_rejects_incomplete_descriptors(candidate) -> None:
    with pytest.raises(ValueError):
        build_item(candidate, "movie", 1)


def test_build_item_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError, match="kind must be one of"):
        build_item(FIGHT_CLUB, "podcast", 1)


def test_record_shape_uses_camel_case_timestamp() -> None:
    item = build_item(FIGHT_CLUB, "movie", 1_700_000_000_000)

    assert item.to_dict() == {
        "id": "550",
        "kind": "movie",
        "label": "Fight Club",
        "thumbnail": "/pB8BM7pdSp6B6Ie8DQlJp1wAwh6.jpg",
        "addedAt": 1_700_000_000_000,
    }
    assert WatchlistItem.from_dict(item.to_dict()) == item


@pytest.mark.parametrize(
    "record",
    [
        {"id": 550, "kind": "movie", "label": "x", "thumbnail": "", "addedAt": 1},
        {"id": "550", "kind": "book", "label": "x", "thumbnail": "", "addedAt": 1},
        {"id": "550", "kind": "movie", "label": "", "thumbnail": "", "addedAt": 1},
        {"id": "550", "kind": "movie", "label": "x", "thumbnail": "", "addedAt": "1"},
        {"id": "550", "kind": "movie", "label": "x", "thumbnail": "", "addedAt": True},
        {"id": "550", "kind": "movie", "label": "x", "thumbnail": "", "addedAt": 1.5},
        ["550", "movie"],
    ],
)
def test_from_dict_rejects_off_shape_records(record) -> None:
    with pytest.raises(ValueError):
        WatchlistItem.from_dict(record)
