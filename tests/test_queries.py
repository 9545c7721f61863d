"""Tests for the pure filter/sort views."""

from __future__ import annotations

import pytest

from watchlist_manager.queries import SortOrder, filter_items, parse_kind_filter, parse_sort_order, sort_items, view

from tests.conftest import make_item


def _labels(items):
    return [item.label for item in items]


def test_newest_first_orders_by_added_at_descending() -> None:
    items = [make_item("a", added_at=100), make_item("b", added_at=300), make_item("c", added_at=200)]

    assert [item.added_at for item in sort_items(items, "newest-first")] == [300, 200, 100]
    assert [item.added_at for item in sort_items(items, SortOrder.OLDEST_FIRST)] == [100, 200, 300]


def test_alphabetical_is_case_insensitive() -> None:
    items = [make_item("1", label="Banana"), make_item("2", label="apple"), make_item("3", label="Cherry")]

    assert _labels(sort_items(items, "alphabetical")) == ["apple", "Banana", "Cherry"]
    assert _labels(sort_items(items, "alphabetical-desc")) == ["Cherry", "Banana", "apple"]


def test_ties_keep_input_order() -> None:
    items = [
        make_item("first", label="Up", added_at=5),
        make_item("second", label="up", added_at=5),
        make_item("third", label="UP", added_at=5),
    ]

    for order in SortOrder:
        assert [item.id for item in sort_items(items, order)] == ["first", "second", "third"]


def test_sort_does_not_mutate_input() -> None:
    items = [make_item("a", added_at=1), make_item("b", added_at=2)]
    before = list(items)

    result = sort_items(items, "newest-first")

    assert items == before
    assert result is not items


def test_filter_keeps_relative_order() -> None:
    items = [
        make_item("m1", kind="movie"),
        make_item("t1", kind="tv"),
        make_item("m2", kind="movie"),
    ]

    assert [item.id for item in filter_items(items, "movie")] == ["m1", "m2"]
    assert [item.id for item in filter_items(items, "tv")] == ["t1"]
    assert filter_items(items, "all") == items
    assert filter_items(items, "all") is not items


def test_view_filters_then_sorts() -> None:
    items = [
        make_item("m1", kind="movie", label="Zodiac", added_at=1),
        make_item("t1", kind="tv", label="Atlanta", added_at=2),
        make_item("m2", kind="movie", label="Alien", added_at=3),
    ]

    assert [item.id for item in view(items, "movie", "alphabetical")] == ["m2", "m1"]


def test_parsers_reject_unknown_values() -> None:
    assert parse_kind_filter("ALL") == "all"
    assert parse_kind_filter(None) == "all"
    assert parse_sort_order(None) is SortOrder.NEWEST_FIRST
    with pytest.raises(ValueError):
        parse_kind_filter("anime")
    with pytest.raises(ValueError, match="sort order must be one of"):
        parse_sort_order("random")
