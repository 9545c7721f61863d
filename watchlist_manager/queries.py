"""Filter and sort views over a watchlist snapshot.

Every function returns a new list and leaves its input untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Union

from .models import ALL_KINDS, ItemKind, WatchlistItem, parse_kind


class SortOrder(str, Enum):
    NEWEST_FIRST = "newest-first"
    OLDEST_FIRST = "oldest-first"
    ALPHABETICAL = "alphabetical"
    ALPHABETICAL_DESC = "alphabetical-desc"


def parse_kind_filter(value: Union[ItemKind, str, None]) -> Union[ItemKind, str]:
    """Return ``"all"`` or an ItemKind."""
    if value is None or (isinstance(value, str) and value.lower() == ALL_KINDS):
        return ALL_KINDS
    return parse_kind(value)


def parse_sort_order(value: Union[SortOrder, str, None]) -> SortOrder:
    if value is None:
        return SortOrder.NEWEST_FIRST
    if isinstance(value, SortOrder):
        return value
    try:
        return SortOrder(str(value).lower())
    except ValueError:
        raise ValueError(f"sort order must be one of: {', '.join(o.value for o in SortOrder)}") from None


def filter_items(items: Iterable[WatchlistItem], kind: Union[ItemKind, str, None] = ALL_KINDS) -> List[WatchlistItem]:
    kind = parse_kind_filter(kind)
    if kind == ALL_KINDS:
        return list(items)
    return [item for item in items if item.kind == kind]


def sort_items(items: Iterable[WatchlistItem], order: Union[SortOrder, str, None] = SortOrder.NEWEST_FIRST) -> List[WatchlistItem]:
    # sorted() is stable, and reverse=True keeps equal keys in input order
    order = parse_sort_order(order)
    if order == SortOrder.NEWEST_FIRST:
        return sorted(items, key=lambda item: item.added_at, reverse=True)
    if order == SortOrder.OLDEST_FIRST:
        return sorted(items, key=lambda item: item.added_at)
    if order == SortOrder.ALPHABETICAL:
        return sorted(items, key=lambda item: item.label.casefold())
    return sorted(items, key=lambda item: item.label.casefold(), reverse=True)


def view(items: Iterable[WatchlistItem], kind: Union[ItemKind, str, None] = ALL_KINDS,
         order: Union[SortOrder, str, None] = SortOrder.NEWEST_FIRST) -> List[WatchlistItem]:
    """Filter, then sort."""
    return sort_items(filter_items(items, kind), order)
