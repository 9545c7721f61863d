"""Data models for the watchlist."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Union


class ItemKind(str, Enum):
    """Content category of a saved item."""

    MOVIE = "movie"
    TV = "tv"


ALL_KINDS = "all"

# Primary title fields first, then the fallback name field
LABEL_FIELDS = ("title", "original_title", "name")
THUMBNAIL_FIELDS = ("poster_path", "thumbnail")


@dataclass(frozen=True)
class WatchlistItem:
    """One saved content reference."""

    id: str
    kind: ItemKind
    label: str
    thumbnail: str
    added_at: int  # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "thumbnail": self.thumbnail,
            "addedAt": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WatchlistItem":
        """Build an item from a persisted record, rejecting anything off-shape."""
        if not isinstance(data, Mapping):
            raise ValueError("record must be an object")

        item_id = data.get("id")
        label = data.get("label")
        thumbnail = data.get("thumbnail", "")
        added_at = data.get("addedAt")

        if not isinstance(item_id, str) or not item_id:
            raise ValueError("id must be a non-empty string")
        if not isinstance(label, str) or not label:
            raise ValueError("label must be a non-empty string")
        if not isinstance(thumbnail, str):
            raise ValueError("thumbnail must be a string")
        # bool is an int subclass; reject it explicitly
        if isinstance(added_at, bool) or not isinstance(added_at, int):
            raise ValueError("addedAt must be an integer")

        return cls(
            id=item_id,
            kind=parse_kind(data.get("kind")),
            label=label,
            thumbnail=thumbnail,
            added_at=added_at,
        )


def parse_kind(kind: Union[ItemKind, str, None]) -> ItemKind:
    if isinstance(kind, ItemKind):
        return kind
    try:
        return ItemKind(str(kind).lower())
    except ValueError:
        raise ValueError(f"kind must be one of: {', '.join(k.value for k in ItemKind)}") from None


def _first_present(candidate: Mapping[str, Any], fields) -> str:
    for field_name in fields:
        value = candidate.get(field_name)
        if value:
            return str(value)
    return ""


def build_item(candidate: Mapping[str, Any], kind: Union[ItemKind, str], added_at: int) -> WatchlistItem:
    """Turn a content descriptor from the lookup side into a watchlist item."""
    raw_id = candidate.get("id")
    if raw_id is None or raw_id == "":
        raise ValueError("content descriptor has no id")

    label = _first_present(candidate, LABEL_FIELDS)
    if not label:
        raise ValueError(f"content descriptor {raw_id} has no title or name")

    return WatchlistItem(
        id=str(raw_id),
        kind=parse_kind(kind),
        label=label,
        thumbnail=_first_present(candidate, THUMBNAIL_FIELDS),
        added_at=int(added_at),
    )
