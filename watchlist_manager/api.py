"""Flask blueprint exposing watchlist endpoints."""

from __future__ import annotations

import logging
from typing import Optional, Union

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, Field, ValidationError

from .facade import WatchlistFacade
from .models import ItemKind

logger = logging.getLogger(__name__)

bp = Blueprint("watchlist", __name__, url_prefix="/api/watchlist")


class ContentDescriptor(BaseModel):
    """Descriptor coming from the content lookup side."""

    id: Union[str, int] = Field(..., description="Content id, e.g. a TMDB id")
    title: Optional[str] = Field(None, description="Primary title")
    original_title: Optional[str] = Field(None, description="Original-language title")
    name: Optional[str] = Field(None, description="Fallback name, used by TV shows")
    poster_path: Optional[str] = Field(None, description="Thumbnail path or URL")


class WatchlistItemRequest(BaseModel):
    item: ContentDescriptor
    kind: ItemKind = Field(..., description="movie or tv")


def init_app(app, facade: WatchlistFacade) -> None:
    app.extensions["watchlist"] = facade
    app.register_blueprint(bp)


def _facade() -> WatchlistFacade:
    return current_app.extensions["watchlist"]


def _parse_item_request():
    payload = request.get_json(silent=True) or {}
    return WatchlistItemRequest.model_validate(payload)


@bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    return jsonify({"success": False, "message": str(exc)}), 400


@bp.errorhandler(ValueError)
def _handle_value_error(exc: ValueError):
    return jsonify({"success": False, "message": str(exc)}), 400


@bp.get("")
def list_items():
    kind = request.args.get("kind", "all")
    order = request.args.get("sort", "newest-first")
    items = _facade().view(kind, order)
    return jsonify({"success": True, "items": [item.to_dict() for item in items], "count": len(items)})


@bp.post("")
def add_item():
    body = _parse_item_request()
    facade = _facade()
    item = facade.add(body.item.model_dump(exclude_none=True), body.kind)
    return jsonify({"success": True, "item": item.to_dict(), "count": facade.count()})


@bp.post("/toggle")
def toggle_item():
    body = _parse_item_request()
    facade = _facade()
    in_watchlist = facade.toggle(body.item.model_dump(exclude_none=True), body.kind)
    return jsonify({"success": True, "id": str(body.item.id), "in_watchlist": in_watchlist, "count": facade.count()})


@bp.get("/count")
def count_items():
    return jsonify({"success": True, "count": _facade().count()})


@bp.get("/contains/<item_id>")
def contains_item(item_id: str):
    return jsonify({"success": True, "id": item_id, "in_watchlist": _facade().contains(item_id)})


@bp.delete("/<item_id>")
def remove_item(item_id: str):
    facade = _facade()
    removed = facade.remove(item_id)
    return jsonify({"success": True, "removed": removed, "count": facade.count()})


@bp.delete("")
def clear_items():
    _facade().clear_all()
    logger.info("Watchlist cleared via API")
    return jsonify({"success": True, "count": 0})
