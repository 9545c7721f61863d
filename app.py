#!/usr/bin/env python3
"""
Watchlist web service
"""
import atexit
import logging
from typing import Optional

from flask import Flask, jsonify

from config import Config, setup_logging
from watchlist_manager import WatchlistFacade, create_watchlist
from watchlist_manager.api import init_app

logger = logging.getLogger(__name__)


def create_app(facade: Optional[WatchlistFacade] = None) -> Flask:
    """Create the Flask app around an explicitly constructed watchlist."""
    app = Flask(__name__)
    if facade is None:
        facade = create_watchlist()
        atexit.register(facade.close)
    init_app(app, facade)

    @app.get("/health")
    def health():
        return jsonify({"success": True, "count": facade.count()})

    return app


if __name__ == '__main__':
    setup_logging()
    logger.info("Watchlist service: http://%s:%s", Config.HOST, Config.PORT)
    create_app().run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
