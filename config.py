"""
Watchlist configuration
"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    """Configuration class"""

    # Storage backend: file, memory or redis
    WATCHLIST_STORAGE_BACKEND = os.getenv('WATCHLIST_STORAGE_BACKEND', 'file').lower()

    # JSON file backend location
    WATCHLIST_DATA_DIR = Path(os.getenv('WATCHLIST_DATA_DIR', 'watchlist_manager/data'))
    WATCHLIST_STORAGE_FILE = Path(
        os.getenv('WATCHLIST_STORAGE_FILE', str(WATCHLIST_DATA_DIR / 'storage.json'))
    )

    # The single key the snapshot lives under
    WATCHLIST_STORAGE_KEY = os.getenv('WATCHLIST_STORAGE_KEY', 'tmovies_watchlist')

    # Hand persistence writes to a background worker instead of writing inline
    WATCHLIST_BACKGROUND_WRITES = os.getenv('WATCHLIST_BACKGROUND_WRITES', 'false').lower() == 'true'

    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

    # HTTP service
    HOST = os.getenv('WATCHLIST_HOST', '127.0.0.1')
    PORT = int(os.getenv('WATCHLIST_PORT', 8080))
    DEBUG = os.getenv('WATCHLIST_DEBUG', 'false').lower() == 'true'

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'watchlist.log')


def setup_logging(level: str = None, log_file: str = None):
    """Set up logging"""
    handlers = [logging.StreamHandler()]
    log_file = Config.LOG_FILE if log_file is None else log_file
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )
