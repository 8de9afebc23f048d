"""
FastAPI dependency functions shared by the routers.

The store is built once per process from settings and handed to every
request through get_store. Tests override it with
app.dependency_overrides[get_store].
"""

import logging
from functools import lru_cache

from movie_recommender.config import settings
from movie_recommender.db.backends import create_backend
from movie_recommender.services.store import WatchHistoryStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_store() -> WatchHistoryStore:
    """
    Get the process-wide WatchHistoryStore.

    Raises:
        ValueError: If STORAGE_BACKEND is misconfigured
    """
    backend = create_backend(
        settings.STORAGE_BACKEND,
        file_path=settings.STORAGE_FILE_PATH,
        table=settings.SUPABASE_KV_TABLE,
    )
    logger.info(f"WatchHistoryStore initialized (backend={settings.STORAGE_BACKEND})")
    return WatchHistoryStore(backend)
