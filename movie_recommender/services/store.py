"""
Watch history store.

Repository for the two persisted records: the preference profile and the
watch history list. Each lives as a JSON blob under its own key in an
injected KeyValueBackend.

Behavior:
- No backend (None): writes are no-ops, reads return empty/absent
- Corrupt blob: logged as StoreReadError, copied to '<key>.corrupt',
  then treated as empty/absent. A backend whose medium is unreadable
  moves it aside itself and raises StoreReadError from get.
- Backend write failures: logged; add_watch_entry reports them as False
- Read-modify-write per mutation, no locking; last writer wins
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from movie_recommender.db.backends import KeyValueBackend
from movie_recommender.exceptions import StoreReadError
from movie_recommender.schemas.history import HistoryStats, WatchedMovie, parse_watched_date
from movie_recommender.schemas.preferences import PreferenceProfile
from movie_recommender.utils.constants import (
    CORRUPT_KEY_SUFFIX,
    HIGHLY_RATED_THRESHOLD,
    STORAGE_KEYS,
)
from movie_recommender.utils.logging import get_logger

logger = get_logger(__name__)


class WatchHistoryStore:
    """
    Synchronous repository over a key-value backend.

    Construct once per process (see get_store in routes/dependencies.py)
    and pass it to whatever needs preferences or history.
    """

    def __init__(self, backend: Optional[KeyValueBackend]):
        self.backend = backend

    @property
    def available(self) -> bool:
        return self.backend is not None

    # ------------------------------------------------------------------
    # Raw blob access
    # ------------------------------------------------------------------

    def _read_raw(self, key: str) -> Optional[str]:
        if self.backend is None:
            return None
        try:
            return self.backend.get(key)
        except StoreReadError:
            raise
        except Exception as e:
            logger.error(f"Error loading '{key}' from storage backend: {e}", exc_info=True)
            return None

    def _write_raw(self, key: str, value: str) -> bool:
        if self.backend is None:
            return False
        try:
            self.backend.set(key, value)
            return True
        except Exception as e:
            logger.error(f"Error saving '{key}' to storage backend: {e}", exc_info=True)
            return False

    def _delete_raw(self, key: str) -> None:
        if self.backend is None:
            return
        try:
            self.backend.delete(key)
        except Exception as e:
            logger.error(f"Error removing '{key}' from storage backend: {e}", exc_info=True)

    def _quarantine(self, error: StoreReadError, raw: Optional[str]) -> None:
        """
        Report corrupt data and keep a copy of it before it gets overwritten.

        raw is None when the backend itself was unreadable; the backend has
        then already moved its data aside.
        """
        logger.error(f"{error}. Treating as empty; raw data kept under '{error.key}{CORRUPT_KEY_SUFFIX}'")
        if raw:
            self._write_raw(f"{error.key}{CORRUPT_KEY_SUFFIX}", raw)

    def _decode(self, key: str, raw: Optional[str]) -> Any:
        """
        Decode a blob.

        Returns None when absent. Raises StoreReadError when undecodable.
        """
        if raw is None or raw == "":
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise StoreReadError(key, str(e))

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_preferences(self) -> Optional[PreferenceProfile]:
        key = STORAGE_KEYS['PREFERENCES']
        raw: Optional[str] = None
        try:
            raw = self._read_raw(key)
            data = self._decode(key, raw)
            if data is None:
                return None
            if not isinstance(data, dict):
                raise StoreReadError(key, f"expected an object, got {type(data).__name__}")
            try:
                return PreferenceProfile.model_validate(data)
            except ValidationError as e:
                raise StoreReadError(key, f"{e.error_count()} validation error(s)")
        except StoreReadError as e:
            self._quarantine(e, raw)
            return None

    def set_preferences(self, preferences: PreferenceProfile) -> None:
        payload = json.dumps(preferences.model_dump(by_alias=True))
        if self._write_raw(STORAGE_KEYS['PREFERENCES'], payload):
            logger.info("Preferences saved")

    def clear_preferences(self) -> None:
        self._delete_raw(STORAGE_KEYS['PREFERENCES'])

    # ------------------------------------------------------------------
    # Watch history
    # ------------------------------------------------------------------

    def get_watch_history(self) -> List[WatchedMovie]:
        """Return the history in insertion order."""
        key = STORAGE_KEYS['WATCH_HISTORY']
        raw: Optional[str] = None
        try:
            raw = self._read_raw(key)
            data = self._decode(key, raw)
            if data is None:
                return []
            if not isinstance(data, list):
                raise StoreReadError(key, f"expected a list, got {type(data).__name__}")
            try:
                return [WatchedMovie.model_validate(item) for item in data]
            except ValidationError as e:
                raise StoreReadError(key, f"{e.error_count()} validation error(s)")
        except StoreReadError as e:
            self._quarantine(e, raw)
            return []

    def get_sorted_watch_history(self) -> List[WatchedMovie]:
        """Return the history most recently watched first (display order)."""
        return sorted(self.get_watch_history(), key=lambda m: parse_watched_date(m.watched_date), reverse=True)

    def get_watch_entry(self, movie_id: str) -> Optional[WatchedMovie]:
        for movie in self.get_watch_history():
            if movie.id == movie_id:
                return movie
        return None

    def _save_watch_history(self, history: List[WatchedMovie]) -> bool:
        payload = json.dumps([movie.model_dump(by_alias=True) for movie in history])
        return self._write_raw(STORAGE_KEYS['WATCH_HISTORY'], payload)

    def add_watch_entry(self, movie: WatchedMovie) -> bool:
        """
        Append a movie.

        Returns:
            False when nothing could be written (no backend or write failure).
        """
        history = self.get_watch_history()
        history.append(movie)
        if not self._save_watch_history(history):
            return False
        logger.info(f"Added '{movie.title}' ({movie.year}) to watch history")
        return True

    def update_watch_entry(self, movie_id: str, updates: Dict[str, Any]) -> Optional[WatchedMovie]:
        """
        Merge updates into the entry with the given id.

        Unknown ids are logged and ignored. The id itself cannot be changed.

        Returns:
            The updated entry, or None if nothing was updated.
        """
        updates = {k: v for k, v in updates.items() if k != "id"}
        history = self.get_watch_history()

        updated: Optional[WatchedMovie] = None
        for index, movie in enumerate(history):
            if movie.id == movie_id:
                try:
                    updated = WatchedMovie.model_validate({**movie.model_dump(), **updates})
                except ValidationError as e:
                    logger.error(f"Error updating watch history entry {movie_id}: {e}")
                    return None
                history[index] = updated
                break

        if updated is None:
            logger.warning(f"Watch history entry {movie_id} not found; nothing updated")
            return None

        if not self._save_watch_history(history):
            return None

        logger.info(f"Updated watch history entry {movie_id}: {list(updates.keys())}")
        return updated

    def remove_watch_entry(self, movie_id: str) -> None:
        history = self.get_watch_history()
        remaining = [movie for movie in history if movie.id != movie_id]
        if len(remaining) == len(history):
            logger.debug(f"Watch history entry {movie_id} already absent")
            return
        if self._save_watch_history(remaining):
            logger.info(f"Removed watch history entry {movie_id}")

    def clear_watch_history(self) -> None:
        self._delete_raw(STORAGE_KEYS['WATCH_HISTORY'])

    def get_history_stats(self) -> HistoryStats:
        history = self.get_watch_history()
        total = len(history)
        average = round(sum(m.rating for m in history) / total, 1) if total else 0.0
        return HistoryStats(
            total=total,
            average_rating=average,
            highly_rated=len([m for m in history if m.rating >= HIGHLY_RATED_THRESHOLD]),
        )

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    def clear_all(self) -> None:
        self.clear_preferences()
        self.clear_watch_history()
