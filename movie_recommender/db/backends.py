"""
Key-value backends for the watch history store.

Every backend stores opaque strings under string keys. The store does the
JSON encoding; backends never look inside values.

Backends:
- InMemoryBackend: process-local dict (tests, throwaway sessions)
- JsonFileBackend: one JSON file holding a key -> string map
- SupabaseBackend: one row per key in a Supabase table (columns: key, value)
"""

import json
import logging
import os
import threading
from typing import Dict, Optional, Protocol, cast

from movie_recommender.db.client import get_supabase_client
from movie_recommender.exceptions import StoreReadError
from movie_recommender.utils.constants import CORRUPT_KEY_SUFFIX
from supabase import Client

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """
    Read/write contract of the persistence medium.

    get may raise StoreReadError when the medium itself is unreadable.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryBackend:
    """Dict-backed storage. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileBackend:
    """
    Stores all keys in a single JSON file.

    The whole file is rewritten on each set/delete. Writes go to a temp file
    first and are moved into place, so a crash never leaves a half-written file.

    An undecodable file is moved to '<path>.corrupt' and reported with
    StoreReadError; the backend then continues with an empty map.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _move_aside(self, reason: str) -> StoreReadError:
        corrupt_path = f"{self.path}{CORRUPT_KEY_SUFFIX}"
        os.replace(self.path, corrupt_path)
        logger.error(f"Storage file {self.path} is unreadable ({reason}); moved to {corrupt_path}")
        return StoreReadError(self.path, reason)

    def _load(self) -> Dict[str, str]:
        """
        Read the key map.

        Raises:
            StoreReadError: If the file is not a JSON object. The file has
                            already been moved aside when this is raised.
        """
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            raw = f.read()
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise self._move_aside(str(e))
        if not isinstance(data, dict):
            raise self._move_aside(f"expected an object, got {type(data).__name__}")
        return cast(Dict[str, str], data)

    def _load_for_write(self) -> Dict[str, str]:
        try:
            return self._load()
        except StoreReadError:
            return {}

    def _save(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load_for_write()
            data[key] = value
            self._save(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load_for_write()
            if key in data:
                del data[key]
                self._save(data)


class SupabaseBackend:
    """
    Stores each key as a row in a Supabase table.

    Expected table layout: key (text, primary key), value (text).
    """

    def __init__(self, supabase_client: Client, table: str = "kv_store"):
        self.client = supabase_client
        self.table = table

    def get(self, key: str) -> Optional[str]:
        result = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .execute()
        )

        if not result.data or len(result.data) == 0:
            return None

        row = cast(Dict[str, Optional[str]], result.data[0])
        return row.get("value")

    def set(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert({"key": key, "value": value}).execute()

    def delete(self, key: str) -> None:
        self.client.table(self.table).delete().eq("key", key).execute()


def create_backend(
    kind: str,
    file_path: Optional[str] = None,
    supabase_client: Optional[Client] = None,
    table: str = "kv_store",
) -> Optional[KeyValueBackend]:
    """
    Build the backend named by STORAGE_BACKEND.

    Returns None for "none": the store then runs without persistence.

    Raises:
        ValueError: For an unknown backend name or missing backend settings.
    """
    kind = (kind or "").lower()

    if kind == "none":
        logger.warning("No storage backend configured; preferences and history will not persist")
        return None
    if kind == "memory":
        return InMemoryBackend()
    if kind == "file":
        if not file_path:
            raise ValueError("STORAGE_FILE_PATH is required for the file storage backend")
        logger.info(f"Using JSON file storage at {file_path}")
        return JsonFileBackend(file_path)
    if kind == "supabase":
        if supabase_client is None:
            supabase_client = get_supabase_client()
        logger.info(f"Using Supabase storage table '{table}'")
        return SupabaseBackend(supabase_client, table=table)

    raise ValueError(f"Unknown STORAGE_BACKEND '{kind}'. Use memory, file, supabase or none.")
