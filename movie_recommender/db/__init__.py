"""
Persistence medium for the Movie Recommender backend.

The store (movie_recommender/services/store.py) talks to a KeyValueBackend.
This package holds the backend implementations and the Supabase client
factory used by the hosted backend.

DO NOT put JSON encoding or record validation here; backends only move
strings in and out.
"""

from .backends import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    SupabaseBackend,
    create_backend,
)
from .client import get_supabase_client

__all__ = [
    "KeyValueBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "SupabaseBackend",
    "create_backend",
    "get_supabase_client",
]
