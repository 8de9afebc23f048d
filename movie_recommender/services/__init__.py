"""
Service layer for the Movie Recommender backend.

Contains the logic the routes orchestrate:
- store: preferences + watch history persistence (WatchHistoryStore)
- recommendation_service: Gemini call, prompt in / recommendations out
- metadata_service: OMDb lookups and merge into recommendations

Services act as the glue between routes (HTTP layer) and agents/storage.
"""

from .metadata_service import (
    enrich_recommendations,
    fetch_movie_data,
    fetch_multiple_movie_data,
    merge_movie_data,
)
from .recommendation_service import (
    generate_recommendations,
    generate_surprise_recommendations,
    get_surprise_preferences,
)
from .store import WatchHistoryStore

__all__ = [
    "WatchHistoryStore",
    "generate_recommendations",
    "generate_surprise_recommendations",
    "get_surprise_preferences",
    "enrich_recommendations",
    "fetch_movie_data",
    "fetch_multiple_movie_data",
    "merge_movie_data",
]
