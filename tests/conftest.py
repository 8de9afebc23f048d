"""
Pytest configuration for Movie Recommender backend tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ.setdefault("STORAGE_BACKEND", "memory")
# Enrichment is switched on per test by patching Settings.OMDB_API_KEY
os.environ["OMDB_API_KEY"] = ""

from movie_recommender.db.backends import InMemoryBackend  # noqa: E402
from movie_recommender.schemas.history import WatchedMovie  # noqa: E402
from movie_recommender.schemas.preferences import PreferenceProfile  # noqa: E402
from movie_recommender.services.store import WatchHistoryStore  # noqa: E402


@pytest.fixture
def backend():
    """Empty in-memory key-value backend."""
    return InMemoryBackend()


@pytest.fixture
def store(backend):
    """WatchHistoryStore over the in-memory backend."""
    return WatchHistoryStore(backend)


@pytest.fixture
def comedy_preferences():
    """Completed questionnaire: family comedy fan."""
    return PreferenceProfile(
        genres=["Comedy"],
        era="Recent (2010s-present)",
        mood=["Funny and comedic"],
        content_level="Family-friendly only",
        watch_time="Standard (90-120 minutes)",
        rating_preference="Well-rated movies (7+ stars)",
        score_preference="Balanced approach",
    )


@pytest.fixture
def sample_history():
    """Two watched movies, inserted Inception first."""
    return [
        WatchedMovie(
            id="Inception-2010-1700000000000",
            title="Inception",
            year=2010,
            rating=9,
            watched_date="2024-01-10T12:00:00+00:00",
        ),
        WatchedMovie(
            id="Cats-2019-1700000100000",
            title="Cats",
            year=2019,
            rating=2,
            watched_date="2024-03-05T20:30:00+00:00",
        ),
    ]


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for testing the Supabase backend.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def api_client(store):
    """
    TestClient wired to the in-memory store.

    Overrides get_store so every request sees the same store fixture.
    """
    from fastapi.testclient import TestClient
    from movie_recommender.main import app
    from movie_recommender.routes.dependencies import get_store

    app.dependency_overrides[get_store] = lambda: store

    yield TestClient(app)

    # Clean up after test
    app.dependency_overrides.clear()
