"""
Tests for the /recommendations endpoints.

Gemini and OMDb are mocked at the route module level:
- Happy path: stored profile → OK response with recommendations
- Inline profile wins over the stored one
- No profile → 404 preferences_required
- GenerationError → 502 generation_failed with retry flag
- Surprise flow and promotion into the watch history
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from movie_recommender.exceptions import GenerationError
from movie_recommender.main import app
from movie_recommender.routes.dependencies import get_store
from movie_recommender.schemas.recommendations import Recommendation
from movie_recommender.services.store import WatchHistoryStore

ROUTE_MODULE = "movie_recommender.routes.recommendations"


def _recommendations():
    return [
        Recommendation(
            title="Paddington 2",
            year=2017,
            genre=["Comedy", "Family"],
            description="Paddington picks up odd jobs.",
            reasoning="Family-friendly comedy.",
        ),
        Recommendation(title="The Nice Guys", year=2016, genre=["Comedy", "Crime"]),
    ]


async def _enrich_passthrough(recommendations, http_client=None):
    return [
        rec.model_copy(update={"poster": f"https://img.example/{rec.year}.jpg"})
        for rec in recommendations
    ]


@pytest.fixture
def mock_generate():
    """Mock generate_recommendations returning two movies."""
    with patch(f"{ROUTE_MODULE}.generate_recommendations", new_callable=AsyncMock) as mock:
        mock.return_value = _recommendations()
        yield mock


@pytest.fixture
def mock_surprise():
    """Mock generate_surprise_recommendations returning two movies."""
    with patch(f"{ROUTE_MODULE}.generate_surprise_recommendations", new_callable=AsyncMock) as mock:
        mock.return_value = _recommendations()
        yield mock


@pytest.fixture
def mock_enrich():
    """Mock enrichment adding a poster to every movie."""
    with patch(f"{ROUTE_MODULE}.enrich_recommendations", side_effect=_enrich_passthrough) as mock:
        yield mock


class TestCreateRecommendations:

    def test_with_stored_preferences(
        self, api_client, store, comedy_preferences, sample_history, mock_generate, mock_enrich
    ):
        store.set_preferences(comedy_preferences)
        for movie in sample_history:
            store.add_watch_entry(movie)

        response = api_client.post("/recommendations", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["surprise_mode"] is False
        assert data["enrichment_available"] is False
        assert [r["title"] for r in data["recommendations"]] == ["Paddington 2", "The Nice Guys"]
        assert data["recommendations"][0]["poster"] == "https://img.example/2017.jpg"

        kwargs = mock_generate.call_args.kwargs
        assert kwargs["preferences"] == comedy_preferences
        assert [m.title for m in kwargs["watch_history"]] == ["Inception", "Cats"]
        assert kwargs["surprise_me"] is False

    def test_surprise_mode_flag(self, api_client, store, comedy_preferences, mock_generate, mock_enrich):
        store.set_preferences(comedy_preferences)

        response = api_client.post("/recommendations", json={"surprise_mode": True})

        assert response.json()["surprise_mode"] is True
        assert mock_generate.call_args.kwargs["surprise_me"] is True

    def test_inline_preferences(self, api_client, mock_generate, mock_enrich):
        body = {
            "preferences": {
                "genres": ["Horror"],
                "era": "Classic (pre-1970s)",
                "mood": ["Dark and mysterious"],
                "contentLevel": "Any content level is fine",
                "watchTime": "Short (under 90 minutes)",
                "ratingPreference": "I don't care about ratings",
                "scorePreference": "Trust critics more",
            }
        }

        response = api_client.post("/recommendations", json=body)

        assert response.status_code == 200
        assert mock_generate.call_args.kwargs["preferences"].genres == ["Horror"]

    def test_without_preferences(self, api_client, mock_generate):
        response = api_client.post("/recommendations", json={})

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "preferences_required"
        mock_generate.assert_not_called()

    def test_generation_failure(self, api_client, store, comedy_preferences, mock_enrich):
        store.set_preferences(comedy_preferences)

        with patch(
            f"{ROUTE_MODULE}.generate_recommendations",
            new_callable=AsyncMock,
            side_effect=GenerationError("Failed to generate recommendations. Please try again."),
        ):
            response = api_client.post("/recommendations", json={})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["error"] == "generation_failed"
        assert detail["retry"] is True
        assert detail["details"] == "Failed to generate recommendations. Please try again."
        mock_enrich.assert_not_called()

    def test_generation_does_not_touch_store(
        self, api_client, store, backend, comedy_preferences, mock_generate, mock_enrich
    ):
        store.set_preferences(comedy_preferences)
        before = dict(backend._data)

        api_client.post("/recommendations", json={})

        assert backend._data == before


class TestSurpriseRecommendations:

    def test_surprise_without_questionnaire(self, api_client, store, sample_history, mock_surprise, mock_enrich):
        store.add_watch_entry(sample_history[0])

        response = api_client.post("/recommendations/surprise")

        assert response.status_code == 200
        assert response.json()["surprise_mode"] is True
        assert len(response.json()["recommendations"]) == 2
        history_arg = mock_surprise.call_args.args[0]
        assert [m.title for m in history_arg] == ["Inception"]

    def test_surprise_failure(self, api_client):
        with patch(
            f"{ROUTE_MODULE}.generate_surprise_recommendations",
            new_callable=AsyncMock,
            side_effect=GenerationError("No response from recommendation service. Please try again."),
        ):
            response = api_client.post("/recommendations/surprise")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "generation_failed"


class TestPromoteRecommendation:

    def test_promote_carries_poster(self, api_client, store):
        body = {
            "recommendation": {
                "title": "Paddington 2",
                "year": 2017,
                "poster": "https://img.example/paddington.jpg",
                "imdbRating": "7.8",
            },
            "rating": 9,
        }

        response = api_client.post("/recommendations/promote", json=body)

        assert response.status_code == 201
        movie = response.json()["movie"]
        assert movie["id"].startswith("Paddington 2-2017-")
        assert movie["rating"] == 9
        assert movie["poster"] == "https://img.example/paddington.jpg"
        assert [m.title for m in store.get_watch_history()] == ["Paddington 2"]

    def test_promote_unrated_by_default(self, api_client):
        response = api_client.post(
            "/recommendations/promote",
            json={"recommendation": {"title": "Up", "year": 2009}},
        )

        assert response.json()["movie"]["rating"] == 0

    def test_promote_invalid_year(self, api_client, store):
        response = api_client.post(
            "/recommendations/promote",
            json={"recommendation": {"title": "Metropolis", "year": 1850}},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "invalid_recommendation"
        assert store.get_watch_history() == []

    def test_promote_write_failure(self, api_client):
        failing = MagicMock()
        failing.get.return_value = None
        failing.set.side_effect = OSError("disk full")
        app.dependency_overrides[get_store] = lambda: WatchHistoryStore(failing)

        response = api_client.post(
            "/recommendations/promote",
            json={"recommendation": {"title": "Up", "year": 2009}},
        )

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "storage_error"


class TestHealth:

    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["generation_configured"] is True
        assert data["enrichment_configured"] is False
