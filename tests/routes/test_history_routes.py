"""
Tests for the /history endpoints.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from movie_recommender.db.backends import JsonFileBackend
from movie_recommender.main import app
from movie_recommender.routes.dependencies import get_store
from movie_recommender.services.store import WatchHistoryStore


class TestListHistory:

    def test_empty(self, api_client):
        response = api_client.get("/history")

        assert response.status_code == 200
        assert response.json() == {
            "movies": [],
            "stats": {"total": 0, "average_rating": 0.0, "highly_rated": 0},
        }

    def test_newest_first_with_stats(self, api_client, store, sample_history):
        for movie in sample_history:
            store.add_watch_entry(movie)

        data = api_client.get("/history").json()

        assert [m["title"] for m in data["movies"]] == ["Cats", "Inception"]
        assert data["movies"][0]["watchedDate"] == "2024-03-05T20:30:00+00:00"
        assert data["stats"] == {"total": 2, "average_rating": 5.5, "highly_rated": 1}


class TestAddHistoryEntry:

    def test_add(self, api_client, store):
        response = api_client.post("/history", json={"title": "  Heat ", "year": 1995, "rating": 8})

        assert response.status_code == 201
        movie = response.json()["movie"]
        assert response.json()["status"] == "ADDED"
        assert movie["title"] == "Heat"
        assert movie["id"].startswith("Heat-1995-")
        assert movie["watchedDate"]
        assert [m.title for m in store.get_watch_history()] == ["Heat"]

    def test_rating_defaults_to_unrated(self, api_client):
        response = api_client.post("/history", json={"title": "Heat", "year": 1995})

        assert response.json()["movie"]["rating"] == 0

    def test_watched_date_can_be_given(self, api_client):
        response = api_client.post(
            "/history",
            json={"title": "Heat", "year": 1995, "watchedDate": "2023-12-24T21:00:00+00:00"},
        )

        assert response.json()["movie"]["watchedDate"] == "2023-12-24T21:00:00+00:00"

    def test_year_out_of_range(self, api_client, store):
        next_year = datetime.now(timezone.utc).year + 1

        assert api_client.post("/history", json={"title": "Old", "year": 1899}).status_code == 422
        assert api_client.post("/history", json={"title": "Future", "year": next_year}).status_code == 422
        assert store.get_watch_history() == []

    def test_rating_out_of_range(self, api_client):
        response = api_client.post("/history", json={"title": "Heat", "year": 1995, "rating": 11})

        assert response.status_code == 422

    def test_blank_title(self, api_client):
        response = api_client.post("/history", json={"title": "   ", "year": 1995})

        assert response.status_code == 422


class TestGetHistoryEntry:

    def test_get_entry(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[0])

        response = api_client.get("/history/Inception-2010-1700000000000")

        assert response.status_code == 200
        assert response.json()["title"] == "Inception"

    def test_id_with_slash(self, api_client):
        created = api_client.post("/history", json={"title": "Face/Off", "year": 1997}).json()["movie"]

        response = api_client.get(f"/history/{created['id']}")

        assert response.status_code == 200
        assert response.json()["title"] == "Face/Off"

    def test_unknown(self, api_client):
        response = api_client.get("/history/nope")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"


class TestUpdateHistoryEntry:

    def test_update_rating(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[1])

        response = api_client.patch("/history/Cats-2019-1700000100000", json={"rating": 4})

        assert response.status_code == 200
        assert response.json()["status"] == "UPDATED"
        assert response.json()["movie"]["rating"] == 4
        assert response.json()["movie"]["id"] == "Cats-2019-1700000100000"
        assert store.get_watch_entry("Cats-2019-1700000100000").rating == 4

    def test_update_watched_date_alias(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[1])

        api_client.patch(
            "/history/Cats-2019-1700000100000",
            json={"watchedDate": "2025-01-01T00:00:00+00:00"},
        )

        assert store.get_watch_entry("Cats-2019-1700000100000").watched_date == "2025-01-01T00:00:00+00:00"

    def test_empty_body(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[1])

        response = api_client.patch("/history/Cats-2019-1700000100000", json={})

        assert response.status_code == 400

    def test_unknown(self, api_client):
        response = api_client.patch("/history/nope", json={"rating": 4})

        assert response.status_code == 404

    def test_invalid_rating(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[1])

        response = api_client.patch("/history/Cats-2019-1700000100000", json={"rating": -1})

        assert response.status_code == 422


class TestDeleteHistory:

    def test_delete_entry_is_idempotent(self, api_client, store, sample_history):
        for movie in sample_history:
            store.add_watch_entry(movie)

        first = api_client.delete("/history/Inception-2010-1700000000000")
        second = api_client.delete("/history/Inception-2010-1700000000000")

        assert first.status_code == 200
        assert second.status_code == 200
        assert [m.title for m in store.get_watch_history()] == ["Cats"]

    def test_clear(self, api_client, store, sample_history):
        for movie in sample_history:
            store.add_watch_entry(movie)

        response = api_client.delete("/history")

        assert response.status_code == 200
        assert store.get_watch_history() == []

    def test_clear_storage(self, api_client, store, comedy_preferences, sample_history):
        store.set_preferences(comedy_preferences)
        store.add_watch_entry(sample_history[0])

        response = api_client.delete("/storage")

        assert response.status_code == 200
        assert store.get_preferences() is None
        assert store.get_watch_history() == []


class TestUpdateValidation:
    """Explicit nulls and non-ISO dates are client errors."""

    @pytest.mark.parametrize("body", [
        {"title": None},
        {"rating": None},
        {"year": None},
        {"watchedDate": None},
    ])
    def test_null_for_required_field(self, api_client, store, sample_history, body):
        store.add_watch_entry(sample_history[0])

        response = api_client.patch("/history/Inception-2010-1700000000000", json=body)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert store.get_watch_entry("Inception-2010-1700000000000") == sample_history[0]

    def test_null_poster_removes_it(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[0].model_copy(update={"poster": "https://img.example/p.jpg"}))

        response = api_client.patch("/history/Inception-2010-1700000000000", json={"poster": None})

        assert response.status_code == 200
        assert response.json()["movie"]["poster"] is None

    def test_non_iso_watched_date(self, api_client, store, sample_history):
        store.add_watch_entry(sample_history[0])

        response = api_client.patch(
            "/history/Inception-2010-1700000000000", json={"watchedDate": "last tuesday"}
        )

        assert response.status_code == 422

    def test_add_with_non_iso_watched_date(self, api_client, store):
        response = api_client.post(
            "/history", json={"title": "Heat", "year": 1995, "watchedDate": "yesterday"}
        )

        assert response.status_code == 422
        assert store.get_watch_history() == []


class TestStorageFailures:
    """Adds report failures instead of claiming success."""

    def test_write_failure_returns_500(self, api_client):
        failing = MagicMock()
        failing.get.return_value = None
        failing.set.side_effect = OSError("read-only file system")
        app.dependency_overrides[get_store] = lambda: WatchHistoryStore(failing)

        response = api_client.post("/history", json={"title": "Up", "year": 2009, "rating": 8})

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "storage_error"

    def test_corrupt_store_file_is_recovered(self, api_client, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        app.dependency_overrides[get_store] = lambda: WatchHistoryStore(JsonFileBackend(str(path)))

        response = api_client.post("/history", json={"title": "Up", "year": 2009, "rating": 8})

        assert response.status_code == 201
        movies = api_client.get("/history").json()["movies"]
        assert [m["title"] for m in movies] == ["Up"]
        assert (tmp_path / "store.json.corrupt").read_text(encoding="utf-8") == "{not json"

    def test_mixed_timestamp_formats_sort_by_instant(self, api_client, store):
        api_client.post(
            "/history", json={"title": "Earlier", "year": 2000, "watchedDate": "2024-03-05T21:00:00+02:00"}
        )
        api_client.post(
            "/history", json={"title": "Later", "year": 2001, "watchedDate": "2024-03-05T20:00:00.000Z"}
        )

        movies = api_client.get("/history").json()["movies"]

        assert [m["title"] for m in movies] == ["Later", "Earlier"]
