"""
Tests for settings validation and environment helpers.
"""

import pytest

from movie_recommender.config import Settings
from movie_recommender.utils.logging import redact_secret


class TestValidate:

    def test_valid_with_google_key(self, monkeypatch):
        monkeypatch.setattr(Settings, "GOOGLE_API_KEY", "key")
        monkeypatch.setattr(Settings, "STORAGE_BACKEND", "memory")

        Settings.validate()

    def test_missing_google_key(self, monkeypatch):
        monkeypatch.setattr(Settings, "GOOGLE_API_KEY", "")

        with pytest.raises(ValueError) as exc_info:
            Settings.validate()

        assert "GOOGLE_API_KEY" in str(exc_info.value)

    def test_supabase_backend_needs_supabase_settings(self, monkeypatch):
        monkeypatch.setattr(Settings, "GOOGLE_API_KEY", "key")
        monkeypatch.setattr(Settings, "STORAGE_BACKEND", "supabase")
        monkeypatch.setattr(Settings, "SUPABASE_URL", "")
        monkeypatch.setattr(Settings, "SUPABASE_PUBLISHABLE_KEY", "")

        with pytest.raises(ValueError) as exc_info:
            Settings.validate()

        assert "SUPABASE_URL" in str(exc_info.value)
        assert "SUPABASE_PUBLISHABLE_KEY" in str(exc_info.value)


class TestEnvironmentHelpers:

    def test_production(self, monkeypatch):
        monkeypatch.setattr(Settings, "ENVIRONMENT", "Production")

        assert Settings.is_production() is True
        assert Settings.is_development() is False

    def test_enrichment_follows_omdb_key(self, monkeypatch):
        monkeypatch.setattr(Settings, "OMDB_API_KEY", "")
        assert Settings.enrichment_enabled() is False

        monkeypatch.setattr(Settings, "OMDB_API_KEY", "abc123")
        assert Settings.enrichment_enabled() is True


class TestRedactSecret:

    def test_keeps_last_four(self):
        assert redact_secret("abcdefgh") == "****efgh"

    def test_unset(self):
        assert redact_secret("") == "<unset>"

    def test_short_value_fully_masked(self):
        assert redact_secret("abc") == "***"
