"""
Tests for the recommendation prompt builder.
"""

from movie_recommender.agents.recommendation.prompts import (
    NO_HISTORY_TEXT,
    SURPRISE_ME_TEXT,
    WATCH_HISTORY_HEADER,
    build_recommendation_prompt,
    format_history_line,
)
from movie_recommender.schemas.preferences import PreferenceProfile


class TestPromptBuilding:
    """Test prompt construction."""

    def test_preferences_are_listed(self, comedy_preferences):
        prompt = build_recommendation_prompt(comedy_preferences, [])

        assert "- Favorite Genres: Comedy" in prompt
        assert "- Preferred Era: Recent (2010s-present)" in prompt
        assert "- Mood/Tone: Funny and comedic" in prompt
        assert "- Content Level: Family-friendly only" in prompt
        assert "- Watch Time: Standard (90-120 minutes)" in prompt
        assert "- Rating Preference: Well-rated movies (7+ stars)" in prompt
        assert "- Score Preference: Balanced approach" in prompt

    def test_multiple_genres_are_comma_joined(self, comedy_preferences):
        prefs = comedy_preferences.model_copy(update={"genres": ["Comedy", "Drama", "Sci-Fi"]})

        prompt = build_recommendation_prompt(prefs, [])

        assert "- Favorite Genres: Comedy, Drama, Sci-Fi" in prompt

    def test_no_history_sentence(self, comedy_preferences):
        prompt = build_recommendation_prompt(comedy_preferences, [])

        assert NO_HISTORY_TEXT in prompt
        assert WATCH_HISTORY_HEADER not in prompt

    def test_history_lines_in_insertion_order(self, comedy_preferences, sample_history):
        prompt = build_recommendation_prompt(comedy_preferences, sample_history)

        inception = "- Inception (2010) - Rating: 9/10"
        cats = "- Cats (2019) - Rating: 2/10"
        assert WATCH_HISTORY_HEADER in prompt
        assert NO_HISTORY_TEXT not in prompt
        assert prompt.count(" - Rating: ") == 2
        assert prompt.index(inception) < prompt.index(cats)

    def test_unrated_entry_shows_zero(self, sample_history):
        movie = sample_history[0].model_copy(update={"rating": 0})

        assert format_history_line(movie) == "- Inception (2010) - Rating: 0/10"

    def test_surprise_instruction_only_when_requested(self, comedy_preferences):
        plain = build_recommendation_prompt(comedy_preferences, [], surprise_me=False)
        surprise = build_recommendation_prompt(comedy_preferences, [], surprise_me=True)

        assert SURPRISE_ME_TEXT not in plain
        assert SURPRISE_ME_TEXT in surprise

    def test_output_format_is_appended(self, comedy_preferences):
        prompt = build_recommendation_prompt(comedy_preferences, [])

        assert '"recommendations": [' in prompt
        assert "8-10 movies" in prompt
        assert prompt.endswith("Return only the JSON object, no additional text.")

    def test_empty_profile_still_builds(self):
        prompt = build_recommendation_prompt(PreferenceProfile(), [])

        assert "- Favorite Genres: \n" in prompt
        assert NO_HISTORY_TEXT in prompt
