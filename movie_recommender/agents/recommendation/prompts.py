"""
Recommendation Prompt Templates

Contains the prompt builder for the Recommendation Service.

The Recommendation Service sends ONE plain-text prompt to Gemini and expects
a single JSON object back (no system instruction, no tools, no
response_schema).

Prompt layout (in order):
1. Task framing (8-10 movies)
2. User preferences, one labeled line per field
3. Watch history lines in insertion order, or the "no history" sentence
4. Surprise-mode instruction (only when requested)
5. JSON output format + guidelines

The builder is a pure function: no storage or network access.
"""

from typing import List, Sequence

from movie_recommender.schemas.history import WatchedMovie
from movie_recommender.schemas.preferences import PreferenceProfile

RECOMMENDATION_COUNT_RANGE = "8-10"

NO_HISTORY_TEXT = "No watch history available."

SURPRISE_ME_TEXT = (
    "IMPORTANT: The user wants to be surprised! Ignore some of their preferences "
    "and suggest unexpected but great movies that might expand their horizons."
)

WATCH_HISTORY_HEADER = "Watch History (with ratings):"

# =============================================================================
# OUTPUT FORMAT
# =============================================================================
# Kept verbatim at the end of every prompt. The parser in parsing.py relies on
# the model answering with this exact top-level shape.
# =============================================================================

RECOMMENDATION_OUTPUT_FORMAT = """Please respond with a JSON object in this exact format:
{
  "recommendations": [
    {
      "title": "Movie Title",
      "year": 2023,
      "genre": ["Action", "Thriller"],
      "description": "Brief plot description (2-3 sentences)",
      "reasoning": "Why this movie matches their preferences (1-2 sentences)"
    }
  ]
}

Guidelines:
- Include a mix of well-known and hidden gems
- Consider the user's rating preferences (highly-rated vs hidden gems)
- Balance their genre preferences with their mood and content preferences
- If they have watch history, consider patterns in their ratings
- For surprise recommendations, suggest movies that are excellent but might not perfectly match their stated preferences
- Ensure all movies are real and available
- Provide diverse recommendations within their preferences
- Make reasoning specific and helpful

Return only the JSON object, no additional text."""


def format_history_line(movie: WatchedMovie) -> str:
    return f"- {movie.title} ({movie.year}) - Rating: {movie.rating}/10"


def _join(values: List[str]) -> str:
    return ", ".join(values)


def build_recommendation_prompt(
    preferences: PreferenceProfile,
    watch_history: Sequence[WatchedMovie],
    surprise_me: bool = False,
) -> str:
    """
    Build the Gemini prompt from the profile, the history and the surprise flag.

    Args:
        preferences: Questionnaire answers (fields may be empty)
        watch_history: History in insertion order (NOT the date-sorted
                       display order)
        surprise_me: Add the instruction to deviate from stated preferences

    Returns:
        str: Prompt ready to be sent to Gemini
    """
    if watch_history:
        history_lines = "\n".join(format_history_line(movie) for movie in watch_history)
        watch_history_text = f"\n\n{WATCH_HISTORY_HEADER}\n{history_lines}"
    else:
        watch_history_text = f"\n\n{NO_HISTORY_TEXT}"

    surprise_me_text = f"\n\n{SURPRISE_ME_TEXT}" if surprise_me else ""

    return f"""You are an expert movie recommendation AI. Based on the user's preferences and watch history, suggest {RECOMMENDATION_COUNT_RANGE} movies that match their taste.

User Preferences:
- Favorite Genres: {_join(preferences.genres)}
- Preferred Era: {preferences.era}
- Mood/Tone: {_join(preferences.mood)}
- Content Level: {preferences.content_level}
- Watch Time: {preferences.watch_time}
- Rating Preference: {preferences.rating_preference}
- Score Preference: {preferences.score_preference}{watch_history_text}{surprise_me_text}

{RECOMMENDATION_OUTPUT_FORMAT}"""
