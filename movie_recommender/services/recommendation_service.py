"""
Recommendation Service - Gemini movie suggestions

This service turns a preference profile and a watch history into a list of
movie recommendations using Google's Gemini model.

Architecture:
- Pattern: Single LLM call (one prompt in, one JSON object out)
- Model: Gemini 2.5 Flash (settings.GEMINI_MODEL)
- API: Google Gen AI Python SDK (google-genai)
- Output: JSON parsed from text (fences and surrounding prose tolerated)

There is no retry and no timeout on the Gemini call. Every failure is
raised as GenerationError; retrying is left to the user.

This service never writes to the store.
"""

import logging
from typing import List, Optional, Sequence

from google import genai

from movie_recommender.agents.recommendation.parsing import parse_recommendation_response
from movie_recommender.agents.recommendation.prompts import build_recommendation_prompt
from movie_recommender.config import settings
from movie_recommender.exceptions import GenerationError
from movie_recommender.schemas.history import WatchedMovie
from movie_recommender.schemas.preferences import PreferenceProfile
from movie_recommender.schemas.recommendations import Recommendation
from movie_recommender.utils.constants import SURPRISE_PREFERENCES

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None


def _get_gemini_client():
    """
    Lazy initialization of Gemini client.
    Uses the Google Gen AI SDK.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.warning(
            "GOOGLE_API_KEY not configured. Recommendation service will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    try:
        _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
        logger.info("Gemini client initialized successfully for recommendations")
        return _gemini_client
    except Exception as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        return None


def _extract_response_text(response) -> Optional[str]:
    """
    Get the text out of a Gemini response.

    response.text can be None even when the first candidate has text parts,
    so parts are checked first.
    """
    candidates = getattr(response, "candidates", None)
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) if content else None
        if parts:
            texts = [part.text for part in parts if isinstance(getattr(part, "text", None), str)]
            if texts:
                return "".join(texts)

    text = getattr(response, "text", None)
    return text if isinstance(text, str) else None


def get_surprise_preferences() -> PreferenceProfile:
    """Broad default profile used by the "surprise me" flow."""
    return PreferenceProfile.model_validate(SURPRISE_PREFERENCES)


async def generate_recommendations(
    preferences: PreferenceProfile,
    watch_history: Sequence[WatchedMovie],
    surprise_me: bool = False,
    client=None,
) -> List[Recommendation]:
    """
    Generate movie recommendations with Gemini.

    This function:
    1. Builds the prompt from profile, history (insertion order) and flag
    2. Calls Gemini once with exactly that prompt
    3. Recovers the JSON object from the returned text
    4. Returns the recommendations in the order the model gave them

    Args:
        preferences: Questionnaire answers
        watch_history: Watch history in insertion order
        surprise_me: Ask the model to deviate from the stated preferences
        client: Optional genai.Client (defaults to the lazily created one)

    Returns:
        List of Recommendation (not enriched)

    Raises:
        GenerationError: Client not configured, API failure, empty or
                         unparseable response, missing 'recommendations'
    """
    logger.info(
        f"generate_recommendations called: history_size={len(watch_history)}, "
        f"surprise_me={surprise_me}"
    )

    client = client or _get_gemini_client()
    if client is None:
        logger.error("Gemini client not available")
        raise GenerationError(
            "Recommendation service is not configured. Please set GOOGLE_API_KEY."
        )

    prompt = build_recommendation_prompt(preferences, watch_history, surprise_me)

    try:
        logger.info(f"Calling Gemini API (model={settings.GEMINI_MODEL})...")
        response = client.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=prompt,
        )
    except Exception as e:
        logger.error(f"Error calling Gemini API: {e}", exc_info=True)
        raise GenerationError(
            "Failed to generate recommendations. Please try again."
        ) from e

    content = _extract_response_text(response)
    if not content:
        logger.error("Empty text in Gemini response")
        raise GenerationError("No response from recommendation service. Please try again.")

    try:
        recommendations = parse_recommendation_response(content)
    except GenerationError as e:
        logger.error(f"Failed to parse Gemini response: {e}")
        logger.error(f"Raw content: {content[:500]}")
        raise

    logger.info(f"Returning {len(recommendations)} movie recommendations")
    return recommendations


async def generate_surprise_recommendations(
    watch_history: Sequence[WatchedMovie],
    client=None,
) -> List[Recommendation]:
    """
    Surprise flow: broad default profile, stored history, surprise flag on.
    """
    logger.info("generate_surprise_recommendations called")

    return await generate_recommendations(
        preferences=get_surprise_preferences(),
        watch_history=watch_history,
        surprise_me=True,
        client=client,
    )
