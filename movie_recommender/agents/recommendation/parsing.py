"""
Recovery of the recommendation JSON from free-form model text.

Gemini is asked for a bare JSON object but sometimes wraps it in a
markdown fence or surrounds it with prose. Recovery runs in two stages,
each usable on its own:

1. strip_code_fences: remove a leading ```json / ``` marker and the
   trailing ``` marker.
2. extract_json_object: decode the text as-is, otherwise scan every '{'
   with json.JSONDecoder.raw_decode and take the first span that decodes
   to an object (preferring one that carries the required key). Braces
   inside string literals or in prose before the payload do not confuse it.

Trailing commas before '}' or ']' (a common LLM mistake) are removed as a
last resort when nothing decodes.

Each entry is validated on its own: malformed entries are dropped with a
warning instead of failing the whole answer.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from movie_recommender.exceptions import GenerationError
from movie_recommender.schemas.recommendations import GeminiResponse, Recommendation

RESPONSE_KEY = "recommendations"

_OPENING_FENCE = re.compile(r'^```[A-Za-z0-9_+-]*[ \t]*\r?\n?')
_CLOSING_FENCE = re.compile(r'\s*```$')
_TRAILING_COMMA = re.compile(r',(\s*[}\]])')

_decoder = json.JSONDecoder()

logger = logging.getLogger(__name__)


def strip_code_fences(text: str) -> str:
    """Remove one leading (optionally language-tagged) and one trailing fence."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub('', cleaned, count=1)
        cleaned = _CLOSING_FENCE.sub('', cleaned, count=1)
    return cleaned.strip()


def _scan_for_object(text: str, required_key: Optional[str]) -> Optional[Dict[str, Any]]:
    first_object: Optional[Dict[str, Any]] = None
    index = text.find('{')

    while index != -1:
        try:
            candidate, end = _decoder.raw_decode(text, index)
        except json.JSONDecodeError:
            index = text.find('{', index + 1)
            continue

        if isinstance(candidate, dict):
            if required_key is None or required_key in candidate:
                return candidate
            if first_object is None:
                first_object = candidate

        # Skip past the decoded span, nested objects are part of it
        index = text.find('{', end)

    return first_object


def extract_json_object(text: str, required_key: Optional[str] = None) -> Dict[str, Any]:
    """
    Find the JSON object embedded in text.

    Args:
        text: Model output (fences already stripped or not)
        required_key: Prefer the first object containing this key

    Returns:
        The decoded object

    Raises:
        GenerationError: If no JSON object can be decoded anywhere in text
    """
    stripped = text.strip()

    try:
        whole = json.loads(stripped)
        if isinstance(whole, dict):
            return whole
    except json.JSONDecodeError:
        pass

    found = _scan_for_object(stripped, required_key)
    if found is None:
        repaired = _TRAILING_COMMA.sub(r'\1', stripped)
        if repaired != stripped:
            found = _scan_for_object(repaired, required_key)

    if found is None:
        raise GenerationError("Model response did not contain a JSON object.")

    return found


def parse_recommendation_response(text: Optional[str]) -> List[Recommendation]:
    """
    Turn raw model text into the list of recommendations, order preserved.

    Entries that do not match the Recommendation schema (e.g. no title, or
    a year like "2019-2020") are skipped with a warning.

    Raises:
        GenerationError: Empty text, no JSON object, missing 'recommendations'
                         key, 'recommendations' not a list, or no entry at
                         all matching the schema
    """
    if not text or not text.strip():
        raise GenerationError("Empty response from recommendation model.")

    data = extract_json_object(strip_code_fences(text), required_key=RESPONSE_KEY)

    if RESPONSE_KEY not in data:
        raise GenerationError("Model response is missing the 'recommendations' field.")

    try:
        envelope = GeminiResponse.model_validate(data)
    except ValidationError:
        raise GenerationError("Model response 'recommendations' field is not a list.")

    recommendations: List[Recommendation] = []
    for position, entry in enumerate(envelope.recommendations, 1):
        try:
            recommendations.append(Recommendation.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                f"Skipping recommendation #{position}: {e.error_count()} validation error(s)"
            )

    if envelope.recommendations and not recommendations:
        raise GenerationError("No recommendation in the model response matches the schema.")

    return recommendations
