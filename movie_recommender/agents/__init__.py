"""
AI Components for the Movie Recommender backend.

1. Recommendation System (Single-Prompt LLM)
   - Builds one natural-language prompt from the preference profile,
     the watch history and the surprise flag
   - Gemini answers with a JSON object that is recovered from the text
   - Located in: movie_recommender/services/recommendation_service.py

The Gemini call itself lives in the service layer; this package only holds
the prompt text and the response parser so both can be tested without a
model.
"""

from movie_recommender.agents.recommendation import (
    build_recommendation_prompt,
    parse_recommendation_response,
)

__all__ = [
    "build_recommendation_prompt",
    "parse_recommendation_response",
]
