"""
Recommendation System - Single-Prompt LLM Architecture

This module contains the prompt builder and the response parser for the
Gemini-based movie recommendation system.

Architecture:
- Pattern: Single plain-text prompt, single JSON answer
- Model: Gemini 2.5 Flash (configurable via GEMINI_MODEL)
- Output: JSON parsed from text (fences and surrounding prose tolerated)

The service layer is in:
- movie_recommender/services/recommendation_service.py

Prompt templates are in:
- movie_recommender/agents/recommendation/prompts.py
"""

from movie_recommender.agents.recommendation.parsing import (
    extract_json_object,
    parse_recommendation_response,
    strip_code_fences,
)
from movie_recommender.agents.recommendation.prompts import (
    NO_HISTORY_TEXT,
    SURPRISE_ME_TEXT,
    build_recommendation_prompt,
)

__all__ = [
    "NO_HISTORY_TEXT",
    "SURPRISE_ME_TEXT",
    "build_recommendation_prompt",
    "extract_json_object",
    "parse_recommendation_response",
    "strip_code_fences",
]
