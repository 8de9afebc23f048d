"""
FastAPI routes for recommendation endpoints.

This module exposes HTTP endpoints for the recommendation flow powered by
Gemini (generation) and OMDb (poster/rating enrichment).

Endpoints:
- POST /recommendations: generate from the stored (or inline) profile
- POST /recommendations/surprise: generate from the broad surprise profile
- POST /recommendations/promote: add a recommended movie to the history
"""

import logging
from datetime import datetime, timezone
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from movie_recommender.config import settings
from movie_recommender.exceptions import GenerationError
from movie_recommender.routes.dependencies import get_store
from movie_recommender.schemas.history import WatchedMovie, build_movie_id
from movie_recommender.schemas.recommendations import (
    PromoteRecommendationRequest,
    PromoteRecommendationResponse,
    Recommendation,
    RecommendationListResponse,
    RecommendationRequest,
)
from movie_recommender.services.metadata_service import enrich_recommendations
from movie_recommender.services.recommendation_service import (
    generate_recommendations,
    generate_surprise_recommendations,
)
from movie_recommender.services.store import WatchHistoryStore

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)


def _generation_failed(error: GenerationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "error": "generation_failed",
            "details": error.message,
            "retry": True
        }
    )


def _storage_failed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "storage_error",
            "details": "Failed to save watch history entry"
        }
    )


async def _build_response(
    recommendations: List[Recommendation],
    surprise_mode: bool,
) -> RecommendationListResponse:
    enriched = await enrich_recommendations(recommendations)
    return RecommendationListResponse(
        surprise_mode=surprise_mode,
        enrichment_available=settings.enrichment_enabled(),
        recommendations=enriched,
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "",
    response_model=RecommendationListResponse,
    status_code=200,
    summary="Generate movie recommendations",
    description="""
    Generates 8-10 movie recommendations from the user's profile and
    watch history.

    **Frontend Flow:**
    1. User completes the questionnaire (PUT /preferences)
    2. POST /recommendations (optionally with `surprise_mode: true`)
    3. Receive the list; posters/ratings are present when OMDb found them
    4. Refresh = POST again

    **Errors:**
    - 404 when no profile is stored and none is sent inline
    - 502 when Gemini fails or its answer cannot be parsed (retry allowed)
    """
)
async def create_recommendations(
    request: RecommendationRequest,
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> RecommendationListResponse:
    """
    Recommendation endpoint.

    - Resolve profile: inline preferences win over the stored ones
    - Call LLM: single Gemini call via service layer
    - Enrich: best-effort OMDb lookups, never fail the request
    """
    preferences = request.preferences or store.get_preferences()
    if preferences is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "preferences_required",
                "details": "No preferences stored. Complete the questionnaire first."
            }
        )

    watch_history = store.get_watch_history()
    logger.info(
        f"POST /recommendations called: surprise_mode={request.surprise_mode}, "
        f"history_size={len(watch_history)}"
    )

    try:
        recommendations = await generate_recommendations(
            preferences=preferences,
            watch_history=watch_history,
            surprise_me=request.surprise_mode,
        )
    except GenerationError as e:
        logger.error(f"Recommendation generation failed: {e}")
        raise _generation_failed(e)

    response = await _build_response(recommendations, request.surprise_mode)
    logger.info(f"Returning {len(response.recommendations)} recommendations")
    return response


@router.post(
    "/surprise",
    response_model=RecommendationListResponse,
    status_code=200,
    summary="Surprise me",
    description="""
    Generates recommendations without a questionnaire: a broad default
    profile plus the stored watch history, with the surprise instruction on.
    """
)
async def create_surprise_recommendations(
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> RecommendationListResponse:
    """Surprise endpoint."""
    watch_history = store.get_watch_history()
    logger.info(f"POST /recommendations/surprise called: history_size={len(watch_history)}")

    try:
        recommendations = await generate_surprise_recommendations(watch_history)
    except GenerationError as e:
        logger.error(f"Surprise generation failed: {e}")
        raise _generation_failed(e)

    return await _build_response(recommendations, surprise_mode=True)


@router.post(
    "/promote",
    response_model=PromoteRecommendationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recommendation to the watch history",
    description="""
    Turns a recommended movie into a watch history entry. The poster is
    carried over when the recommendation was enriched.
    """
)
async def promote_recommendation(
    request: PromoteRecommendationRequest,
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> PromoteRecommendationResponse:
    """Promote one recommendation into the history."""
    rec = request.recommendation
    now = datetime.now(timezone.utc)

    try:
        movie = WatchedMovie(
            id=build_movie_id(rec.title, rec.year, now),
            title=rec.title,
            year=rec.year,
            rating=request.rating,
            watched_date=now.isoformat(),
            poster=rec.poster,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "invalid_recommendation",
                "details": str(e)
            }
        )

    logger.info(f"Promoting '{movie.title}' ({movie.year}) to watch history")
    if not store.add_watch_entry(movie):
        raise _storage_failed()

    return PromoteRecommendationResponse(
        movie=movie,
        message="Movie added to watch history"
    )
