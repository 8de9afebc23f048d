"""
Preference questionnaire API endpoints.

Endpoints:
- GET /questionnaire: the questionnaire steps and their fixed options
- GET /preferences: the stored profile
- PUT /preferences: save (overwrite) the profile from a full submission
- DELETE /preferences: clear the stored profile
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from movie_recommender.routes.dependencies import get_store
from movie_recommender.schemas.preferences import (
    PreferenceDeleteResponse,
    PreferenceProfile,
    PreferenceSaveResponse,
    PreferenceSubmitRequest,
    QuestionnaireResponse,
    QuestionnaireStep,
)
from movie_recommender.services.store import WatchHistoryStore
from movie_recommender.utils.constants import QUESTIONNAIRE_STEPS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["preferences"])


@router.get(
    "/questionnaire",
    response_model=QuestionnaireResponse,
    status_code=status.HTTP_200_OK,
    summary="Get questionnaire steps",
    description="""
    Returns the seven questionnaire steps in display order.

    Each step's `id` is the profile field its answer is stored under, and
    single-choice answers must be one of the step's `options`.
    """
)
async def get_questionnaire() -> QuestionnaireResponse:
    """Serve the fixed questionnaire catalog."""
    return QuestionnaireResponse(
        steps=[QuestionnaireStep(**step) for step in QUESTIONNAIRE_STEPS]
    )


@router.get(
    "/preferences",
    response_model=PreferenceProfile,
    status_code=status.HTTP_200_OK,
    summary="Get stored preferences",
)
async def get_preferences(
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> PreferenceProfile:
    """
    Get the stored preference profile.

    Returns 404 when the questionnaire has not been completed yet (or the
    stored profile was unreadable).
    """
    preferences = store.get_preferences()

    if preferences is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "not_found",
                "details": "No preferences stored. Complete the questionnaire first."
            }
        )

    return preferences


@router.put(
    "/preferences",
    response_model=PreferenceSaveResponse,
    status_code=status.HTTP_200_OK,
    summary="Save questionnaire answers",
    description="""
    Stores the questionnaire answers, replacing any previous profile.

    Validation:
    - genres and mood: at least one option each
    - era, contentLevel, watchTime, ratingPreference, scorePreference:
      exactly one of the options from GET /questionnaire
    """
)
async def save_preferences(
    request: PreferenceSubmitRequest,
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> PreferenceSaveResponse:
    """Save the questionnaire submission."""
    logger.info(f"Saving preferences: genres={request.genres}, era='{request.era}'")

    profile = request.to_profile()
    store.set_preferences(profile)

    return PreferenceSaveResponse(
        preferences=profile,
        message="Preferences saved successfully"
    )


@router.delete(
    "/preferences",
    response_model=PreferenceDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear stored preferences",
)
async def delete_preferences(
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> PreferenceDeleteResponse:
    """Clear the stored profile. Safe to call when nothing is stored."""
    logger.info("Clearing stored preferences")
    store.clear_preferences()

    return PreferenceDeleteResponse(message="Preferences cleared successfully")
