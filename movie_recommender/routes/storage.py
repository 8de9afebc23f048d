"""
Storage maintenance endpoint.

- DELETE /storage: clear the preference profile and the watch history
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from movie_recommender.routes.dependencies import get_store
from movie_recommender.schemas.history import HistoryDeleteResponse
from movie_recommender.services.store import WatchHistoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storage", tags=["storage"])


@router.delete(
    "",
    response_model=HistoryDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear all stored data",
)
async def clear_storage(
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> HistoryDeleteResponse:
    """Clear everything the store holds."""
    logger.info("Clearing all stored data")
    store.clear_all()

    return HistoryDeleteResponse(message="All stored data cleared")
