"""
Watch history API endpoints.

Endpoints:
- GET /history: all entries, most recently watched first, plus stats
- GET /history/{movie_id}: one entry
- POST /history: add a movie manually
- PATCH /history/{movie_id}: edit fields (rating, title, year, ...)
- DELETE /history/{movie_id}: remove one entry (idempotent)
- DELETE /history: clear the whole history
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from movie_recommender.routes.dependencies import get_store
from movie_recommender.schemas.history import (
    HistoryDeleteResponse,
    WatchedMovie,
    WatchedMovieCreateRequest,
    WatchedMovieMutationResponse,
    WatchedMovieUpdateRequest,
    WatchHistoryResponse,
)
from movie_recommender.services.store import WatchHistoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


def _storage_failed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "storage_error",
            "details": "Failed to save watch history entry"
        }
    )


def _not_found(movie_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": "not_found",
            "details": f"Watch history entry {movie_id} not found"
        }
    )


@router.get(
    "",
    response_model=WatchHistoryResponse,
    status_code=status.HTTP_200_OK,
    summary="List watch history",
    description="""
    Returns every history entry sorted by watched date, newest first,
    together with the summary stats (count, average rating, 8+ count).

    Note: the recommendation prompt uses insertion order, not this order.
    """
)
async def list_history(
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> WatchHistoryResponse:
    """List history in display order."""
    movies = store.get_sorted_watch_history()
    logger.info(f"Returning {len(movies)} watch history entries")

    return WatchHistoryResponse(movies=movies, stats=store.get_history_stats())


@router.get(
    "/{movie_id:path}",
    response_model=WatchedMovie,
    status_code=status.HTTP_200_OK,
    summary="Get one history entry",
)
async def get_history_entry(
    movie_id: Annotated[str, Path(description="Watch history entry id")],
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> WatchedMovie:
    """Get one entry by id."""
    movie = store.get_watch_entry(movie_id)
    if movie is None:
        raise _not_found(movie_id)
    return movie


@router.post(
    "",
    response_model=WatchedMovieMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a movie to the history",
    description="""
    Adds a movie entered manually.

    The server assigns the id ('{title}-{year}-{epoch_ms}') and, when not
    provided, the watched date (now). Year must be between 1900 and the
    current year; rating 0-10 (0 = unrated).
    """
)
async def add_history_entry(
    request: WatchedMovieCreateRequest,
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> WatchedMovieMutationResponse:
    """Append a new entry."""
    movie = request.to_movie()
    logger.info(f"Adding '{movie.title}' ({movie.year}) to watch history")

    if not store.add_watch_entry(movie):
        raise _storage_failed()

    return WatchedMovieMutationResponse(
        status="ADDED",
        movie=movie,
        message="Movie added to watch history"
    )


@router.patch(
    "/{movie_id:path}",
    response_model=WatchedMovieMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Edit a history entry",
    description="""
    Updates only the provided fields. The id never changes.

    Used by the star rating control (`{"rating": 7}`) and the edit form.
    """
)
async def update_history_entry(
    movie_id: Annotated[str, Path(description="Watch history entry id")],
    request: WatchedMovieUpdateRequest,
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> WatchedMovieMutationResponse:
    """Apply a partial update."""
    updates = request.model_dump(exclude_unset=True)

    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_request",
                "details": "At least one field must be provided"
            }
        )

    if store.get_watch_entry(movie_id) is None:
        raise _not_found(movie_id)

    updated = store.update_watch_entry(movie_id, updates)
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "update_error",
                "details": "Failed to update watch history entry"
            }
        )

    return WatchedMovieMutationResponse(
        status="UPDATED",
        movie=updated,
        message="Watch history entry updated"
    )


@router.delete(
    "/{movie_id:path}",
    response_model=HistoryDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Remove a history entry",
)
async def delete_history_entry(
    movie_id: Annotated[str, Path(description="Watch history entry id")],
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> HistoryDeleteResponse:
    """Remove one entry. Removing an absent id succeeds and changes nothing."""
    logger.info(f"Removing watch history entry {movie_id}")
    store.remove_watch_entry(movie_id)

    return HistoryDeleteResponse(message="Movie removed from watch history")


@router.delete(
    "",
    response_model=HistoryDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear the watch history",
)
async def clear_history(
    store: Annotated[WatchHistoryStore, Depends(get_store)]
) -> HistoryDeleteResponse:
    """Remove every entry."""
    logger.info("Clearing watch history")
    store.clear_watch_history()

    return HistoryDeleteResponse(message="Watch history cleared")
