"""
Pydantic schemas for recommendation generation, OMDb metadata and the
recommendation endpoints.

Recommendation mirrors the JSON object Gemini is asked to return. Fields
the model leaves out stay None; they are never filled with placeholders.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movie_recommender.schemas.history import WatchedMovie
from movie_recommender.schemas.preferences import PreferenceProfile
from movie_recommender.utils.constants import MAX_RATING, MIN_RATING


# ============================================================================
# MODEL OUTPUT
# ============================================================================

class Recommendation(BaseModel):
    """
    A single AI-suggested movie.

    poster, imdb_rating and rotten_tomatoes are filled later by the OMDb
    enrichment step when a matching record is found.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., examples=["Dune"])
    year: int = Field(..., examples=[2021])
    genre: Optional[List[str]] = Field(None, examples=[["Sci-Fi", "Adventure"]])
    description: Optional[str] = Field(None, description="Brief plot description")
    reasoning: Optional[str] = Field(None, description="Why this matches the profile")
    poster: Optional[str] = Field(None, description="Poster URL (from OMDb)")
    imdb_rating: Optional[str] = Field(None, alias="imdbRating", examples=["8.0"])
    rotten_tomatoes: Optional[str] = Field(None, alias="rottenTomatoes", examples=["83%"])

    @field_validator("genre", mode="before")
    @classmethod
    def split_genre_string(cls, v):
        # Models sometimes answer "Drama" or "Action, Thriller" instead of a list
        if isinstance(v, str):
            return [g.strip() for g in v.split(",") if g.strip()]
        return v


class GeminiResponse(BaseModel):
    """
    The JSON object Gemini must return.

    Entries stay raw here; each one is validated as a Recommendation on
    its own so a single malformed entry can be skipped.
    """
    model_config = ConfigDict(populate_by_name=True)

    recommendations: List[Any]
    surprise_me: Optional[bool] = Field(None, alias="surpriseMe")


# ============================================================================
# OMDb METADATA
# ============================================================================

class MovieData(BaseModel):
    """
    Normalized result of one OMDb lookup.

    "N/A" values from OMDb are mapped to None.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    year: int
    genre: List[str] = Field(default_factory=list)
    plot: str = "No description available"
    poster: Optional[str] = None
    imdb_rating: Optional[str] = Field(None, alias="imdbRating")
    rotten_tomatoes: Optional[str] = Field(None, alias="rottenTomatoes")
    director: str = "Unknown"
    actors: str = "Unknown"


# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationRequest(BaseModel):
    """
    Request to generate recommendations.

    Frontend scenarios:
    - After the questionnaire: no preferences in body, stored profile is used
    - Refresh/retry: same request again (the model returns a new list)
    - Inline profile: preferences sent directly without storing them
    """
    surprise_mode: bool = Field(
        False,
        description="Ask the model to deliberately step outside the stated preferences"
    )
    preferences: Optional[PreferenceProfile] = Field(
        None,
        description="Profile to use instead of the stored one"
    )


class PromoteRecommendationRequest(BaseModel):
    """Request to add a recommended movie to the watch history."""
    recommendation: Recommendation
    rating: int = Field(0, ge=MIN_RATING, le=MAX_RATING, description="0 means unrated")


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationListResponse(BaseModel):
    """
    Response with the generated (and, when available, enriched) movies.

    Frontend should:
    1. Display the recommendations; fall back to "no poster" when poster is null
    2. Offer refresh (POST again) and "add to history" (POST /recommendations/promote)
    """
    status: Literal["OK"] = "OK"
    surprise_mode: bool
    enrichment_available: bool = Field(
        ...,
        description="False when no OMDb key is configured"
    )
    recommendations: List[Recommendation]


class PromoteRecommendationResponse(BaseModel):
    """Response after promoting a recommendation into the history."""
    status: Literal["ADDED"] = "ADDED"
    movie: WatchedMovie
    message: str
