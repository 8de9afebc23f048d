"""
Pydantic schemas for watch history entries and the history endpoints.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from movie_recommender.utils.constants import MAX_RATING, MIN_MOVIE_YEAR, MIN_RATING


def _validate_year(year: int) -> int:
    current_year = datetime.now(timezone.utc).year
    if year < MIN_MOVIE_YEAR or year > current_year:
        raise ValueError(f"year must be between {MIN_MOVIE_YEAR} and {current_year}")
    return year


def parse_watched_date(value: str) -> datetime:
    """
    Parse an ISO-8601 watched date into an aware datetime.

    Accepts the trailing 'Z' written by browser clients. Naive values are
    taken as UTC.

    Raises:
        ValueError: If value is not an ISO-8601 date or datetime.
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _validate_watched_date(value: str) -> str:
    try:
        parse_watched_date(value)
    except ValueError:
        raise ValueError("watchedDate must be an ISO-8601 timestamp")
    return value


def build_movie_id(title: str, year: int, created_at: Optional[datetime] = None) -> str:
    """
    Build a watch history id from title, year and creation time in epoch ms.

    Collisions need the same title and year added in the same millisecond.
    """
    created_at = created_at or datetime.now(timezone.utc)
    return f"{title}-{year}-{int(created_at.timestamp() * 1000)}"


# --- Stored entry ---

class WatchedMovie(BaseModel):
    """
    A movie in the user's watch history.

    The id never changes after creation; every other field can be edited.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Stable entry id: '{title}-{year}-{epoch_ms}'")
    title: str = Field(..., min_length=1)
    year: int = Field(..., description=f"Release year ({MIN_MOVIE_YEAR} to current year)")
    rating: int = Field(0, ge=MIN_RATING, le=MAX_RATING, description="0 means unrated")
    watched_date: str = Field(
        ...,
        alias="watchedDate",
        description="ISO-8601 timestamp of when the movie was added/watched"
    )
    poster: Optional[str] = Field(None, description="Poster URL")

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int) -> int:
        return _validate_year(v)

    @field_validator("watched_date")
    @classmethod
    def validate_watched_date(cls, v: str) -> str:
        return _validate_watched_date(v)


# --- Requests ---

class WatchedMovieCreateRequest(BaseModel):
    """
    Request to add a movie manually.

    The server assigns id and, unless given, the watched date.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=300)
    year: int
    rating: int = Field(0, ge=MIN_RATING, le=MAX_RATING)
    watched_date: Optional[str] = Field(None, alias="watchedDate")
    poster: Optional[str] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int) -> int:
        return _validate_year(v)

    @field_validator("watched_date")
    @classmethod
    def validate_watched_date(cls, v: Optional[str]) -> Optional[str]:
        return _validate_watched_date(v) if v is not None else v

    def to_movie(self, created_at: Optional[datetime] = None) -> WatchedMovie:
        created_at = created_at or datetime.now(timezone.utc)
        return WatchedMovie(
            id=build_movie_id(self.title, self.year, created_at),
            title=self.title,
            year=self.year,
            rating=self.rating,
            watched_date=self.watched_date or created_at.isoformat(),
            poster=self.poster,
        )


class WatchedMovieUpdateRequest(BaseModel):
    """
    Request to edit a history entry. Only provided fields change.

    Only poster may be sent as null (to remove it); the other fields are
    required on the stored entry.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1, max_length=300)
    year: Optional[int] = None
    rating: Optional[int] = Field(None, ge=MIN_RATING, le=MAX_RATING)
    watched_date: Optional[str] = Field(None, alias="watchedDate")
    poster: Optional[str] = None

    @field_validator("title", "year", "rating", "watched_date", mode="before")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: Optional[int]) -> Optional[int]:
        return _validate_year(v) if v is not None else v

    @field_validator("watched_date")
    @classmethod
    def validate_watched_date(cls, v: Optional[str]) -> Optional[str]:
        return _validate_watched_date(v) if v is not None else v


# --- Responses ---

class HistoryStats(BaseModel):
    """Summary figures shown above the history list."""
    total: int = Field(..., description="Number of movies in history")
    average_rating: float = Field(..., description="Mean rating, one decimal (0.0 when empty)")
    highly_rated: int = Field(..., description="Movies rated 8 or higher")


class WatchHistoryResponse(BaseModel):
    """Response for GET /history, most recently watched first."""
    movies: List[WatchedMovie]
    stats: HistoryStats


class WatchedMovieMutationResponse(BaseModel):
    """Response after adding or updating a history entry."""
    status: Literal["ADDED", "UPDATED"]
    movie: WatchedMovie
    message: str


class HistoryDeleteResponse(BaseModel):
    """Response after deleting one entry or the whole history."""
    status: Literal["DELETED"] = "DELETED"
    message: str
