"""
Metadata Service - OMDb enrichment

Looks up posters, ratings and genres on the OMDb API and merges them into
Gemini recommendations.

Behavior:
- No OMDB_API_KEY: every lookup returns None without any request
  ("enrichment unavailable" is a normal mode, not an error)
- OMDb "Response": "False" (not found): None
- Transport / HTTP / decoding failure: logged, None
- Batch lookups run concurrently on one httpx.AsyncClient and wait for all;
  one failed lookup never fails the batch
- No timeouts: a stalled OMDb stalls the batch

The OMDb request URL carries the API key; never log it.
"""

import asyncio
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import httpx

from movie_recommender.config import settings
from movie_recommender.exceptions import MetadataLookupError
from movie_recommender.schemas.recommendations import MovieData, Recommendation
from movie_recommender.utils.constants import OMDB_NOT_AVAILABLE
from movie_recommender.utils.logging import get_logger

logger = get_logger(__name__)

ROTTEN_TOMATOES_SOURCE = "Rotten Tomatoes"

_YEAR_PATTERN = re.compile(r'\d{4}')

TitleYear = Tuple[str, Optional[int]]

_missing_key_warned = False


def _warn_missing_key() -> None:
    """Log the missing OMDB_API_KEY once per process."""
    global _missing_key_warned

    if _missing_key_warned:
        return
    _missing_key_warned = True
    logger.warning("OMDB API key not provided. Movie posters and metadata will not be available.")


def _not_available(value: Optional[str]) -> Optional[str]:
    if not value or value == OMDB_NOT_AVAILABLE:
        return None
    return value


def _parse_year(raw: Any) -> int:
    # Series come back as "2019–2022"
    match = _YEAR_PATTERN.search(str(raw or ""))
    if not match:
        raise ValueError(f"unparseable year {raw!r}")
    return int(match.group(0))


def parse_omdb_payload(data: Dict[str, Any]) -> MovieData:
    """
    Map a found OMDb record onto MovieData.

    Raises:
        ValueError: If title or year is missing/unreadable.
    """
    title = data.get("Title")
    if not title:
        raise ValueError("missing Title")

    genre_raw = _not_available(data.get("Genre"))
    genres = [g.strip() for g in genre_raw.split(",") if g.strip()] if genre_raw else []

    rotten_tomatoes = None
    for rating in data.get("Ratings") or []:
        if isinstance(rating, dict) and rating.get("Source") == ROTTEN_TOMATOES_SOURCE:
            rotten_tomatoes = rating.get("Value")
            break

    return MovieData(
        title=title,
        year=_parse_year(data.get("Year")),
        genre=genres,
        plot=_not_available(data.get("Plot")) or "No description available",
        poster=_not_available(data.get("Poster")),
        imdb_rating=_not_available(data.get("imdbRating")),
        rotten_tomatoes=rotten_tomatoes,
        director=_not_available(data.get("Director")) or "Unknown",
        actors=_not_available(data.get("Actors")) or "Unknown",
    )


def _build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.OMDB_BASE_URL, timeout=None)


async def _lookup(
    http_client: httpx.AsyncClient,
    title: str,
    year: Optional[int],
) -> Optional[MovieData]:
    """
    One OMDb request.

    Returns None for "not found". Raises MetadataLookupError on failure.
    """
    params: Dict[str, Union[str, int]] = {
        "apikey": settings.OMDB_API_KEY,
        "t": title,
        "plot": "short",
    }
    if year:
        params["y"] = year

    try:
        response = await http_client.get("/", params=params)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise MetadataLookupError(title, year, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise MetadataLookupError(title, year, type(e).__name__) from e
    except ValueError as e:
        raise MetadataLookupError(title, year, "invalid JSON body") from e

    if not isinstance(data, dict):
        raise MetadataLookupError(title, year, "unexpected response shape")

    if data.get("Response") == "False":
        logger.warning(f"Movie not found: {title} ({year}): {data.get('Error', 'unknown error')}")
        return None

    try:
        return parse_omdb_payload(data)
    except ValueError as e:
        raise MetadataLookupError(title, year, str(e)) from e


async def fetch_movie_data(
    title: str,
    year: Optional[int] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Optional[MovieData]:
    """
    Look up one movie on OMDb.

    Args:
        title: Movie title (URL-escaped by httpx)
        year: Release year (optional, narrows the match)
        http_client: Shared client; a temporary one is created if omitted

    Returns:
        MovieData, or None when not found, failed, or no API key configured
    """
    if not settings.OMDB_API_KEY:
        _warn_missing_key()
        return None

    try:
        if http_client is not None:
            return await _lookup(http_client, title, year)
        async with _build_http_client() as client:
            return await _lookup(client, title, year)
    except MetadataLookupError as e:
        logger.error(f"Error fetching movie data: {e}")
        return None


async def fetch_multiple_movie_data(
    items: Iterable[TitleYear],
    http_client: Optional[httpx.AsyncClient] = None,
) -> List[MovieData]:
    """
    Look up many movies concurrently.

    Every lookup is awaited (one gather barrier). Misses and failures are
    dropped; the order of the remaining records follows the input order.

    Returns:
        List of MovieData for the lookups that succeeded
    """
    items = list(items)
    if not items:
        return []

    if not settings.OMDB_API_KEY:
        _warn_missing_key()
        return []

    async def _run(client: httpx.AsyncClient) -> List[Any]:
        return await asyncio.gather(
            *(fetch_movie_data(title, year, http_client=client) for title, year in items),
            return_exceptions=True,
        )

    if http_client is not None:
        results = await _run(http_client)
    else:
        async with _build_http_client() as client:
            results = await _run(client)

    found: List[MovieData] = []
    for (title, year), result in zip(items, results):
        if isinstance(result, BaseException):
            logger.error(f"Unexpected error looking up '{title}' ({year}): {result}")
            continue
        if result is not None:
            found.append(result)

    logger.info(f"OMDb batch finished: {len(found)}/{len(items)} movies found")
    return found


def merge_movie_data(
    recommendations: Sequence[Recommendation],
    movie_data: Sequence[MovieData],
) -> List[Recommendation]:
    """
    Copy OMDb fields onto matching recommendations.

    A record matches when its title equals the recommendation title
    case-insensitively and the years are equal. On match poster,
    imdb_rating, rotten_tomatoes and (when non-empty) genre are copied;
    everything else is left alone. Unmatched recommendations are returned
    unchanged. Inputs are not mutated.
    """
    merged: List[Recommendation] = []

    for rec in recommendations:
        match = next(
            (
                data for data in movie_data
                if data.title.lower() == rec.title.lower() and data.year == rec.year
            ),
            None,
        )

        if match is None:
            merged.append(rec)
            continue

        updates: Dict[str, Any] = {
            "poster": match.poster,
            "imdb_rating": match.imdb_rating,
            "rotten_tomatoes": match.rotten_tomatoes,
        }
        if match.genre:
            updates["genre"] = list(match.genre)

        merged.append(rec.model_copy(update=updates))

    return merged


async def enrich_recommendations(
    recommendations: Sequence[Recommendation],
    http_client: Optional[httpx.AsyncClient] = None,
) -> List[Recommendation]:
    """
    Fetch OMDb data for all recommendations and merge it in.

    Best effort: on any batch-level failure the recommendations come back
    as they were.
    """
    if not recommendations:
        return []

    try:
        movie_data = await fetch_multiple_movie_data(
            [(rec.title, rec.year) for rec in recommendations],
            http_client=http_client,
        )
    except Exception as e:
        logger.error(f"Error fetching movie data for recommendations: {e}", exc_info=True)
        return list(recommendations)

    return merge_movie_data(recommendations, movie_data)
