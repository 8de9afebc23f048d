"""
Exception hierarchy for the Movie Recommender backend.

- GenerationError: the Gemini call failed or its output could not be
  recovered into the expected JSON shape. Escalates to the caller.
- MetadataLookupError: a single OMDb lookup failed. Never escapes the
  enrichment batch.
- StoreReadError: persisted data exists but cannot be decoded. Logged and
  quarantined by the store, then treated as "no data".
"""


class MovieRecommenderError(Exception):
    """Base exception for the application"""
    pass


class GenerationError(MovieRecommenderError):
    """Raised when recommendations cannot be produced from the model."""

    def __init__(self, message: str = "Failed to generate recommendations. Please try again."):
        super().__init__(message)
        self.message = message


class MetadataLookupError(MovieRecommenderError):
    """Raised for a failed metadata lookup of one (title, year) pair."""

    def __init__(self, title: str, year, reason: str):
        super().__init__(f"Lookup failed for '{title}' ({year}): {reason}")
        self.title = title
        self.year = year
        self.reason = reason


class StoreReadError(MovieRecommenderError):
    """Raised when a stored blob cannot be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Corrupt data under key '{key}': {reason}")
        self.key = key
        self.reason = reason
