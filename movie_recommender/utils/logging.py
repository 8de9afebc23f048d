"""
Logging utilities for the Movie Recommender backend.

Provides standardized logger configuration.

RULES:
- NEVER log GOOGLE_API_KEY, OMDB_API_KEY or Supabase keys
- NEVER log the full OMDb request URL (it carries the API key)
- Log high-level events (e.g., "Gemini call completed", "OMDb batch finished")
- Log titles and years freely; they are not sensitive
- Log raw model output only truncated (first 500 characters)
"""

import logging
from typing import Optional

from movie_recommender.config import settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from movie_recommender.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def redact_secret(value: str, visible: int = 4) -> str:
    """Mask a secret for log output, keeping only the last few characters."""
    if not value:
        return "<unset>"
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
