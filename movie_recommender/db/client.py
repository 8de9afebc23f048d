"""
Supabase client factory for the hosted key-value backend.

Only used when STORAGE_BACKEND=supabase. The client uses the publishable
key; access to the kv table is governed by the project's table policies.
"""

import logging

from movie_recommender.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Create a Supabase client from settings.

    Returns:
        A Supabase client bound to SUPABASE_URL.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_PUBLISHABLE_KEY is missing.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_PUBLISHABLE_KEY:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_PUBLISHABLE_KEY must be set "
            "to use the supabase storage backend."
        )

    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    logger.debug("Created Supabase client for kv storage")

    return client
