"""
Configuration module for the Movie Recommender backend.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Google Gemini API (recommendation generation)
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # OMDb API (poster / rating enrichment). Empty key disables enrichment.
    OMDB_API_KEY: str = os.getenv("OMDB_API_KEY", "")
    OMDB_BASE_URL: str = os.getenv("OMDB_BASE_URL", "https://www.omdbapi.com")

    # Persistence backend: "memory", "file", "supabase" or "none"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "file")
    STORAGE_FILE_PATH: str = os.getenv("STORAGE_FILE_PATH", ".movie_recommender_store.json")

    # Supabase Configuration (only used with STORAGE_BACKEND=supabase)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_PUBLISHABLE_KEY: str = os.getenv("SUPABASE_PUBLISHABLE_KEY", "")
    SUPABASE_KV_TABLE: str = os.getenv("SUPABASE_KV_TABLE", "kv_store")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (production only, comma-separated)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "GOOGLE_API_KEY": cls.GOOGLE_API_KEY,
        }

        if cls.STORAGE_BACKEND.lower() == "supabase":
            required_settings["SUPABASE_URL"] = cls.SUPABASE_URL
            required_settings["SUPABASE_PUBLISHABLE_KEY"] = cls.SUPABASE_PUBLISHABLE_KEY

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"

    @classmethod
    def enrichment_enabled(cls) -> bool:
        """OMDb lookups only run when an API key is configured."""
        return bool(cls.OMDB_API_KEY)


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"⚠️  Warning: {e}")
            print("   The app may not work correctly until you configure your .env file.")
        else:
            # In production, fail immediately
            raise
