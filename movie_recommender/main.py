"""
FastAPI application entry point for the Movie Recommender backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from movie_recommender.config import settings
from movie_recommender.exceptions import MovieRecommenderError
from movie_recommender.routes.history import router as history_router
from movie_recommender.routes.preferences import router as preferences_router
from movie_recommender.routes.recommendations import router as recommendations_router
from movie_recommender.routes.storage import router as storage_router
from movie_recommender.utils.logging import redact_secret

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - Any other environment: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for web clients."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


# Create FastAPI app
app = FastAPI(
    title="Movie Recommender API",
    description="Questionnaire, watch history and AI movie recommendations",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(MovieRecommenderError)
async def app_exception_handler(request: Request, exc: MovieRecommenderError):
    """
    Catch application errors that escaped a route.

    Returns 500 JSON response without internal details.
    """
    logger.error(
        f"Unhandled application error on {request.method} {request.url.path}: {exc}",
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "details": "An unexpected error occurred. Please try again."
        }
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(preferences_router)
app.include_router(history_router)
app.include_router(recommendations_router)
app.include_router(storage_router)


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Check if API is running and which integrations are configured."""
    return {
        "status": "healthy",
        "service": "movie-recommender-backend",
        "generation_configured": bool(settings.GOOGLE_API_KEY),
        "enrichment_configured": settings.enrichment_enabled(),
        "storage_backend": settings.STORAGE_BACKEND,
    }


logger.info(
    f"FastAPI app initialized (model={settings.GEMINI_MODEL}, "
    f"gemini_key={redact_secret(settings.GOOGLE_API_KEY)}, "
    f"omdb_key={redact_secret(settings.OMDB_API_KEY)})"
)
