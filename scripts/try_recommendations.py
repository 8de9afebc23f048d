#!/usr/bin/env python3
"""
Recommendation Pipeline Try-Out Script

Runs the full pipeline (prompt -> Gemini -> OMDb enrichment) locally
without starting the API server.

Needs GOOGLE_API_KEY; OMDB_API_KEY is optional (no posters/ratings without it).

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --genres Comedy Drama --era "90s-2000s"
    python scripts/try_recommendations.py --surprise
    python scripts/try_recommendations.py --use-stored
    python scripts/try_recommendations.py --show-prompt
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from movie_recommender.agents.recommendation.prompts import build_recommendation_prompt
from movie_recommender.config import settings
from movie_recommender.exceptions import GenerationError
from movie_recommender.routes.dependencies import get_store
from movie_recommender.schemas.preferences import PreferenceProfile
from movie_recommender.services.metadata_service import enrich_recommendations
from movie_recommender.services.recommendation_service import (
    generate_recommendations,
    get_surprise_preferences,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_recommendations(recommendations):
    """Print recommendations in a readable format."""
    print("\n" + "=" * 60)
    print(f"Found {len(recommendations)} recommendation(s)")
    print("=" * 60)

    for i, rec in enumerate(recommendations, 1):
        print(f"\n--- #{i}: {rec.title} ({rec.year}) ---")
        print(f"  Genre:     {', '.join(rec.genre or [])}")
        print(f"  Plot:      {rec.description}")
        print(f"  Why:       {rec.reasoning}")
        print(f"  IMDb:      {rec.imdb_rating or 'n/a'}")
        print(f"  RT:        {rec.rotten_tomatoes or 'n/a'}")
        print(f"  Poster:    {rec.poster or 'no poster'}")
    print()


async def run(args) -> int:
    if not settings.GOOGLE_API_KEY:
        print("\n⚠️  ERROR: GOOGLE_API_KEY environment variable not set!")
        print("   Please set it in your .env file or export it:")
        print("   export GOOGLE_API_KEY=your-gemini-api-key")
        return 1

    store = get_store()
    watch_history = store.get_watch_history()

    if args.surprise:
        preferences = get_surprise_preferences()
    elif args.use_stored:
        preferences = store.get_preferences()
        if preferences is None:
            print("\n❌ No stored preferences. Save them with PUT /preferences first.")
            return 1
    else:
        preferences = PreferenceProfile(
            genres=args.genres,
            era=args.era,
            mood=args.mood,
            content_level=args.content_level,
            watch_time=args.watch_time,
            rating_preference=args.rating_preference,
            score_preference=args.score_preference,
        )

    if args.show_prompt:
        print(build_recommendation_prompt(preferences, watch_history, args.surprise))
        return 0

    print(f"\nCalling Gemini ({settings.GEMINI_MODEL}) with {len(watch_history)} history entries...")

    try:
        recommendations = await generate_recommendations(
            preferences=preferences,
            watch_history=watch_history,
            surprise_me=args.surprise,
        )
    except GenerationError as e:
        print(f"\n❌ {e.message}")
        return 1

    if not settings.enrichment_enabled():
        print("OMDB_API_KEY not set: skipping posters and ratings.")
    recommendations = await enrich_recommendations(recommendations)

    print_recommendations(recommendations)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Try the movie recommendation pipeline")
    parser.add_argument("--genres", nargs="+", default=["Comedy"])
    parser.add_argument("--era", default="Recent (2010s-present)")
    parser.add_argument("--mood", nargs="+", default=["Funny and comedic"])
    parser.add_argument("--content-level", default="Family-friendly only")
    parser.add_argument("--watch-time", default="Standard (90-120 minutes)")
    parser.add_argument("--rating-preference", default="Well-rated movies (7+ stars)")
    parser.add_argument("--score-preference", default="Balanced approach")
    parser.add_argument("--surprise", action="store_true", help="Use the surprise flow")
    parser.add_argument("--use-stored", action="store_true", help="Use the stored profile")
    parser.add_argument("--show-prompt", action="store_true", help="Print the prompt and exit")

    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
