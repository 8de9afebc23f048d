"""
Quick demo script to run the Movie Recommender API locally.

This script starts a local server and shows how to make requests to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Movie Recommender Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET    http://localhost:8000/health")
    print("   - Questionnaire:    GET    http://localhost:8000/questionnaire")
    print("   - Save answers:     PUT    http://localhost:8000/preferences")
    print("   - Watch history:    GET    http://localhost:8000/history")
    print("   - Recommendations:  POST   http://localhost:8000/recommendations")
    print("   - Surprise me:      POST   http://localhost:8000/recommendations/surprise")
    print("   - API Docs:                http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommendations" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"surprise_mode": false}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "movie_recommender.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
