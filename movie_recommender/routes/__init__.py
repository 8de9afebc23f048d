"""
FastAPI routers for all API endpoints.

Each module defines a router for one area (preferences, history,
recommendations, storage). Routers resolve the store through
routes/dependencies.py and delegate to the service layer.
"""
