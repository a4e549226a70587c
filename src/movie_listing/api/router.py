"""Main API router aggregation."""

from fastapi import APIRouter

from movie_listing.api.movies import router as movies_router

# Main API router
api_router = APIRouter(prefix="/api")

api_router.include_router(movies_router)
