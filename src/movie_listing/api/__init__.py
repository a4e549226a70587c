"""HTTP API routers."""

from movie_listing.api.router import api_router

__all__ = ["api_router"]
