"""Business logic and data access."""

from movie_listing.services.base import NotFoundError, ServiceError, StorageError
from movie_listing.services.movies import MovieFilter, MovieRepository, get_movie_repository
from movie_listing.services.seed import SEED_MOVIES, seed_movies

__all__ = [
    "ServiceError",
    "NotFoundError",
    "StorageError",
    "MovieFilter",
    "MovieRepository",
    "get_movie_repository",
    "SEED_MOVIES",
    "seed_movies",
]
