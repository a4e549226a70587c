"""SQLAlchemy ORM models."""

from movie_listing.models.movie import Movie

__all__ = [
    "Movie",
]
