"""Movie storage service."""

import logging
from collections.abc import Sequence
from enum import Enum

from fastapi import Depends, Request
from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_listing.database import get_db
from movie_listing.models.movie import Movie
from movie_listing.schemas.movie import MovieCreate
from movie_listing.services.base import StorageError

logger = logging.getLogger(__name__)


class MovieFilter(Enum):
    """Which rows a movie listing returns."""

    ALL = "all"
    CATEGORY = "category"
    TRENDING = "trending"

    @classmethod
    def from_query(cls, category: str | None, trending: str | None) -> "MovieFilter":
        """Pick the filter for the listing query parameters.

        ``trending=true`` takes precedence over ``category``; an empty
        category means no filter.
        """
        if trending == "true":
            return cls.TRENDING
        if category:
            return cls.CATEGORY
        return cls.ALL


def _newest_first(query: Select[tuple[Movie]]) -> Select[tuple[Movie]]:
    # id breaks ties between rows created within the same clock tick
    return query.order_by(Movie.created_at.desc(), Movie.id.desc())


def _to_row(payload: MovieCreate) -> Movie:
    return Movie(
        title=payload.title,
        description=payload.description,
        poster_url=payload.poster_url,
        release_year=payload.release_year,
        quality=payload.quality,
        category=payload.category,
        size=payload.size,
        language=payload.language,
        download_links=payload.encoded_download_links(),
        is_trending=payload.is_trending,
    )


class MovieRepository:
    """Data access for the movies table.

    One instance wraps one session; every method is a single statement.
    """

    def __init__(self, session: AsyncSession, escape_wildcards: bool = False) -> None:
        self.session = session
        self.escape_wildcards = escape_wildcards

    async def count_all(self) -> int:
        """Return the number of stored movies."""
        result = await self.session.execute(select(func.count()).select_from(Movie))
        return result.scalar_one()

    async def list_movies(
        self, mode: MovieFilter = MovieFilter.ALL, category: str | None = None
    ) -> list[Movie]:
        """List movies newest first, optionally filtered.

        Args:
            mode: Which filter to apply.
            category: Exact (case-sensitive) category, required for
                ``MovieFilter.CATEGORY``.

        Returns:
            Matching movies ordered by creation time, newest first.
        """
        query = select(Movie)
        if mode is MovieFilter.TRENDING:
            query = query.where(Movie.is_trending.is_(True))
        elif mode is MovieFilter.CATEGORY:
            if category is None:
                raise ValueError("category is required for MovieFilter.CATEGORY")
            query = query.where(Movie.category == category)

        result = await self.session.execute(_newest_first(query))
        return list(result.scalars().all())

    async def search_by_title(self, q: str) -> list[Movie]:
        """Return movies whose title contains ``q``, newest first.

        Uses SQL LIKE, which SQLite matches case-insensitively for ASCII.
        An empty ``q`` matches every row.
        """
        query = select(Movie).where(Movie.title.contains(q, autoescape=self.escape_wildcards))
        result = await self.session.execute(_newest_first(query))
        return list(result.scalars().all())

    async def get_by_id(self, movie_id: int) -> Movie | None:
        """Return the movie with ``movie_id``, or None."""
        return await self.session.get(Movie, movie_id)

    async def insert(self, payload: MovieCreate) -> int:
        """Insert a new movie and return its generated id.

        Raises:
            StorageError: If the database rejects the write.
        """
        [movie_id] = await self.insert_many([payload])
        return movie_id

    async def insert_many(self, payloads: Sequence[MovieCreate]) -> list[int]:
        """Insert movies in one transaction and return their ids in order.

        Either every row is written or none is.

        Raises:
            StorageError: If the database rejects the write.
        """
        movies = [_to_row(payload) for payload in payloads]
        try:
            self.session.add_all(movies)
            await self.session.commit()
        # sqlite3 raises OverflowError for integers outside 64 bits, unwrapped
        except (SQLAlchemyError, OverflowError) as e:
            logger.exception("Failed to insert %d movie(s)", len(movies))
            await self.session.rollback()
            raise StorageError("Failed to add movie") from e

        for movie in movies:
            logger.info("Added movie %d: %s", movie.id, movie.title)
        return [movie.id for movie in movies]


def get_movie_repository(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> MovieRepository:
    """Dependency to get a repository bound to the request's session."""
    settings = request.app.state.settings
    return MovieRepository(db, escape_wildcards=settings.search_escape_wildcards)
