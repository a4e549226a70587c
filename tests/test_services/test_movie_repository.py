"""Tests for the movie repository."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_listing.schemas.movie import DownloadLink, MovieCreate
from movie_listing.services.base import StorageError
from movie_listing.services.movies import MovieFilter, MovieRepository


@pytest.fixture
def repository(session: AsyncSession) -> MovieRepository:
    """Repository over the test database."""
    return MovieRepository(session)


def make_movie(title: str = "Untitled", **fields) -> MovieCreate:
    return MovieCreate(title=title, **fields)


class TestMovieFilter:
    """Tests for picking a filter from query parameters."""

    @pytest.mark.parametrize(
        ("category", "trending", "expected"),
        [
            (None, None, MovieFilter.ALL),
            ("", None, MovieFilter.ALL),
            ("South", None, MovieFilter.CATEGORY),
            ("South", "true", MovieFilter.TRENDING),
            (None, "true", MovieFilter.TRENDING),
            ("South", "false", MovieFilter.CATEGORY),
            (None, "yes", MovieFilter.ALL),
        ],
    )
    def test_from_query(
        self, category: str | None, trending: str | None, expected: MovieFilter
    ) -> None:
        """Test filter precedence."""
        assert MovieFilter.from_query(category, trending) is expected


class TestMovieRepository:
    """Tests for MovieRepository against SQLite."""

    async def test_count_all(self, repository: MovieRepository) -> None:
        """Test counting rows."""
        assert await repository.count_all() == 0

        await repository.insert(make_movie("One"))
        await repository.insert(make_movie("Two"))

        assert await repository.count_all() == 2

    async def test_insert_encodes_fields(self, repository: MovieRepository) -> None:
        """Test that links are stored as JSON text and the flag as a boolean."""
        movie_id = await repository.insert(
            make_movie(
                "Pathaan",
                download_links=[DownloadLink(label="4K", url="https://example.com/4k")],
                is_trending=True,
            )
        )

        movie = await repository.get_by_id(movie_id)

        assert movie is not None
        assert movie.download_links == '[{"label":"4K","url":"https://example.com/4k"}]'
        assert json.loads(movie.download_links) == [
            {"label": "4K", "url": "https://example.com/4k"}
        ]
        assert movie.is_trending is True
        assert movie.created_at is not None

    async def test_ids_are_unique(self, repository: MovieRepository) -> None:
        """Test that each insert gets a new id."""
        ids = [await repository.insert(make_movie(f"Movie {i}")) for i in range(3)]
        assert len(set(ids)) == 3

    async def test_get_by_id_missing(self, repository: MovieRepository) -> None:
        """Test lookup of an id that does not exist."""
        assert await repository.get_by_id(42) is None

    async def test_list_all_newest_first(self, repository: MovieRepository) -> None:
        """Test default ordering."""
        first = await repository.insert(make_movie("First"))
        second = await repository.insert(make_movie("Second"))
        third = await repository.insert(make_movie("Third"))

        movies = await repository.list_movies()

        assert [m.id for m in movies] == [third, second, first]

    async def test_list_by_category(self, repository: MovieRepository) -> None:
        """Test category filtering."""
        south = await repository.insert(make_movie("RRR", category="South"))
        await repository.insert(make_movie("Dune", category="Hollywood"))

        movies = await repository.list_movies(MovieFilter.CATEGORY, category="South")

        assert [m.id for m in movies] == [south]

    async def test_list_by_category_requires_category(
        self, repository: MovieRepository
    ) -> None:
        """Test that the category filter needs a category."""
        with pytest.raises(ValueError, match="category is required"):
            await repository.list_movies(MovieFilter.CATEGORY)

    async def test_list_trending(self, repository: MovieRepository) -> None:
        """Test trending filtering."""
        hot = await repository.insert(make_movie("Hot", is_trending=True))
        await repository.insert(make_movie("Not"))

        movies = await repository.list_movies(MovieFilter.TRENDING)

        assert [m.id for m in movies] == [hot]

    async def test_trending_ignores_category(self, repository: MovieRepository) -> None:
        """Test that the trending filter does not look at the category."""
        hot = await repository.insert(make_movie("Hot", category="South", is_trending=True))

        movies = await repository.list_movies(MovieFilter.TRENDING, category="Hollywood")

        assert [m.id for m in movies] == [hot]

    async def test_search_by_title(self, repository: MovieRepository) -> None:
        """Test substring search ordering."""
        first = await repository.insert(make_movie("Stranger Things"))
        second = await repository.insert(make_movie("Things to Come"))
        await repository.insert(make_movie("Oppenheimer"))

        movies = await repository.search_by_title("Things")

        assert [m.id for m in movies] == [second, first]

    async def test_search_underscore_wildcard(self, repository: MovieRepository) -> None:
        """Test that _ matches any single character when not escaped."""
        await repository.insert(make_movie("Dune"))

        assert len(await repository.search_by_title("D_ne")) == 1

    async def test_search_escaped(self, session: AsyncSession) -> None:
        """Test that escaping makes wildcards literal."""
        repository = MovieRepository(session, escape_wildcards=True)
        await repository.insert(make_movie("Dune"))
        literal = await repository.insert(make_movie("snake_case"))

        assert await repository.search_by_title("D_ne") == []
        assert [m.id for m in await repository.search_by_title("e_c")] == [literal]

    async def test_insert_failure_raises_storage_error(self) -> None:
        """Test that database errors surface as StorageError."""
        mock_session = AsyncMock()
        mock_session.add_all = MagicMock()
        mock_session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))
        )
        repository = MovieRepository(mock_session)

        with pytest.raises(StorageError, match="Failed to add movie") as exc_info:
            await repository.insert(make_movie("Broken"))

        assert exc_info.value.status_code == 500
        mock_session.rollback.assert_awaited_once()

    async def test_insert_out_of_range_integer(self, repository: MovieRepository) -> None:
        """Test that an integer SQLite cannot store raises StorageError and writes nothing."""
        with pytest.raises(StorageError, match="Failed to add movie"):
            await repository.insert(make_movie("Big", release_year=2**70))

        assert await repository.count_all() == 0

    async def test_insert_many_returns_ids_in_order(self, repository: MovieRepository) -> None:
        """Test that a batch insert returns one id per payload."""
        ids = await repository.insert_many([make_movie("One"), make_movie("Two")])

        assert len(ids) == 2
        assert [(await repository.get_by_id(i)).title for i in ids] == ["One", "Two"]

    async def test_insert_many_is_all_or_nothing(self, repository: MovieRepository) -> None:
        """Test that one rejected row leaves the whole batch unwritten."""
        broken = MovieCreate.model_construct(title=None)

        with pytest.raises(StorageError):
            await repository.insert_many([make_movie("Good"), broken])

        assert await repository.count_all() == 0
