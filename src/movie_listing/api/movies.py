"""Movie API endpoints."""

from fastapi import APIRouter, Depends, Query, status

from movie_listing.models.movie import Movie
from movie_listing.schemas.movie import (
    ErrorResponse,
    MovieCreate,
    MovieCreatedResponse,
    MovieResponse,
)
from movie_listing.services.base import NotFoundError
from movie_listing.services.movies import MovieFilter, MovieRepository, get_movie_repository

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=list[MovieResponse])
async def list_movies(
    category: str | None = Query(None, description="Only movies in this category"),
    trending: str | None = Query(None, description="'true' for trending movies only"),
    repository: MovieRepository = Depends(get_movie_repository),
) -> list[Movie]:
    """List movies, newest first.

    ``trending=true`` takes precedence over ``category``.
    Without either filter every movie is returned.
    """
    mode = MovieFilter.from_query(category, trending)
    return await repository.list_movies(mode, category=category)


@router.get("/search", response_model=list[MovieResponse])
async def search_movies(
    q: str = Query("", description="Substring to look for in titles"),
    repository: MovieRepository = Depends(get_movie_repository),
) -> list[Movie]:
    """Search movies by title substring, newest first.

    An empty query returns every movie.
    """
    return await repository.search_by_title(q)


@router.get(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_movie(
    movie_id: int,
    repository: MovieRepository = Depends(get_movie_repository),
) -> Movie:
    """Get a single movie by ID."""
    movie = await repository.get_by_id(movie_id)
    if movie is None:
        raise NotFoundError("Movie not found")
    return movie


@router.post(
    "",
    response_model=MovieCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": ErrorResponse}},
)
async def add_movie(
    payload: MovieCreate,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieCreatedResponse:
    """Add a new movie.

    Download links are stored as JSON text; the trending flag as 0/1.
    """
    movie_id = await repository.insert(payload)
    return MovieCreatedResponse(id=movie_id)
