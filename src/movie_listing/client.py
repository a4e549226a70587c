"""HTTP client and browsing state for the movie listing API.

``MovieListingClient`` wraps the JSON endpoints. ``MovieCatalog`` keeps the
state a listing frontend needs (current list, trending list, active
category) and re-fetches it the way the web UI does.
"""

import logging
from typing import Any

import httpx

from movie_listing.schemas.movie import (
    DownloadLink,
    MovieCreate,
    MovieResponse,
    decode_download_links,
)
from movie_listing.services.base import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


class MovieListingClient:
    """Async client for the movie listing API."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server root URL (without the ``/api`` prefix).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, e.g. ``ASGITransport``.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        return {"Accept": "application/json"}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body.

        Raises:
            NotFoundError: If the resource is not found (404).
            ServiceError: For other HTTP errors or transport failures.
        """
        client = await self._get_client()
        try:
            response = await client.request(method, endpoint, params=params, json=json)
        except httpx.TimeoutException as e:
            raise ServiceError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise ServiceError(f"Request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Raise for error statuses, otherwise decode JSON."""
        if response.status_code == 404:
            raise NotFoundError(self._error_message(response) or "Resource not found")

        if response.status_code >= 400:
            raise ServiceError(
                self._error_message(response) or f"API error: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(f"Invalid JSON response: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("error")
        return None

    async def list_movies(self, category: str | None = None) -> list[MovieResponse]:
        """List all movies, or those in ``category``."""
        params = {"category": category} if category else None
        data = await self._request("GET", "/api/movies", params=params)
        return [MovieResponse.model_validate(item) for item in data]

    async def list_trending(self) -> list[MovieResponse]:
        """List trending movies."""
        data = await self._request("GET", "/api/movies", params={"trending": "true"})
        return [MovieResponse.model_validate(item) for item in data]

    async def search(self, q: str) -> list[MovieResponse]:
        """Search movies by title substring."""
        data = await self._request("GET", "/api/movies/search", params={"q": q})
        return [MovieResponse.model_validate(item) for item in data]

    async def get_movie(self, movie_id: int) -> MovieResponse:
        """Get one movie by ID."""
        data = await self._request("GET", f"/api/movies/{movie_id}")
        return MovieResponse.model_validate(data)

    async def add_movie(self, payload: MovieCreate) -> int:
        """Add a movie and return its generated ID."""
        data = await self._request("POST", "/api/movies", json=payload.model_dump())
        return data["id"]

    async def __aenter__(self) -> "MovieListingClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()


class MovieCatalog:
    """Browsing state kept in sync with the API.

    Failed requests are logged and leave the previous state in place.
    Requests are not coordinated: overlapping calls apply their results in
    completion order.
    """

    def __init__(self, client: MovieListingClient) -> None:
        self.client = client
        self.movies: list[MovieResponse] = []
        self.trending: list[MovieResponse] = []
        self.active_category: str | None = None
        self.loading = True

    async def load(self) -> None:
        """Initial load of the full list and the trending list."""
        await self.fetch_movies()
        await self.fetch_trending()

    async def fetch_movies(self, category: str | None = None) -> None:
        """Replace ``movies`` with all movies, or those in ``category``."""
        self.loading = True
        try:
            self.movies = await self.client.list_movies(category)
        except ServiceError:
            logger.exception("Failed to fetch movies")
        finally:
            self.loading = False

    async def fetch_trending(self) -> None:
        """Replace ``trending`` with the current trending movies."""
        try:
            self.trending = await self.client.list_trending()
        except ServiceError:
            logger.exception("Failed to fetch trending movies")

    async def select_category(self, category: str | None) -> None:
        """Switch the active category and re-fetch the list."""
        self.active_category = category
        await self.fetch_movies(category)

    async def search(self, q: str) -> None:
        """Show search results, or the active category's list for an empty query."""
        if not q:
            await self.fetch_movies(self.active_category)
            return
        try:
            self.movies = await self.client.search(q)
        except ServiceError:
            logger.exception("Search for %r failed", q)

    async def add_movie(self, payload: MovieCreate) -> int | None:
        """Add a movie, then refresh both lists.

        Returns:
            The new movie's ID, or None if the request failed.
        """
        try:
            movie_id = await self.client.add_movie(payload)
        except ServiceError:
            logger.exception("Failed to add movie %r", payload.title)
            return None

        await self.fetch_movies(self.active_category)
        await self.fetch_trending()
        return movie_id

    @staticmethod
    def download_links(movie: MovieResponse) -> list[DownloadLink]:
        """Download actions for a movie's detail view."""
        return decode_download_links(movie.download_links)
