"""Pydantic schemas for request/response validation."""

from movie_listing.schemas.movie import (
    Category,
    DownloadLink,
    ErrorResponse,
    MovieCreate,
    MovieCreatedResponse,
    MovieResponse,
    decode_download_links,
)

__all__ = [
    "Category",
    "DownloadLink",
    "ErrorResponse",
    "MovieCreate",
    "MovieCreatedResponse",
    "MovieResponse",
    "decode_download_links",
]
