"""Pydantic schemas for movie API endpoints."""

import json
import logging
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Category(StrEnum):
    """Categories the frontend groups movies by.

    Storage does not enforce membership; any string is accepted.
    """

    BOLLYWOOD = "Bollywood"
    HOLLYWOOD = "Hollywood"
    SOUTH = "South"
    WEB_SERIES = "Web-Series"


class DownloadLink(BaseModel):
    """A single labelled download action."""

    label: str = Field(description="Button label, e.g. 'G-Drive 1080p'")
    url: str = Field(description="Target URL")


class MovieCreate(BaseModel):
    """Schema for adding a new movie."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(description="Movie title")
    description: str | None = Field(default=None, description="Synopsis")
    poster_url: str | None = Field(default=None, description="Poster image URL")
    release_year: int | None = Field(default=None, description="Year of release")
    quality: str | None = Field(default=None, description="Quality label, e.g. 'HD' or '4K'")
    category: str | None = Field(default=None, description="Category label")
    size: str | None = Field(default=None, description="Size label, e.g. '2.4GB'")
    language: str | None = Field(default=None, description="Audio language")
    download_links: list[DownloadLink] = Field(
        default_factory=list, description="Ordered download actions"
    )
    is_trending: bool = Field(default=False, description="Show in the trending section")

    @field_validator("download_links", mode="before")
    @classmethod
    def validate_download_links(cls, v: object) -> object:
        """Treat an explicit null the same as an empty list."""
        return [] if v is None else v

    def encoded_download_links(self) -> str:
        """Return download links as the JSON text stored in the database."""
        return json.dumps(
            [link.model_dump() for link in self.download_links], separators=(",", ":")
        )


class MovieResponse(BaseModel):
    """A movie row as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Movie ID")
    title: str = Field(description="Movie title")
    description: str | None = Field(default=None, description="Synopsis")
    poster_url: str | None = Field(default=None, description="Poster image URL")
    release_year: int | None = Field(default=None, description="Year of release")
    quality: str | None = Field(default=None, description="Quality label")
    category: str | None = Field(default=None, description="Category label")
    size: str | None = Field(default=None, description="Size label")
    language: str | None = Field(default=None, description="Audio language")
    download_links: str | None = Field(
        default=None, description="JSON-encoded list of download links"
    )
    is_trending: int = Field(default=0, description="1 if trending, otherwise 0")
    created_at: datetime = Field(description="When the movie was added")

    @field_validator("is_trending", mode="before")
    @classmethod
    def validate_is_trending(cls, v: object) -> object:
        """Report the trending flag as 0/1, the way it is stored."""
        if isinstance(v, bool):
            return int(v)
        return v


class MovieCreatedResponse(BaseModel):
    """Response after adding a movie."""

    id: int = Field(description="Generated movie ID")


class ErrorResponse(BaseModel):
    """Error body for failed requests."""

    error: str = Field(description="Error message")


def decode_download_links(raw: str | None) -> list[DownloadLink]:
    """Decode stored ``download_links`` text.

    Nothing enforces the format at the storage boundary, so malformed or
    missing values decode to an empty list instead of raising.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed download_links value: %r", raw)
        return []
    if not isinstance(data, list):
        logger.warning("Ignoring non-list download_links value: %r", raw)
        return []

    links = []
    for item in data:
        try:
            links.append(DownloadLink.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed download link: %r", item)
    return links
