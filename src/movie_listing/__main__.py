"""Run the server with ``python -m movie_listing``."""

import uvicorn

from movie_listing.config import get_settings


def main() -> None:
    """Start uvicorn with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "movie_listing.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
