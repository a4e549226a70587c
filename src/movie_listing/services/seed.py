"""One-time bootstrap of example movies into an empty database."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_listing.schemas.movie import Category, DownloadLink, MovieCreate
from movie_listing.services.movies import MovieRepository

logger = logging.getLogger(__name__)

SEED_MOVIES: tuple[MovieCreate, ...] = (
    MovieCreate(
        title="Pathaan",
        description=(
            "An Indian RAW agent Pathaan is assigned to take down a private terror "
            "organization that has a plan to spread a deadly virus in India."
        ),
        poster_url="https://picsum.photos/seed/pathaan/600/900",
        release_year=2023,
        quality="4K",
        category=Category.BOLLYWOOD,
        size="2.4GB",
        language="Hindi",
        download_links=[
            DownloadLink(label="Direct Download 4K", url="#"),
            DownloadLink(label="G-Drive 1080p", url="#"),
        ],
        is_trending=True,
    ),
    MovieCreate(
        title="Oppenheimer",
        description=(
            "The story of American scientist J. Robert Oppenheimer and his role in the "
            "development of the atomic bomb."
        ),
        poster_url="https://picsum.photos/seed/oppenheimer/600/900",
        release_year=2023,
        quality="HD",
        category=Category.HOLLYWOOD,
        size="1.8GB",
        language="English",
        download_links=[DownloadLink(label="Direct Download HD", url="#")],
        is_trending=True,
    ),
    MovieCreate(
        title="Pushpa: The Rise",
        description=(
            "Violence erupts between red sandalwood smugglers and the police who are "
            "tasked with taking down their organization."
        ),
        poster_url="https://picsum.photos/seed/pushpa/600/900",
        release_year=2021,
        quality="720p",
        category=Category.SOUTH,
        size="1.4GB",
        language="Telugu",
        download_links=[DownloadLink(label="Download 720p", url="#")],
        is_trending=True,
    ),
    MovieCreate(
        title="Stranger Things",
        description=(
            "When a young boy disappears, his mother, a police chief and his friends must "
            "confront terrifying supernatural forces in order to get him back."
        ),
        poster_url="https://picsum.photos/seed/stranger/600/900",
        release_year=2022,
        quality="HD",
        category=Category.WEB_SERIES,
        size="800MB/Ep",
        language="English",
        download_links=[DownloadLink(label="Season 4 All Episodes", url="#")],
        is_trending=False,
    ),
)


async def seed_movies(repository: MovieRepository) -> int:
    """Insert the example movies if the table is empty.

    Returns:
        Number of rows inserted (0 when the table already had rows).

    Raises:
        StorageError: If any row is rejected; nothing is written then.
    """
    existing = await repository.count_all()
    if existing:
        logger.info("Database already has %d movies, skipping seed", existing)
        return 0

    await repository.insert_many(SEED_MOVIES)

    logger.info("Seeded %d example movies", len(SEED_MOVIES))
    return len(SEED_MOVIES)


async def init_data(session_factory: async_sessionmaker[AsyncSession]) -> int:
    """Seed the database using a fresh session."""
    async with session_factory() as session:
        return await seed_movies(MovieRepository(session))
