"""Serving the single-page frontend.

In development the frontend runs on its own dev server and calls the API
cross-origin; in production the compiled bundle is served by this app.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from movie_listing.config import Settings

logger = logging.getLogger(__name__)


def resolve_asset(static_dir: Path, request_path: str) -> Path:
    """Map a request path to a file in ``static_dir``.

    Anything that is not an existing file inside ``static_dir`` resolves to
    ``index.html`` so client-side routes load the app.
    """
    root = static_dir.resolve()
    candidate = (root / request_path).resolve()
    if candidate.is_file() and candidate.is_relative_to(root):
        return candidate
    return root / "index.html"


def setup_frontend(app: FastAPI, settings: Settings) -> None:
    """Attach development or production frontend handling to ``app``.

    Must run after the API routers are included so the catch-all route
    does not shadow them.
    """
    if not settings.is_production:
        logger.info("Development mode: allowing CORS from %s", ", ".join(settings.cors_origins))
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        return

    static_dir = Path(settings.static_dir)
    logger.info("Production mode: serving frontend from %s", static_dir)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> FileResponse:
        """Serve a built asset, falling back to the SPA entry point."""
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")

        path = resolve_asset(static_dir, full_path)
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Frontend not built")
        return FileResponse(path)
