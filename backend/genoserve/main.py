"""genoserve FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from genoserve import __version__
from genoserve.config import Settings, get_settings

logger = logging.getLogger(__name__)


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    settings: Settings = app.state.settings
    _setup_logging(settings)

    data_dir = Path(settings.data_dir)
    if not data_dir.exists():
        logger.info("Creating data directory: %s", data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)

    logger.info("genoserve v%s started — http://%s:%s", __version__, settings.host, settings.port)
    logger.info("Data directory: %s", data_dir)

    try:
        yield
    finally:
        logger.info("genoserve shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory."""
    from genoserve.api.routes import api_router, data_router

    explicit = settings is not None
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )
    app.state.settings = settings
    if explicit:
        app.dependency_overrides[get_settings] = lambda: settings

    # igv.js issues cross-origin range requests and must read the range headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["Range", "Content-Type", "Accept"],
        expose_headers=["Content-Length", "Content-Range", "Accept-Ranges"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(data_router)

    # Front-end bundle (index.html, app.js, css) served from the site root
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir() and (static_dir / "index.html").exists():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="frontend")
        logger.info("Frontend mounted from %s", static_dir)
    else:
        logger.info("No frontend found at %s — API-only mode", static_dir)

    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "genoserve.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
