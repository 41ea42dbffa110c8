"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import get_settings
from app.domain.exceptions import ConfigurationError
from app.infrastructure.database import Base, engine
from app.infrastructure.dependencies import get_content_generator
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.endpoints.seo import router as seo_router
from app.presentation.api.errors import register_exception_handlers
from app.presentation.api.router import router as api_router
from app.presentation.web.routes import router as web_router

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "presentation" / "web" / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — validate configuration, create tables."""
    settings = get_settings()
    setup_logging()

    # 1. The generator needs GEMINI_API_KEY; refuse to start without it
    try:
        generator = get_content_generator()
    except ConfigurationError:
        logger.critical("GEMINI_API_KEY is not configured; refusing to start")
        raise
    logger.info("Content generation strategy: %s (%s)", generator.name, settings.gemini_model)

    if not settings.site_base_url:
        logger.warning("SITE_BASE_URL is not configured; robots.txt will return 500")

    # 2. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # JSON API, then root-level SEO files, then the HTML pages (catch-all last)
    app.include_router(api_router)
    app.include_router(seo_router)
    app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
    app.include_router(web_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: ``blog-server``."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env == "development",
    )


if __name__ == "__main__":
    run()
