"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.application.interfaces import ArticleRepository, ContentGenerator
from app.application.services import (
    ArticleService,
    GenerationService,
    SitemapBuilder,
    SitemapCache,
)
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.repositories import SQLAlchemyArticleRepository
from app.infrastructure.gemini import build_content_generator


async def get_article_repository(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleRepository, None]:
    """Provides the SQLAlchemy-backed article repository for this request."""
    yield SQLAlchemyArticleRepository(session)


async def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    yield ArticleService(repository)


@lru_cache
def get_content_generator() -> ContentGenerator:
    """Process-wide Gemini generator for the configured strategy.

    Raises ConfigurationError when GEMINI_API_KEY is missing; the lifespan
    calls this at startup so the server refuses to boot without a key.
    """
    return build_content_generator(get_settings())


async def get_generation_service(
    generator: ContentGenerator = Depends(get_content_generator),
) -> AsyncGenerator[GenerationService, None]:
    """Provides a GenerationService bound to the configured generator."""
    yield GenerationService(generator)


@lru_cache
def get_sitemap_cache() -> SitemapCache:
    """The single sitemap cache shared by all requests."""
    return SitemapCache(ttl_seconds=get_settings().sitemap_ttl_seconds)


async def get_sitemap_builder(
    repository: ArticleRepository = Depends(get_article_repository),
) -> AsyncGenerator[SitemapBuilder, None]:
    """Provides a SitemapBuilder reading from the article repository."""
    yield SitemapBuilder(repository)
