"""Shared fakes and fixtures for unit and integration tests."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.application.interfaces import ArticleRepository, ContentGenerator
from app.application.services import SitemapCache
from app.config import Settings, get_settings
from app.domain.entities import Article, GeneratedArticle, Source
from app.domain.exceptions import InvalidCursorError
from app.infrastructure.auth import create_access_token
from app.infrastructure.dependencies import (
    get_article_repository,
    get_content_generator,
    get_sitemap_cache,
)
from app.main import app

ADMIN_EMAIL = "admin@example.com"


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository with the same keyset ordering as the real one."""

    def __init__(self):
        self._articles: dict[str, Article] = {}
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _ordered(self) -> list[Article]:
        return sorted(
            self._articles.values(),
            key=lambda a: (a.created_at, a.id),
            reverse=True,
        )

    async def count(self) -> int:
        return len(self._articles)

    async def list_page(
        self, page_size: int, start_after: str | None = None
    ) -> tuple[list[Article], str | None]:
        ordered = self._ordered()
        if start_after:
            if start_after not in self._articles:
                raise InvalidCursorError(start_after)
            index = [a.id for a in ordered].index(start_after)
            ordered = ordered[index + 1 :]
        page = ordered[:page_size]
        return page, (page[-1].id if page else None)

    async def get_by_id(self, article_id: str) -> Article | None:
        return self._articles.get(article_id)

    async def create(self, article: Article) -> Article:
        article.id = f"article-{self._next_id:04d}"
        article.created_at = self._clock + timedelta(minutes=self._next_id)
        self._next_id += 1
        self._articles[article.id] = article
        return article

    async def update(self, article: Article) -> Article | None:
        if article.id not in self._articles:
            return None
        self._articles[article.id] = article
        return article

    async def delete(self, article_id: str) -> bool:
        return self._articles.pop(article_id, None) is not None

    async def list_sitemap_entries(self):
        return [(a.id, a.created_at) for a in self._ordered()]

    async def seed(self, count: int, prefix: str = "Article") -> list[Article]:
        return [
            await self.create(Article(title=f"{prefix} {i}", content=f"Body of {prefix.lower()} {i}", keyword=f"kw{i}"))
            for i in range(1, count + 1)
        ]


class FakeContentGenerator(ContentGenerator):
    """Returns a canned draft, or raises ``error`` when one is set."""

    name = "fake"

    def __init__(self, result: GeneratedArticle | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.keywords: list[str] = []

    async def generate(self, keyword: str) -> GeneratedArticle:
        self.keywords.append(keyword)
        if self.error is not None:
            raise self.error
        return self.result or GeneratedArticle(
            title=f"All about {keyword}",
            content=f"Everything worth knowing about {keyword}.",
            sources=[Source(uri="https://example.com/guide", title="Example guide")],
        )


@pytest.fixture
def fake_repository() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def fake_generator() -> FakeContentGenerator:
    return FakeContentGenerator()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        admin_email=ADMIN_EMAIL,
        auth_secret_key="test-secret",
        site_base_url="https://blog.example.com",
        articles_per_page=2,
    )


@pytest.fixture
def admin_headers(test_settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(ADMIN_EMAIL, test_settings)}"}


@pytest.fixture
def reader_headers(test_settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('reader@example.com', test_settings)}"}


@pytest.fixture
def sitemap_cache() -> SitemapCache:
    return SitemapCache(ttl_seconds=3600)


@pytest_asyncio.fixture
async def client(fake_repository, fake_generator, test_settings, sitemap_cache):
    """HTTP client against the app with storage, generation and settings replaced."""
    app.dependency_overrides[get_article_repository] = lambda: fake_repository
    app.dependency_overrides[get_content_generator] = lambda: fake_generator
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_sitemap_cache] = lambda: sitemap_cache
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
