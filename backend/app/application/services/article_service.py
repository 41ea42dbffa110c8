"""Application service (use case) for Article operations."""

import logging

from app.application.interfaces import ArticleRepository
from app.application.schemas import ArticleCreate, ArticleUpdate
from app.domain.entities import Article
from app.domain.exceptions import EntityNotFoundError, ValidationError
from app.infrastructure.logging.colored_logger import Stage, StageLogger

logger = logging.getLogger(__name__)
slog = StageLogger("ArticleService")

MAX_PAGE_SIZE = 100


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def count_articles(self) -> int:
        return await self._repository.count()

    async def list_page(
        self, page_size: int, start_after: str | None = None
    ) -> tuple[list[Article], str | None]:
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationError(f"pageSize must be between 1 and {MAX_PAGE_SIZE}")
        return await self._repository.list_page(page_size, start_after or None)

    async def get_article(self, article_id: str) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def create_article(self, data: ArticleCreate) -> Article:
        article = Article(
            title=data.title,
            content=data.content,
            keyword=data.keyword,
            sources=[s.to_entity() for s in data.sources],
        )
        created = await self._repository.create(article)
        logger.info("Created article %s (keyword=%r)", created.id, created.keyword)
        return created

    async def update_article(self, article_id: str, data: ArticleUpdate) -> Article:
        article = await self.get_article(article_id)
        article.update(
            title=data.title,
            content=data.content,
            keyword=data.keyword,
            sources=[s.to_entity() for s in data.sources] if data.sources is not None else None,
        )
        updated = await self._repository.update(article)
        if updated is None:
            # Deleted between the read and the write.
            raise EntityNotFoundError("Article", article_id)
        return updated

    async def publish_article(self, draft: Article) -> Article:
        """Insert a fresh draft (empty id) or overwrite an existing article.

        Updating keeps the stored ``id`` and ``created_at``.
        """
        if draft.is_draft:
            with slog.timed_step(Stage.PUBLISH, "Publishing new article", keyword=draft.keyword):
                created = await self._repository.create(draft)
            slog.detail("Stored", id=created.id)
            return created
        with slog.timed_step(Stage.PUBLISH, "Updating article", id=draft.id):
            existing = await self.get_article(draft.id)
            existing.update(
                title=draft.title,
                content=draft.content,
                keyword=draft.keyword,
                sources=draft.sources,
            )
            updated = await self._repository.update(existing)
            if updated is None:
                raise EntityNotFoundError("Article", draft.id)
        return updated

    async def delete_article(self, article_id: str) -> bool:
        deleted = await self._repository.delete(article_id)
        if not deleted:
            raise EntityNotFoundError("Article", article_id)
        logger.info("Deleted article %s", article_id)
        return True
