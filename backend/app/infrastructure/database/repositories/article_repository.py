"""Concrete repository implementation backed by SQLAlchemy."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ArticleRepository
from app.domain.entities import Article, Source, is_web_url
from app.domain.exceptions import InvalidCursorError, StorageError
from app.infrastructure.database.models import ArticleModel


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Translate driver failures into the domain's StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to {action}: {exc.__class__.__name__}") from exc


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions.

    Writes commit before returning, so a failed commit surfaces as
    StorageError to the caller.

    Pagination is keyset-based on ``(created_at DESC, id DESC)``: the cursor
    is the id of the last article of the previous page.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            content=model.content,
            keyword=model.keyword,
            created_at=model.created_at,
            sources=[
                Source(uri=item["uri"], title=item["title"])
                for item in (model.sources or [])
                if item.get("title") and is_web_url(item.get("uri") or "")
            ],
        )

    @staticmethod
    def _dump_sources(sources: list[Source]) -> list[dict[str, str]]:
        return [{"uri": s.uri, "title": s.title} for s in sources]

    async def count(self) -> int:
        with _storage_errors("count articles"):
            result = await self._session.execute(select(func.count()).select_from(ArticleModel))
            return int(result.scalar_one())

    async def list_page(
        self, page_size: int, start_after: str | None = None
    ) -> tuple[list[Article], str | None]:
        with _storage_errors("list articles"):
            stmt = select(ArticleModel)
            if start_after:
                exists = await self._session.scalar(
                    select(ArticleModel.id).where(ArticleModel.id == start_after)
                )
                if exists is None:
                    raise InvalidCursorError(start_after)
                # Compare against the stored value, not a Python round-trip of it.
                cursor_created_at = (
                    select(ArticleModel.created_at)
                    .where(ArticleModel.id == start_after)
                    .scalar_subquery()
                )
                stmt = stmt.where(
                    or_(
                        ArticleModel.created_at < cursor_created_at,
                        and_(
                            ArticleModel.created_at == cursor_created_at,
                            ArticleModel.id < start_after,
                        ),
                    )
                )
            stmt = stmt.order_by(ArticleModel.created_at.desc(), ArticleModel.id.desc()).limit(page_size)
            result = await self._session.execute(stmt)
            articles = [self._to_entity(row) for row in result.scalars().all()]
        last_id = articles[-1].id if articles else None
        return articles, last_id

    async def get_by_id(self, article_id: str) -> Article | None:
        with _storage_errors("load article"):
            result = await self._session.get(ArticleModel, article_id)
        return self._to_entity(result) if result else None

    async def create(self, article: Article) -> Article:
        with _storage_errors("store article"):
            model = ArticleModel(
                title=article.title,
                content=article.content,
                keyword=article.keyword,
                sources=self._dump_sources(article.sources),
            )
            self._session.add(model)
            await self._session.commit()
            # Load the server-assigned created_at.
            await self._session.refresh(model)
            return self._to_entity(model)

    async def update(self, article: Article) -> Article | None:
        with _storage_errors("update article"):
            model = await self._session.get(ArticleModel, article.id)
            if model is None:
                return None
            model.title = article.title
            model.content = article.content
            model.keyword = article.keyword
            model.sources = self._dump_sources(article.sources)
            await self._session.commit()
            return self._to_entity(model)

    async def delete(self, article_id: str) -> bool:
        with _storage_errors("delete article"):
            model = await self._session.get(ArticleModel, article_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.commit()
            return True

    async def list_sitemap_entries(self) -> list[tuple[str, datetime | None]]:
        with _storage_errors("list articles for the sitemap"):
            stmt = select(ArticleModel.id, ArticleModel.created_at).order_by(
                ArticleModel.created_at.desc(), ArticleModel.id.desc()
            )
            result = await self._session.execute(stmt)
            return [(row.id, row.created_at) for row in result.all()]
