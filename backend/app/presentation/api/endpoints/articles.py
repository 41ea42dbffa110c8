"""Article listing and CRUD endpoints."""

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas import (
    ArticleCountResponse,
    ArticleCreate,
    ArticlePageResponse,
    ArticleResponse,
    ArticleUpdate,
)
from app.application.services import ArticleService
from app.application.services.article_service import MAX_PAGE_SIZE
from app.infrastructure.dependencies import get_article_service
from app.presentation.api.security import require_admin

router = APIRouter(tags=["Articles"])


@router.get("/articles", response_model=ArticlePageResponse)
async def list_articles(
    page_size: int = Query(20, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
    start_after: str | None = Query(None, alias="startAfter"),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """One page of articles, newest first, starting after the ``startAfter`` article."""
    articles, last_id = await service.list_page(page_size, start_after)
    return ArticlePageResponse(
        articles=[ArticleResponse.from_entity(a) for a in articles],
        last_doc_id=last_id,
    )


@router.get("/articles-count", response_model=ArticleCountResponse)
async def count_articles(
    service: ArticleService = Depends(get_article_service),
) -> ArticleCountResponse:
    """Total number of articles, used to compute the page count."""
    return ArticleCountResponse(count=await service.count_articles())


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article by ID."""
    article = await service.get_article(article_id)
    return ArticleResponse.from_entity(article)


@router.post(
    "/articles",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_article(
    data: ArticleCreate,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Publish a new article. ``id`` and ``createdAt`` are assigned by the store."""
    article = await service.create_article(data)
    return ArticleResponse.from_entity(article)


@router.put(
    "/articles/{article_id}",
    response_model=ArticleResponse,
    dependencies=[Depends(require_admin)],
)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Update an existing article (last write wins)."""
    article = await service.update_article(article_id, data)
    return ArticleResponse.from_entity(article)


@router.delete(
    "/articles/{article_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID."""
    await service.delete_article(article_id)
