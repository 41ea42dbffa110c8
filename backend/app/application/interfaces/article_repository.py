"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    Implementations wrap driver failures in ``StorageError`` and never retry.
    """

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored articles."""
        ...

    @abstractmethod
    async def list_page(
        self, page_size: int, start_after: str | None = None
    ) -> tuple[list[Article], str | None]:
        """Return up to ``page_size`` articles, newest first, after a cursor.

        Ordering is ``created_at`` descending with ties broken by ``id``
        descending. The second element is the id of the last returned
        article (the cursor for the next page), or None for an empty page.

        Raises:
            InvalidCursorError: ``start_after`` is not an existing article id.
        """
        ...

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article; the store assigns ``id`` and ``created_at``."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article | None:
        """Overwrite the editable fields of an existing article.

        Returns None when the article does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def list_sitemap_entries(self) -> list[tuple[str, datetime | None]]:
        """Return ``(id, created_at)`` for every article, newest first."""
        ...
