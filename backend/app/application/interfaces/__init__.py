from .article_repository import ArticleRepository
from .content_generator import ContentGenerator

__all__ = [
    "ArticleRepository",
    "ContentGenerator",
]
