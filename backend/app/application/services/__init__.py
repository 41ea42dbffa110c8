from .article_service import ArticleService
from .generation_service import GenerationService
from .sitemap_service import SitemapBuilder, SitemapCache, SitemapEntry

__all__ = [
    "ArticleService",
    "GenerationService",
    "SitemapBuilder",
    "SitemapCache",
    "SitemapEntry",
]
