from .article import Article, Source, extract_first_image_url, is_web_url
from .generated_article import GeneratedArticle
from .identity import Identity

__all__ = [
    "Article",
    "Source",
    "extract_first_image_url",
    "is_web_url",
    "GeneratedArticle",
    "Identity",
]
