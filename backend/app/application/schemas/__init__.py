from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticlePageResponse,
    ArticleCountResponse,
    SourceSchema,
)
from .generation import GenerateRequest, GeneratedArticleResponse

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticlePageResponse",
    "ArticleCountResponse",
    "SourceSchema",
    "GenerateRequest",
    "GeneratedArticleResponse",
]
