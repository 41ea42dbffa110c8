"""Pydantic DTOs (Data Transfer Objects) for the Article feature.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain.entities import Article, Source, is_web_url

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SourceSchema(BaseModel):
    """A citation shown under an article."""

    uri: str = Field(..., min_length=1, examples=["https://example.com/guide"])
    title: str = Field(..., min_length=1, examples=["A practical guide"])

    @field_validator("uri")
    @classmethod
    def _web_url_only(cls, value: str) -> str:
        if not is_web_url(value):
            raise ValueError("must be an http(s) URL")
        return value.strip()

    def to_entity(self) -> Source:
        return Source(uri=self.uri, title=self.title)


class ArticleCreate(BaseModel):
    """Schema for creating a new article. ``id`` and ``createdAt`` are store-assigned."""

    model_config = _CAMEL

    title: str = Field(..., min_length=1, examples=["Choosing a winter coat"])
    content: str = Field(..., min_length=1, examples=["# Choosing a winter coat\n\n..."])
    keyword: str = Field("", examples=["winter coats"])
    sources: list[SourceSchema] = Field(default_factory=list)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional."""

    model_config = _CAMEL

    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    keyword: str | None = None
    sources: list[SourceSchema] | None = None


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    model_config = _CAMEL

    id: str
    title: str
    content: str
    keyword: str
    created_at: datetime | None
    sources: list[SourceSchema] = Field(default_factory=list)
    thumbnail_url: str | None = None

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            keyword=article.keyword,
            created_at=article.created_at,
            sources=[SourceSchema(uri=s.uri, title=s.title) for s in article.sources],
            thumbnail_url=article.thumbnail_url,
        )


class ArticlePageResponse(BaseModel):
    """One page of the public article list plus the cursor for the next page."""

    model_config = _CAMEL

    articles: list[ArticleResponse]
    last_doc_id: str | None = None


class ArticleCountResponse(BaseModel):
    count: int
