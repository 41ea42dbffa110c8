"""Pydantic DTOs for the content-generation endpoint."""

from pydantic import BaseModel, Field

from app.domain.entities import GeneratedArticle

from .article import SourceSchema


class GenerateRequest(BaseModel):
    """Keyword to draft an article about. Blank keywords are rejected by the service."""

    keyword: str = Field("", examples=["winter coats"])


class GeneratedArticleResponse(BaseModel):
    title: str
    content: str
    sources: list[SourceSchema] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, generated: GeneratedArticle) -> "GeneratedArticleResponse":
        return cls(
            title=generated.title,
            content=generated.content,
            sources=[SourceSchema(uri=s.uri, title=s.title) for s in generated.sources],
        )
