"""Domain entity for the output of the content-generation step."""

from dataclasses import dataclass, field

from .article import Article, Source


@dataclass
class GeneratedArticle:
    """A generated draft: non-empty title and content plus grounding sources."""

    title: str
    content: str
    sources: list[Source] = field(default_factory=list)

    def to_draft(self, keyword: str) -> Article:
        """Turn the generation result into an unsaved article (empty id)."""
        return Article(
            title=self.title,
            content=self.content,
            keyword=keyword,
            sources=list(self.sources),
        )
