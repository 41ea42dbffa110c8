"""Abstract interface (port) for generating blog articles from a keyword."""

from abc import ABC, abstractmethod

from app.domain.entities import GeneratedArticle


class ContentGenerator(ABC):
    """Port for the generative content API — implemented in the infrastructure layer."""

    #: Strategy name used to select an implementation from settings.
    name: str = ""

    @abstractmethod
    async def generate(self, keyword: str) -> GeneratedArticle:
        """Draft an article about ``keyword``.

        The result always has a non-empty title and content.

        Raises:
            GenerationError: the upstream call failed or returned unusable output.
        """
        ...
