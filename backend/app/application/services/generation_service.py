"""Application service for drafting articles with the generative content API."""

from app.application.interfaces import ContentGenerator
from app.domain.entities import GeneratedArticle
from app.domain.exceptions import ValidationError
from app.infrastructure.logging.colored_logger import Stage, StageLogger

slog = StageLogger("GenerationService")


class GenerationService:
    """Validates the keyword and delegates to the configured generation strategy.

    There is a single attempt per call; callers surface failures to the user,
    who may trigger generation again.
    """

    def __init__(self, generator: ContentGenerator):
        self._generator = generator

    async def generate(self, keyword: str | None) -> GeneratedArticle:
        cleaned = (keyword or "").strip()
        if not cleaned:
            raise ValidationError("Keyword is required and must be a non-empty string.")

        with slog.timed_step(
            Stage.GENERATE, "Drafting article", keyword=cleaned, strategy=self._generator.name
        ):
            result = await self._generator.generate(cleaned)
        slog.detail("Draft ready", title=result.title, sources=len(result.sources))
        return result
