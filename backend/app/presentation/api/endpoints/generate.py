"""Content generation endpoint."""

from fastapi import APIRouter, Depends

from app.application.schemas import GenerateRequest, GeneratedArticleResponse
from app.application.services import GenerationService
from app.infrastructure.dependencies import get_generation_service
from app.presentation.api.security import require_admin

router = APIRouter(tags=["Generation"])


@router.post(
    "/generate",
    response_model=GeneratedArticleResponse,
    dependencies=[Depends(require_admin)],
)
async def generate_article(
    body: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> GeneratedArticleResponse:
    """Draft an article for the keyword. Failures are returned as-is; nothing is retried."""
    generated = await service.generate(body.keyword)
    return GeneratedArticleResponse.from_entity(generated)
