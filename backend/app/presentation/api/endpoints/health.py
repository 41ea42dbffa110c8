"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)) -> dict:
    """Returns the current application health status."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "generationStrategy": settings.generation_strategy,
    }
