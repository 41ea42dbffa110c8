"""Search-engine endpoints served from the site root."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from app.application.services import SitemapBuilder, SitemapCache
from app.config import Settings, get_settings
from app.domain.exceptions import ConfigurationError
from app.infrastructure.dependencies import get_sitemap_builder, get_sitemap_cache

router = APIRouter(tags=["SEO"])


@router.get("/sitemap.xml", response_class=Response)
async def sitemap(
    request: Request,
    builder: SitemapBuilder = Depends(get_sitemap_builder),
    cache: SitemapCache = Depends(get_sitemap_cache),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Sitemap of the homepage and every article, cached for the configured TTL."""
    base_url = settings.site_base_url or str(request.base_url).rstrip("/")
    xml = await cache.get_or_build(lambda: builder.build(base_url))
    return Response(content=xml, media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(settings: Settings = Depends(get_settings)) -> PlainTextResponse:
    """robots.txt pointing crawlers at the sitemap; requires SITE_BASE_URL."""
    if not settings.site_base_url:
        raise ConfigurationError("SITE_BASE_URL", "SITE_BASE_URL is not configured")
    lines = [
        "User-agent: *",
        "Allow: /",
        "Disallow: /new",
        "Disallow: /edit/",
        "",
        f"Sitemap: {settings.site_base_url}/sitemap.xml",
    ]
    return PlainTextResponse("\n".join(lines) + "\n")
