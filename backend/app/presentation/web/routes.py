"""Server-rendered blog pages.

Each handler resolves its ``ViewState`` through the view state machine and
renders one template. Pagination state travels in the query string as the
serialized ``PageCursors`` (``?page=N&c=<cursor,cursor,...>``).
"""

import logging
import math
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.application.services import ArticleService, GenerationService
from app.config import Settings, get_settings
from app.domain.entities import Article, Identity
from app.domain.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    InvalidCursorError,
    UpstreamError,
    ValidationError,
)
from app.domain.pagination import PageCursors
from app.domain.view_state import ViewAction, ViewState, ViewStateMachine, guard_route, route_for_path
from app.infrastructure.auth import identity_from_token
from app.infrastructure.dependencies import get_article_service, get_generation_service
from app.presentation.api.errors import status_for
from app.presentation.api.security import SESSION_COOKIE, get_optional_identity
from app.presentation.web.rendering import (
    article_meta,
    create_summary,
    format_sources,
    parse_sources,
    render_markdown,
    share_links,
    site_meta,
)

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["summary"] = create_summary
templates.env.filters["markdown"] = render_markdown

router = APIRouter(include_in_schema=False)


def _base_url(request: Request, settings: Settings) -> str:
    return settings.site_base_url or str(request.base_url).rstrip("/")


def _render(
    request: Request,
    template: str,
    machine: ViewStateMachine,
    identity: Identity,
    settings: Settings,
    status_code: int = status.HTTP_200_OK,
    **context,
) -> HTMLResponse:
    base_url = _base_url(request, settings)
    context.setdefault(
        "meta",
        site_meta(
            base_url,
            settings.site_title,
            settings.site_description,
            canonical=machine.state in (ViewState.LIST, ViewState.HOME),
        ),
    )
    return templates.TemplateResponse(
        request,
        template,
        {
            "view": machine.state.value,
            "identity": identity,
            "settings": settings,
            "base_url": base_url,
            **context,
        },
        status_code=status_code,
    )


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def _forbidden_redirect(request: Request, identity: Identity) -> RedirectResponse | None:
    """Send non-admins away from admin-only paths."""
    route = route_for_path(request.url.path)
    if guard_route(route, identity.is_admin).state != route.state:
        return _redirect("/")
    return None


async def _render_list(
    request: Request,
    identity: Identity,
    service: ArticleService,
    settings: Settings,
    page: int = 1,
    cursor_token: str | None = None,
    error: str | None = None,
) -> HTMLResponse:
    machine = ViewStateMachine(ViewState.LIST, identity.is_admin)
    per_page = settings.articles_per_page
    cursors = PageCursors.from_token(cursor_token)
    page = cursors.resolve(page)
    cursors = cursors.truncated(page)

    articles: list[Article] = []
    total_pages = 1
    status_code = status.HTTP_200_OK
    try:
        total_pages = math.ceil(await service.count_articles() / per_page) or 1
        try:
            articles, last_id = await service.list_page(per_page, cursors.cursor_for(page))
        except InvalidCursorError:
            # The cursor article is gone; cursors are only valid for an unchanged collection.
            cursors.reset()
            page = 1
            articles, last_id = await service.list_page(per_page, None)
        cursors.record(page, last_id)
    except UpstreamError as exc:
        logger.error("Failed to load article list: %s", exc)
        error = error or str(exc)
        status_code = status_for(exc)

    has_next = cursors.has_next(page, len(articles), per_page) and page < total_pages
    token = cursors.to_token()
    return _render(
        request,
        "list.html",
        machine,
        identity,
        settings,
        status_code=status_code,
        articles=articles,
        page=page,
        total_pages=total_pages,
        has_next=has_next,
        has_previous=cursors.has_previous(page),
        next_url=f"/?page={page + 1}&c={token}",
        previous_url=f"/?page={page - 1}&c={token}" if page > 2 else "/",
        share=share_links(f"{_base_url(request, settings)}/", settings.site_title),
        error=error,
    )


@router.get("/", response_class=HTMLResponse)
async def article_list(
    request: Request,
    page: int = 1,
    c: str | None = None,
    identity: Identity = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    return await _render_list(request, identity, service, settings, page, c)


@router.get("/article/{article_id}", response_class=HTMLResponse)
async def article_detail(
    request: Request,
    article_id: str,
    identity: Identity = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    machine = ViewStateMachine(ViewState.LIST, identity.is_admin)
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError:
        return _render(
            request,
            "not_found.html",
            machine,
            identity,
            settings,
            status_code=status.HTTP_404_NOT_FOUND,
            error="The requested article could not be found.",
        )
    machine.dispatch(ViewAction.SELECT_ARTICLE)
    base_url = _base_url(request, settings)
    meta = article_meta(article, base_url, settings.site_title)
    return _render(
        request,
        "article.html",
        machine,
        identity,
        settings,
        article=article,
        meta=meta,
        share=share_links(meta.url, article.title),
    )


@router.get("/new", response_class=HTMLResponse)
async def keyword_form(
    request: Request,
    identity: Identity = Depends(get_optional_identity),
    settings: Settings = Depends(get_settings),
) -> Response:
    if redirect := _forbidden_redirect(request, identity):
        return redirect
    machine = ViewStateMachine(ViewState.LIST, identity.is_admin)
    machine.dispatch(ViewAction.NEW)
    return _render(request, "keyword_form.html", machine, identity, settings, keyword="")


@router.post("/new", response_class=HTMLResponse)
async def generate_draft(
    request: Request,
    keyword: str = Form(""),
    identity: Identity = Depends(get_optional_identity),
    generation: GenerationService = Depends(get_generation_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    if redirect := _forbidden_redirect(request, identity):
        return redirect
    machine = ViewStateMachine(ViewState.HOME, identity.is_admin)
    machine.dispatch(ViewAction.GENERATE)
    try:
        generated = await generation.generate(keyword)
    except (ValidationError, UpstreamError) as exc:
        machine.dispatch(ViewAction.GENERATION_FAILED)
        return _render(
            request,
            "keyword_form.html",
            machine,
            identity,
            settings,
            status_code=status_for(exc),
            keyword=keyword,
            error=str(exc),
        )
    machine.dispatch(ViewAction.GENERATION_SUCCEEDED)
    return _render(
        request,
        "editor.html",
        machine,
        identity,
        settings,
        article=generated.to_draft(keyword.strip()),
        sources_text=format_sources(generated.sources),
        is_new=True,
    )


@router.get("/edit/{article_id}", response_class=HTMLResponse)
async def edit_article(
    request: Request,
    article_id: str,
    identity: Identity = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    if redirect := _forbidden_redirect(request, identity):
        return redirect
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError:
        return await _render_list(
            request, identity, service, settings, error="The requested article could not be found."
        )
    machine = ViewStateMachine(ViewState.ARTICLE, identity.is_admin)
    machine.dispatch(ViewAction.EDIT)
    return _render(
        request,
        "editor.html",
        machine,
        identity,
        settings,
        article=article,
        sources_text=format_sources(article.sources),
        is_new=False,
    )


@router.post("/publish", response_class=HTMLResponse)
async def publish_article(
    request: Request,
    article_id: str = Form("", alias="id"),
    title: str = Form(""),
    content: str = Form(""),
    keyword: str = Form(""),
    sources: str = Form(""),
    identity: Identity = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    if not identity.is_admin:
        return _redirect("/")
    machine = ViewStateMachine(ViewState.EDITING, identity.is_admin)
    draft = Article(
        id=article_id.strip(),
        title=title.strip(),
        content=content,
        keyword=keyword.strip(),
        sources=parse_sources(sources),
    )
    try:
        if not draft.title or not draft.content.strip():
            raise ValidationError("Title and content are required.")
        await service.publish_article(draft)
    except (ValidationError, EntityNotFoundError, UpstreamError) as exc:
        return _render(
            request,
            "editor.html",
            machine,
            identity,
            settings,
            status_code=status_for(exc),
            article=draft,
            sources_text=sources,
            is_new=draft.is_draft,
            error=str(exc),
        )
    machine.dispatch(ViewAction.PUBLISH)
    return _redirect("/")


@router.post("/article/{article_id}/delete", response_class=HTMLResponse)
async def delete_article(
    request: Request,
    article_id: str,
    identity: Identity = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    if not identity.is_admin:
        return _redirect("/")
    try:
        await service.delete_article(article_id)
    except (EntityNotFoundError, UpstreamError) as exc:
        return await _render_list(request, identity, service, settings, error=str(exc))
    return _redirect("/")


@router.get("/auth/callback")
async def auth_callback(token: str, settings: Settings = Depends(get_settings)) -> Response:
    """Landing point for the identity provider: stores the token in the session cookie."""
    try:
        identity = identity_from_token(token, settings)
    except AuthenticationError as exc:
        logger.info("Rejected sign-in: %s", exc)
        return _redirect("/")
    response = _redirect("/new" if identity.is_admin else "/")
    response.set_cookie(
        SESSION_COOKIE,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.app_env != "development",
    )
    return response


@router.post("/logout")
async def logout() -> Response:
    response = _redirect("/")
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get("/{full_path:path}", response_class=HTMLResponse)
async def spa_fallback(
    request: Request,
    full_path: str,
    identity: Identity = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Unknown client-side paths fall back to the article list."""
    if full_path.startswith("api/"):
        raise EntityNotFoundError("Route", f"/{full_path}")
    return await _render_list(request, identity, service, settings)
