"""Sitemap generation and its time-boxed cache."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.application.interfaces import ArticleRepository
from app.infrastructure.logging.colored_logger import Stage, StageLogger

logger = logging.getLogger(__name__)
slog = StageLogger("SitemapBuilder")

_TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_TTL_SECONDS = 3600


@dataclass
class SitemapEntry:
    loc: str
    lastmod: str | None = None
    changefreq: str = "weekly"
    priority: str = "0.8"


class SitemapBuilder:
    """Renders ``sitemap.xml`` for the homepage and every dated article."""

    def __init__(self, repository: ArticleRepository, templates_dir: Path | None = None):
        self._repository = repository
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    async def collect_entries(self, base_url: str) -> list[SitemapEntry]:
        base = base_url.rstrip("/")
        entries = [SitemapEntry(loc=f"{base}/", changefreq="daily", priority="1.0")]
        for article_id, created_at in await self._repository.list_sitemap_entries():
            # Articles without a usable timestamp are left out entirely.
            if not isinstance(created_at, datetime):
                continue
            entries.append(
                SitemapEntry(
                    loc=f"{base}/article/{article_id}",
                    lastmod=created_at.date().isoformat(),
                )
            )
        return entries

    async def build(self, base_url: str) -> str:
        with slog.timed_step(Stage.SITEMAP, "Rebuilding sitemap", base_url=base_url):
            entries = await self.collect_entries(base_url)
            xml = self._env.get_template("sitemap.xml").render(entries=entries)
        slog.detail("Sitemap ready", urls=len(entries))
        return xml


class SitemapCache:
    """Holds the last rendered sitemap for ``ttl_seconds``.

    The entry is keyed by time only. After expiry the next caller rebuilds
    inline while holding the lock, so concurrent callers wait for that one
    rebuild instead of starting their own. A failed build leaves the previous
    entry in place and propagates the error.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._value: str | None = None
        self._built_at: float | None = None
        self._lock = asyncio.Lock()

    @property
    def value(self) -> str | None:
        return self._value

    def is_fresh(self) -> bool:
        if self._value is None or self._built_at is None:
            return False
        return self._clock() - self._built_at < self._ttl

    async def get_or_build(self, build: Callable[[], Awaitable[str]]) -> str:
        if self.is_fresh():
            return self._value  # type: ignore[return-value]
        async with self._lock:
            if self.is_fresh():
                return self._value  # type: ignore[return-value]
            try:
                value = await build()
            except Exception:
                logger.warning("Sitemap rebuild failed; the previous entry is kept")
                raise
            self._value = value
            self._built_at = self._clock()
            return value

    def clear(self) -> None:
        self._value = None
        self._built_at = None
