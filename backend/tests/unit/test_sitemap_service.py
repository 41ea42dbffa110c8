"""Unit tests for sitemap rendering and its TTL cache."""

import asyncio
from xml.etree import ElementTree

import pytest

from app.application.services import SitemapBuilder, SitemapCache
from app.domain.exceptions import StorageError

_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_homepage_comes_first_then_articles(fake_repository):
    first, second = await fake_repository.seed(2)
    builder = SitemapBuilder(fake_repository)

    entries = await builder.collect_entries("https://blog.example.com/")

    assert [e.loc for e in entries] == [
        "https://blog.example.com/",
        f"https://blog.example.com/article/{second.id}",
        f"https://blog.example.com/article/{first.id}",
    ]
    assert (entries[0].changefreq, entries[0].priority, entries[0].lastmod) == ("daily", "1.0", None)
    assert (entries[1].changefreq, entries[1].priority) == ("weekly", "0.8")
    assert entries[1].lastmod == second.created_at.date().isoformat()


@pytest.mark.asyncio
async def test_articles_without_timestamp_are_skipped(fake_repository):
    article, = await fake_repository.seed(1)
    article.created_at = None
    builder = SitemapBuilder(fake_repository)

    entries = await builder.collect_entries("https://blog.example.com")

    assert [e.loc for e in entries] == ["https://blog.example.com/"]


@pytest.mark.asyncio
async def test_build_renders_valid_sitemap_xml(fake_repository):
    article, = await fake_repository.seed(1)

    xml = await SitemapBuilder(fake_repository).build("https://blog.example.com")

    root = ElementTree.fromstring(xml.encode("utf-8"))
    assert root.tag == "{http://www.sitemaps.org/schemas/sitemap/0.9}urlset"
    locs = [loc.text for loc in root.findall("sm:url/sm:loc", _NS)]
    assert locs == ["https://blog.example.com/", f"https://blog.example.com/article/{article.id}"]
    assert len(root.findall("sm:url/sm:lastmod", _NS)) == 1


@pytest.mark.asyncio
async def test_build_escapes_urls(fake_repository):
    xml = await SitemapBuilder(fake_repository).build("https://blog.example.com/?a=1&b=2")
    assert "&amp;b=2" in xml


@pytest.mark.asyncio
async def test_cache_serves_same_value_within_ttl():
    clock = FakeClock()
    cache = SitemapCache(ttl_seconds=3600, clock=clock)
    builds = []

    async def build():
        builds.append(clock.now)
        return f"<urlset>{len(builds)}</urlset>"

    first = await cache.get_or_build(build)
    clock.now += 3599
    second = await cache.get_or_build(build)

    assert first == second == "<urlset>1</urlset>"
    assert len(builds) == 1


@pytest.mark.asyncio
async def test_cache_rebuilds_after_expiry():
    clock = FakeClock()
    cache = SitemapCache(ttl_seconds=60, clock=clock)
    counter = iter(range(1, 10))

    async def build():
        return f"v{next(counter)}"

    assert await cache.get_or_build(build) == "v1"
    clock.now += 60
    assert not cache.is_fresh()
    assert await cache.get_or_build(build) == "v2"


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_rebuild():
    cache = SitemapCache(ttl_seconds=60, clock=FakeClock())
    calls = 0

    async def build():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return "<urlset/>"

    results = await asyncio.gather(*(cache.get_or_build(build) for _ in range(5)))

    assert results == ["<urlset/>"] * 5
    assert calls == 1


@pytest.mark.asyncio
async def test_failed_rebuild_keeps_previous_value():
    clock = FakeClock()
    cache = SitemapCache(ttl_seconds=60, clock=clock)

    async def good():
        return "old"

    async def bad():
        raise StorageError("Failed to list articles for the sitemap: OperationalError")

    await cache.get_or_build(good)
    clock.now += 120

    with pytest.raises(StorageError):
        await cache.get_or_build(bad)

    assert cache.value == "old"
    assert not cache.is_fresh()


def test_clear_forgets_value():
    cache = SitemapCache(ttl_seconds=60, clock=FakeClock())
    cache.clear()
    assert cache.value is None
    assert not cache.is_fresh()
