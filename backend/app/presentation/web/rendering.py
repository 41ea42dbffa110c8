"""Helpers that turn articles into what the HTML pages show.

Markdown is rendered with Python-Markdown and then cleaned against a tag
and attribute allowlist with BeautifulSoup, so article bodies may contain
images and links but never scripts, event handlers or ``javascript:`` URLs.
"""

import re
from dataclasses import dataclass
from urllib.parse import quote

import markdown as md
from bs4 import BeautifulSoup
from bs4.element import PreformattedString

from app.domain.entities import Article, Source, is_web_url

SUMMARY_LENGTH = 120

_ALLOWED_TAGS = frozenset({
    "a", "b", "blockquote", "br", "code", "del", "em", "h1", "h2", "h3", "h4",
    "h5", "h6", "hr", "i", "img", "li", "ol", "p", "pre", "strong", "table",
    "tbody", "td", "th", "thead", "tr", "ul",
})
_DROPPED_WITH_CONTENT = frozenset({"script", "style", "iframe", "object", "embed", "form"})
_ALLOWED_ATTRS: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title"}),
    "img": frozenset({"src", "alt", "title"}),
}
_URL_ATTRS = frozenset({"href", "src"})
_SAFE_URL = re.compile(r"^(?:(?:https?|mailto):|[^:/?#]*(?:[/?#]|$))", re.IGNORECASE)
_SOURCE_LINE = re.compile(r"\[(.*?)\]\((.*?)\)")
_WHITESPACE = re.compile(r"\s+")


def render_markdown(content: str) -> str:
    """Markdown → sanitized HTML for the article page."""
    html = md.markdown(content or "", extensions=["extra", "sane_lists"])
    return sanitize_html(html)


def sanitize_html(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    # Comments, doctypes, CDATA and processing instructions are written back
    # verbatim, and browsers may parse them differently than html.parser did.
    for node in list(soup.descendants):
        if isinstance(node, PreformattedString):
            node.extract()
    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        if tag.name in _DROPPED_WITH_CONTENT:
            tag.decompose()
            continue
        if tag.name not in _ALLOWED_TAGS:
            tag.unwrap()
            continue
        allowed = _ALLOWED_ATTRS.get(tag.name, frozenset())
        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if attr not in allowed or (attr in _URL_ATTRS and not _SAFE_URL.match(str(value).strip())):
                del tag.attrs[attr]
        if tag.name == "a" and tag.get("href", "").startswith("http"):
            tag["rel"] = "noopener noreferrer"
            tag["target"] = "_blank"
    return str(soup)


def create_summary(content: str, length: int = SUMMARY_LENGTH) -> str:
    """Plain-text teaser of a markdown body, truncated with ``...``."""
    if not content:
        return ""
    html = md.markdown(content, extensions=["extra"])
    text = BeautifulSoup(html, "html.parser").get_text()
    cleaned = _WHITESPACE.sub(" ", text).strip()
    if len(cleaned) > length:
        return cleaned[:length] + "..."
    return cleaned


def format_sources(sources: list[Source]) -> str:
    """One ``[title](uri)`` per line, as edited in the article editor."""
    return "\n".join(f"[{s.title}]({s.uri})" for s in sources)


def parse_sources(text: str) -> list[Source]:
    """Inverse of ``format_sources``.

    Lines that do not match, or whose link is not an http(s) URL, are ignored.
    """
    sources: list[Source] = []
    for line in (text or "").splitlines():
        match = _SOURCE_LINE.search(line)
        if match and match.group(1).strip() and is_web_url(match.group(2)):
            sources.append(Source(title=match.group(1).strip(), uri=match.group(2).strip()))
    return sources


@dataclass(frozen=True)
class ShareLink:
    name: str
    url: str


def share_links(url: str, title: str) -> list[ShareLink]:
    encoded_url = quote(url, safe="")
    encoded_title = quote(title, safe="")
    return [
        ShareLink("X (Twitter)", f"https://twitter.com/intent/tweet?url={encoded_url}&text={encoded_title}"),
        ShareLink("LINE", f"https://social-plugins.line.me/lineit/share?url={encoded_url}&text={encoded_title}"),
        ShareLink("Facebook", f"https://www.facebook.com/sharer/sharer.php?u={encoded_url}"),
    ]


@dataclass(frozen=True)
class PageMeta:
    """Values for <title>, description, Open Graph / Twitter tags and canonical link."""

    title: str
    description: str
    url: str
    image: str
    og_type: str = "website"
    canonical: str | None = None


def site_meta(base_url: str, site_title: str, site_description: str, canonical: bool = True) -> PageMeta:
    return PageMeta(
        title=site_title,
        description=site_description,
        url=f"{base_url}/",
        image=f"{base_url}/static/og-image.svg",
        canonical=f"{base_url}/" if canonical else None,
    )


def article_meta(article: Article, base_url: str, site_title: str) -> PageMeta:
    url = f"{base_url}/article/{article.id}"
    image = article.thumbnail_url or "/static/og-image.svg"
    if image.startswith("/"):
        image = base_url + image
    return PageMeta(
        title=f"{article.title} | {site_title}",
        description=create_summary(article.content),
        url=url,
        image=image,
        og_type="article",
        canonical=url,
    )
