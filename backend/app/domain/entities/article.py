"""Domain entities — pure Python business objects, no framework dependencies."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlsplit

_MARKDOWN_IMAGE = re.compile(r"!\[.*?\]\((.*?)\)")
_HTML_IMAGE = re.compile(r'<img[^>]+src="([^">]+)"')
_WEB_SCHEMES = frozenset({"http", "https"})


@dataclass
class Source:
    """A citation surfaced by the generation step."""

    uri: str
    title: str


@dataclass
class Article:
    """Core domain entity representing a published (or draft) blog article.

    ``id`` is empty only for an in-memory draft that has not been stored yet;
    ``created_at`` is assigned by the store on insert.
    """

    title: str
    content: str
    keyword: str
    id: str = ""
    created_at: datetime | None = None
    sources: list[Source] = field(default_factory=list)

    @property
    def is_draft(self) -> bool:
        return not self.id

    @property
    def thumbnail_url(self) -> str | None:
        return extract_first_image_url(self.content)

    def update(
        self,
        title: str | None = None,
        content: str | None = None,
        keyword: str | None = None,
        sources: list[Source] | None = None,
    ) -> None:
        """Apply a partial edit. ``id`` and ``created_at`` never change."""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if keyword is not None:
            self.keyword = keyword
        if sources is not None:
            self.sources = list(sources)


def extract_first_image_url(markdown: str) -> str | None:
    """Return the URL of the first image in the markdown, or None.

    Markdown images win over raw ``<img>`` tags.
    """
    if not markdown:
        return None
    match = _MARKDOWN_IMAGE.search(markdown)
    if match and match.group(1):
        return match.group(1)
    html_match = _HTML_IMAGE.search(markdown)
    return html_match.group(1) if html_match else None


def is_web_url(uri: str) -> bool:
    """True for absolute ``http``/``https`` URLs, the only kind a source may link to."""
    try:
        parts = urlsplit(uri.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in _WEB_SCHEMES and bool(parts.netloc)
