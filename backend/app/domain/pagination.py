"""Cursor-based page navigation state.

Cursors are kept as an ordered, append-only list indexed by page: page 1
starts with no cursor, page N > 1 starts after the last article of page
N - 1. Only forward, contiguous pages can be learned, so arbitrary page
jumps are not possible; requesting a page whose cursor is unknown resets
to page 1.
"""

from dataclasses import dataclass, field

_TOKEN_SEPARATOR = ","


@dataclass
class PageCursors:
    """Start cursors for pages 2..N, learned one fetch at a time."""

    _cursors: list[str] = field(default_factory=list)

    @property
    def known_pages(self) -> int:
        """Number of pages whose start cursor is known (page 1 always is)."""
        return len(self._cursors) + 1

    def is_known(self, page: int) -> bool:
        return 1 <= page <= self.known_pages

    def cursor_for(self, page: int) -> str | None:
        """Start cursor for ``page``; None for page 1.

        Raises:
            KeyError: the page has not been reached by forward navigation.
        """
        if not self.is_known(page):
            raise KeyError(page)
        if page == 1:
            return None
        return self._cursors[page - 2]

    def resolve(self, page: int) -> int:
        """Return ``page`` if its cursor is known, otherwise page 1."""
        return page if self.is_known(page) else 1

    def record(self, page: int, last_id: str | None) -> None:
        """Remember the cursor for ``page + 1`` after fetching ``page``.

        Only the last known page can extend the list; earlier pages already
        have their successor recorded.
        """
        if last_id and page == self.known_pages:
            self._cursors.append(last_id)

    def has_next(self, page: int, fetched_count: int, page_size: int) -> bool:
        """Whether a "Next" control should be offered after showing ``page``.

        True when the next cursor is already known or the page came back
        full-sized. With an article count that is an exact multiple of the
        page size the last page is full, so "Next" leads to an empty page.
        """
        return self.is_known(page + 1) or fetched_count == page_size

    def has_previous(self, page: int) -> bool:
        return page > 1 and self.is_known(page - 1)

    def reset(self) -> None:
        """Forget every cursor, e.g. after the collection was mutated."""
        self._cursors.clear()

    def truncated(self, page: int) -> "PageCursors":
        """Copy holding only cursors needed to reach pages up to ``page``."""
        return PageCursors(list(self._cursors[: max(page - 1, 0)]))

    def to_token(self) -> str:
        return _TOKEN_SEPARATOR.join(self._cursors)

    @classmethod
    def from_token(cls, token: str | None) -> "PageCursors":
        if not token:
            return cls()
        return cls([part for part in token.split(_TOKEN_SEPARATOR) if part])
