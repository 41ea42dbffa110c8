"""Unit tests for PageCursors navigation state."""

import pytest

from app.domain.pagination import PageCursors


def test_first_page_needs_no_cursor():
    cursors = PageCursors()
    assert cursors.known_pages == 1
    assert cursors.cursor_for(1) is None
    assert not cursors.has_previous(1)


def test_record_learns_next_page_cursor():
    cursors = PageCursors()
    cursors.record(1, "a2")
    cursors.record(2, "a4")

    assert cursors.known_pages == 3
    assert cursors.cursor_for(2) == "a2"
    assert cursors.cursor_for(3) == "a4"


def test_record_is_append_only():
    cursors = PageCursors()
    cursors.record(1, "a2")
    cursors.record(2, "a4")

    # Revisiting an earlier page must not overwrite its successor.
    cursors.record(1, "other")

    assert cursors.to_token() == "a2,a4"


def test_record_ignores_empty_page():
    cursors = PageCursors()
    cursors.record(1, None)
    assert cursors.known_pages == 1


def test_unknown_page_cannot_be_jumped_to():
    cursors = PageCursors()
    with pytest.raises(KeyError):
        cursors.cursor_for(3)
    assert cursors.resolve(3) == 1
    assert cursors.resolve(0) == 1


def test_has_next_for_full_page():
    cursors = PageCursors()
    assert cursors.has_next(1, fetched_count=20, page_size=20)
    assert not cursors.has_next(1, fetched_count=7, page_size=20)


def test_has_next_when_successor_is_known():
    cursors = PageCursors(["a2", "a4"])
    assert cursors.has_next(1, fetched_count=0, page_size=20)


def test_exact_multiple_offers_next_into_empty_page():
    # 40 articles, 20 per page: page 2 is full so "Next" is still offered.
    cursors = PageCursors(["a20"])
    assert cursors.has_next(2, fetched_count=20, page_size=20)


def test_reset_forgets_everything():
    cursors = PageCursors(["a2", "a4"])
    cursors.reset()
    assert cursors.known_pages == 1
    assert cursors.to_token() == ""


def test_truncated_keeps_only_reachable_cursors():
    cursors = PageCursors(["a2", "a4", "a6"])
    assert cursors.truncated(2).to_token() == "a2"
    assert cursors.truncated(1).to_token() == ""
    assert cursors.to_token() == "a2,a4,a6"


@pytest.mark.parametrize("token, expected", [(None, 1), ("", 1), ("a2", 2), ("a2,,a4,", 3)])
def test_from_token(token, expected):
    assert PageCursors.from_token(token).known_pages == expected
