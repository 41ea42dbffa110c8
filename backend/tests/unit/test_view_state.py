"""Unit tests for the view state machine and route guard."""

import pytest

from app.domain.view_state import (
    InvalidTransitionError,
    Route,
    ViewAction,
    ViewState,
    ViewStateMachine,
    guard_route,
    route_for_path,
)


def test_generation_success_flow():
    machine = ViewStateMachine(ViewState.LIST, is_admin=True)
    assert machine.dispatch(ViewAction.NEW) == ViewState.HOME
    assert machine.dispatch(ViewAction.GENERATE) == ViewState.GENERATING
    assert machine.dispatch(ViewAction.GENERATION_SUCCEEDED) == ViewState.EDITING
    assert machine.dispatch(ViewAction.PUBLISH) == ViewState.LIST


def test_generation_failure_returns_home():
    machine = ViewStateMachine(ViewState.HOME, is_admin=True)
    machine.dispatch(ViewAction.GENERATE)
    assert machine.dispatch(ViewAction.GENERATION_FAILED) == ViewState.HOME


def test_regenerate_from_editor():
    machine = ViewStateMachine(ViewState.EDITING, is_admin=True)
    assert machine.dispatch(ViewAction.GENERATE) == ViewState.GENERATING


def test_edit_existing_article_and_go_back():
    machine = ViewStateMachine(ViewState.LIST, is_admin=True)
    machine.dispatch(ViewAction.SELECT_ARTICLE)
    assert machine.dispatch(ViewAction.EDIT) == ViewState.EDITING
    assert machine.dispatch(ViewAction.BACK_TO_ARTICLE) == ViewState.ARTICLE
    assert machine.dispatch(ViewAction.BACK) == ViewState.LIST


def test_delete_from_article_returns_to_list():
    machine = ViewStateMachine(ViewState.ARTICLE, is_admin=True)
    assert machine.dispatch(ViewAction.DELETE) == ViewState.LIST


def test_invalid_transition_is_rejected():
    machine = ViewStateMachine(ViewState.LIST, is_admin=True)
    assert not machine.can(ViewAction.PUBLISH)
    with pytest.raises(InvalidTransitionError):
        machine.dispatch(ViewAction.PUBLISH)
    assert machine.state == ViewState.LIST


def test_non_admin_cannot_enter_admin_views():
    machine = ViewStateMachine(ViewState.LIST, is_admin=False)
    assert not machine.can(ViewAction.NEW)
    with pytest.raises(InvalidTransitionError):
        machine.dispatch(ViewAction.NEW)

    machine.dispatch(ViewAction.SELECT_ARTICLE)
    assert not machine.can(ViewAction.EDIT)


def test_non_admin_starting_in_admin_view_lands_on_list():
    assert ViewStateMachine(ViewState.EDITING, is_admin=False).state == ViewState.LIST


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/", Route(ViewState.LIST)),
        ("/article/abc", Route(ViewState.ARTICLE, "abc")),
        ("/article/abc/", Route(ViewState.ARTICLE, "abc")),
        ("/edit/abc", Route(ViewState.EDITING, "abc")),
        ("/new", Route(ViewState.HOME)),
        ("/something/else", Route(ViewState.LIST)),
    ],
)
def test_route_for_path(path, expected):
    assert route_for_path(path) == expected


def test_guard_route_redirects_non_admin():
    assert guard_route(Route(ViewState.EDITING, "abc"), is_admin=False) == Route(ViewState.LIST)
    assert guard_route(Route(ViewState.HOME), is_admin=False) == Route(ViewState.LIST)
    assert guard_route(Route(ViewState.ARTICLE, "abc"), is_admin=False) == Route(ViewState.ARTICLE, "abc")
    assert guard_route(Route(ViewState.EDITING, "abc"), is_admin=True) == Route(ViewState.EDITING, "abc")
