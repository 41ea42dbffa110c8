"""View/router state machine for the blog UI.

The UI is always in exactly one ``ViewState``. Navigation actions move it
along the transitions in ``_TRANSITIONS``; anything else is rejected.
``GENERATING`` is the only multi-step workflow:
HOME -> GENERATING -> EDITING on success, or back to HOME on failure.
"""

import re
from dataclasses import dataclass
from enum import Enum


class ViewState(str, Enum):
    LIST = "list"
    ARTICLE = "article"
    EDITING = "editing"
    GENERATING = "generating"
    HOME = "home"


class ViewAction(str, Enum):
    SELECT_ARTICLE = "select_article"
    EDIT = "edit"
    NEW = "new"
    GENERATE = "generate"
    GENERATION_SUCCEEDED = "generation_succeeded"
    GENERATION_FAILED = "generation_failed"
    PUBLISH = "publish"
    BACK = "back"
    BACK_TO_ARTICLE = "back_to_article"
    DELETE = "delete"
    NAVIGATE_HOME = "navigate_home"


ADMIN_ONLY_STATES = frozenset({ViewState.HOME, ViewState.EDITING, ViewState.GENERATING})

_TRANSITIONS: dict[tuple[ViewState, ViewAction], ViewState] = {
    (ViewState.LIST, ViewAction.SELECT_ARTICLE): ViewState.ARTICLE,
    (ViewState.LIST, ViewAction.NEW): ViewState.HOME,
    (ViewState.LIST, ViewAction.DELETE): ViewState.LIST,
    (ViewState.LIST, ViewAction.NAVIGATE_HOME): ViewState.LIST,
    (ViewState.ARTICLE, ViewAction.BACK): ViewState.LIST,
    (ViewState.ARTICLE, ViewAction.EDIT): ViewState.EDITING,
    (ViewState.ARTICLE, ViewAction.DELETE): ViewState.LIST,
    (ViewState.ARTICLE, ViewAction.NAVIGATE_HOME): ViewState.LIST,
    (ViewState.ARTICLE, ViewAction.SELECT_ARTICLE): ViewState.ARTICLE,
    (ViewState.HOME, ViewAction.GENERATE): ViewState.GENERATING,
    (ViewState.HOME, ViewAction.NAVIGATE_HOME): ViewState.LIST,
    (ViewState.GENERATING, ViewAction.GENERATION_SUCCEEDED): ViewState.EDITING,
    (ViewState.GENERATING, ViewAction.GENERATION_FAILED): ViewState.HOME,
    (ViewState.EDITING, ViewAction.PUBLISH): ViewState.LIST,
    (ViewState.EDITING, ViewAction.GENERATE): ViewState.GENERATING,
    (ViewState.EDITING, ViewAction.BACK): ViewState.HOME,
    (ViewState.EDITING, ViewAction.BACK_TO_ARTICLE): ViewState.ARTICLE,
    (ViewState.EDITING, ViewAction.NAVIGATE_HOME): ViewState.LIST,
}


class InvalidTransitionError(Exception):
    """Raised when an action is not allowed from the current view."""

    def __init__(self, state: ViewState, action: ViewAction):
        self.state = state
        self.action = action
        super().__init__(f"Action '{action.value}' is not allowed from view '{state.value}'")


@dataclass(frozen=True)
class Route:
    """A URL resolved to the view it renders and the article it refers to."""

    state: ViewState
    article_id: str | None = None


_ARTICLE_PATH = re.compile(r"^/article/([^/]+)/?$")
_EDIT_PATH = re.compile(r"^/edit/([^/]+)/?$")


def route_for_path(path: str) -> Route:
    """Map a browser path to a view; unknown paths show the list."""
    if match := _ARTICLE_PATH.match(path):
        return Route(ViewState.ARTICLE, match.group(1))
    if match := _EDIT_PATH.match(path):
        return Route(ViewState.EDITING, match.group(1))
    if path.rstrip("/") == "/new":
        return Route(ViewState.HOME)
    return Route(ViewState.LIST)


def guard_route(route: Route, is_admin: bool) -> Route:
    """Redirect non-admins away from admin-only views."""
    if route.state in ADMIN_ONLY_STATES and not is_admin:
        return Route(ViewState.LIST)
    return route


class ViewStateMachine:
    """Tracks the current view and applies transitions from the table."""

    def __init__(self, state: ViewState = ViewState.LIST, is_admin: bool = False):
        self._is_admin = is_admin
        self._state = self._guard(state)

    @property
    def state(self) -> ViewState:
        return self._state

    def can(self, action: ViewAction) -> bool:
        target = _TRANSITIONS.get((self._state, action))
        return target is not None and self._guard(target) == target

    def dispatch(self, action: ViewAction) -> ViewState:
        """Apply ``action`` and return the new state.

        Raises:
            InvalidTransitionError: the table has no entry for the pair, or
                the target view is admin-only and the caller is not admin.
        """
        if not self.can(action):
            raise InvalidTransitionError(self._state, action)
        self._state = _TRANSITIONS[(self._state, action)]
        return self._state

    def _guard(self, state: ViewState) -> ViewState:
        if state in ADMIN_ONLY_STATES and not self._is_admin:
            return ViewState.LIST
        return state
