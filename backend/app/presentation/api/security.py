"""Authentication dependencies for API routes and web pages."""

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings
from app.domain.entities import Identity
from app.domain.entities.identity import ANONYMOUS
from app.domain.exceptions import AuthenticationError, PermissionDeniedError
from app.infrastructure.auth import identity_from_token

SESSION_COOKIE = "session"

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_identity(
    bearer_token: HTTPAuthorizationCredentials | None = Depends(_http_bearer),
    session: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """Resolve the caller from a bearer token or the session cookie.

    Requests without a token are anonymous; a present but invalid token is
    rejected with 401.
    """
    token = bearer_token.credentials if bearer_token and bearer_token.credentials else session
    if not token:
        return ANONYMOUS
    return identity_from_token(token, settings)


async def get_optional_identity(
    bearer_token: HTTPAuthorizationCredentials | None = Depends(_http_bearer),
    session: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """Like ``get_current_identity`` but treats a bad token as anonymous (public pages)."""
    try:
        return await get_current_identity(bearer_token, session, settings)
    except AuthenticationError:
        return ANONYMOUS


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_authenticated:
        raise AuthenticationError("Authentication required")
    if not identity.is_admin:
        raise PermissionDeniedError("Administrator access required")
    return identity
