"""JWT helpers for admin identity.

The identity provider signs tokens with the shared ``auth_secret_key``; the
admin is whoever carries an ``email`` claim equal to ``admin_email``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.config import Settings
from app.domain.entities import Identity
from app.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def create_access_token(
    email: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
    claims: dict[str, Any] | None = None,
) -> str:
    """Sign a token for ``email``. Used by tests and local tooling."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": email,
        "email": email,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=1)),
    }
    if claims:
        payload.update(claims)
    return jwt.encode(payload, settings.auth_secret_key, algorithm=settings.auth_algorithm)


def identity_from_token(token: str, settings: Settings) -> Identity:
    """Verify ``token`` and resolve the caller's identity.

    Raises:
        AuthenticationError: the token is malformed, expired or has no email.
    """
    try:
        payload = jwt.decode(token, settings.auth_secret_key, algorithms=[settings.auth_algorithm])
    except JWTError as exc:
        raise AuthenticationError("Invalid or expired token") from exc

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise AuthenticationError("Token does not carry an email claim")

    admin_email = settings.admin_email.strip().lower()
    if not admin_email:
        logger.warning("ADMIN_EMAIL is not configured; no identity is treated as admin")
    return Identity(email=email, is_admin=bool(admin_email) and email.lower() == admin_email)
