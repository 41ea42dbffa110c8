"""Unit tests for token verification and admin resolution."""

from datetime import timedelta

import pytest
from jose import jwt

from app.config import Settings
from app.domain.exceptions import AuthenticationError
from app.infrastructure.auth import create_access_token, identity_from_token


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, admin_email="Admin@Example.com", auth_secret_key="secret")


def test_admin_email_matches_case_insensitively(settings):
    identity = identity_from_token(create_access_token("admin@example.com", settings), settings)
    assert identity.is_authenticated
    assert identity.is_admin


def test_other_email_is_not_admin(settings):
    identity = identity_from_token(create_access_token("reader@example.com", settings), settings)
    assert identity.email == "reader@example.com"
    assert not identity.is_admin


def test_nobody_is_admin_without_admin_email(settings):
    unset = Settings(_env_file=None, admin_email="", auth_secret_key="secret")
    identity = identity_from_token(create_access_token("admin@example.com", unset), unset)
    assert not identity.is_admin


def test_expired_token_is_rejected(settings):
    token = create_access_token("admin@example.com", settings, expires_delta=timedelta(seconds=-1))
    with pytest.raises(AuthenticationError):
        identity_from_token(token, settings)


def test_wrong_signature_is_rejected(settings):
    other = Settings(_env_file=None, auth_secret_key="another-secret")
    with pytest.raises(AuthenticationError):
        identity_from_token(create_access_token("admin@example.com", other), settings)


def test_token_without_email_is_rejected(settings):
    token = jwt.encode({"sub": "someone"}, settings.auth_secret_key, algorithm=settings.auth_algorithm)
    with pytest.raises(AuthenticationError):
        identity_from_token(token, settings)
