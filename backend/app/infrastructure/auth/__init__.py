"""Admin identity tokens issued by the external identity provider."""

from .tokens import create_access_token, identity_from_token

__all__ = [
    "create_access_token",
    "identity_from_token",
]
