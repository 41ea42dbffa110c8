"""Domain entity describing who is making a request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """The caller's identity as asserted by the identity provider."""

    email: str | None = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.email is not None


ANONYMOUS = Identity()
