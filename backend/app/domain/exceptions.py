"""Domain-specific exceptions — framework-independent."""


class ConfigurationError(Exception):
    """Raised when a required setting or secret is missing."""

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        super().__init__(message or f"Required setting '{setting}' is not configured")


class ValidationError(Exception):
    """Raised when caller-supplied input is missing or malformed."""


class InvalidCursorError(ValidationError):
    """Raised when a pagination cursor does not reference an existing article."""

    def __init__(self, cursor: str):
        self.cursor = cursor
        super().__init__(f"Pagination cursor '{cursor}' does not reference an article")


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class UpstreamError(Exception):
    """Raised when an external service (database, generative API) fails.

    Never retried; the message is reported to the caller as-is.
    """

    def __init__(self, service: str, message: str):
        self.service = service
        self.message = message
        super().__init__(message)


class StorageError(UpstreamError):
    """Raised when the article store cannot be read or written."""

    def __init__(self, message: str):
        super().__init__("database", message)


class GenerationError(UpstreamError):
    """Raised when the content-generation API fails or returns unusable output."""

    def __init__(self, message: str):
        super().__init__("gemini", message)


class AuthenticationError(Exception):
    """Raised when a request carries no valid identity token."""


class PermissionDeniedError(Exception):
    """Raised when an authenticated identity lacks admin rights."""
