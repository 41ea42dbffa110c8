import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_GENERATION_STRATEGIES = frozenset({"structured", "markdown"})
DEFAULT_AUTH_SECRET_KEY = "change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Keyword Blog"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./blog.db"
    cors_origins: list[str] = ["http://localhost:5173"]
    host: str = "0.0.0.0"
    port: int = 8080

    # Gemini content generation
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    generation_strategy: str = "structured"  # "structured" | "markdown"
    generation_temperature: float = 0.8
    generation_top_p: float = 0.95

    # Public site
    site_base_url: str = ""
    site_title: str = "Keyword Blog"
    site_description: str = "Practical tips and everyday know-how, one keyword at a time."
    articles_per_page: int = 20
    sitemap_ttl_seconds: int = 3600

    # Admin identity (tokens are issued by the external identity provider)
    admin_email: str = ""
    auth_secret_key: str = DEFAULT_AUTH_SECRET_KEY
    auth_algorithm: str = "HS256"

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_gemini: str = "INFO"           # Gemini generation client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalize values that are read verbatim from the environment."""
        object.__setattr__(self, "site_base_url", self.site_base_url.strip().rstrip("/"))
        strategy = self.generation_strategy.strip().lower()
        if strategy not in _GENERATION_STRATEGIES:
            _config_logger.warning(
                "Unknown GENERATION_STRATEGY '%s'; falling back to 'structured'",
                self.generation_strategy,
            )
            strategy = "structured"
        object.__setattr__(self, "generation_strategy", strategy)
        if self.admin_email and self.auth_secret_key == DEFAULT_AUTH_SECRET_KEY:
            _config_logger.warning(
                "ADMIN_EMAIL is set but AUTH_SECRET_KEY is the default; anyone can sign admin tokens"
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
