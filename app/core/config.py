# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    All values have defaults, so a bare checkout runs against a local
    SQLite file. Typical .env overrides:
      - ENVIRONMENT (production => in-memory SQLite unless DATABASE_URL is set)
      - DATABASE_URL (any SQLAlchemy URL)
      - DEFAULT_USER_ID (the single shopper identity)
    """

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # DB config
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False

    # There is no login: every request acts as this user.
    DEFAULT_USER_ID: int = 1

    ORDER_ID_PREFIX: str = "VIBE"

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Used by the Python client (app.client)
    CLIENT_BASE_URL: str = "http://localhost:5001/api"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        """
        Resolve the effective database URL.

        An explicit DATABASE_URL always wins; otherwise production runs
        on in-memory SQLite and everything else on a local file.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.ENVIRONMENT == "production":
            return "sqlite://"
        return "sqlite:///./storefront.db"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
