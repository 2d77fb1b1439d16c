"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class ApiKeyGrant(BaseModel):
    """Role and subject granted to a configured API key."""

    role: str
    subject: str


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://storefront:storefront_dev_password@db:5432/storefront"

    # Authentication (API key -> role grant)
    api_keys: dict[str, ApiKeyGrant] = {
        "dev-admin-key-change-in-production": ApiKeyGrant(
            role="superadmin", subject="admin@2mylover.com"
        ),
    }

    # Pagination
    admin_per_page_default: int = 10
    admin_per_page_max: int = 100
    store_per_page_default: int = 12
    store_per_page_max: int = 48

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
