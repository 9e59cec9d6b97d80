"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Database
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "storefront"
    mongodb_timeout_ms: int = 5000

    # Carts
    cart_ttl_days: int = 7

    # Pagination
    default_page_size: int = 12
    max_page_size: int = 100

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
