"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Product data source
    product_source_url: str = "https://next-ecommerce-api.vercel.app"
    request_timeout: float = 10.0

    # Retrieval
    page_size: int = 20
    search_candidate_limit: int = 3000

    # Result cache (None keeps every entry for the life of the process)
    cache_max_entries: int | None = None

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
