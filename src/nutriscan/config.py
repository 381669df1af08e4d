"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_documents_table: str = "documents"
    api_token: str
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v0"
    timezone: str = "UTC"
    log_level: str = "INFO"
    default_serving_size: float = 100
    product_cache_ttl_seconds: int = 7 * 24 * 60 * 60
    product_cache_max_entries: int = 50
    history_max_entries: int = 100
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
