from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ChromaDB
    chroma_url: str = "http://localhost:8000"
    chroma_tenant: str = "default_tenant"
    chroma_database: str = "default_database"
    chroma_api_prefix: str = "/api/v2"

    # HTTP client
    http_timeout: float = 10.0
    http_verify_ssl: bool = True  # set False behind corporate SSL-inspection proxies

    # Documents view
    default_limit: int = 2
    limit_choices: list[int] = [2, 10, 20, 50, 100]

    # Logging
    log_level: str = "INFO"


def get_settings() -> Settings:
    """FastAPI dependency: settings resolved fresh for each request."""
    return Settings()


settings = Settings()
