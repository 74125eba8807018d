"""Application settings and configuration."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application
    app_name: str = "TPS Scoring Service"
    debug: bool = False
    environment: str = "production"
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./tps_scoring.db")
    create_tables: bool = True

    # Identity
    jwt_secret: str = Field(default="change-me")
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None

    # LLM
    llm_provider: str = "claude"
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    llm_model: Optional[str] = None
    llm_max_tokens: int = 1024

    # Bulk recalculation
    bulk_chunk_size: int = 100
    bulk_list_default_limit: int = 200
    bulk_list_max_limit: int = 1000

    # Monitoring
    log_level: str = "INFO"
    json_logs: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
