"""Application settings using environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment (prefix ``UAE_LAW_``)."""

    database_url: str = Field(default="sqlite:///data/database.db")
    log_level: str = Field(default="INFO")
    log_structured: bool = Field(default=True)

    # Fetching (moj.gov.ae, difclaws.com, adgm.com)
    user_agent: str = Field(default="UAELawIndex/1.0")
    http_timeout: float = Field(default=30.0)
    http_max_retries: int = Field(default=3)
    http_backoff_base: float = Field(default=2.0)
    # Minimum spacing between outbound requests, process-wide
    request_min_interval: float = Field(default=0.5)

    # Ingestion output
    source_dir: str = Field(default="data/source")
    seed_dir: str = Field(default="data/seed")

    # Database freshness
    staleness_threshold_days: int = Field(default=30)
    schema_version: str = Field(default="1")

    # Search
    search_default_limit: int = Field(default=10)
    search_max_limit: int = Field(default=50)

    model_config = SettingsConfigDict(
        env_prefix="UAE_LAW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
