"""
Configuration settings for the user pager demo.

Uses Pydantic Settings to load environment variables for the mock GraphQL
server, the synthetic data source, the query client and the prefetcher.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Server
    server_host: str = Field("127.0.0.1", alias="SERVER_HOST")
    server_port: int = Field(4000, alias="SERVER_PORT")
    graphql_path: str = Field("/graphql", alias="GRAPHQL_PATH")

    # Synthetic data
    user_count: int = Field(100, alias="USER_COUNT", ge=1)
    page_size: int = Field(10, alias="PAGE_SIZE", ge=1)
    data_seed: Optional[int] = Field(None, alias="DATA_SEED")

    # Simulated latency
    delay_enabled: bool = Field(False, alias="DELAY_ENABLED")
    delay_min_ms: int = Field(500, alias="DELAY_MIN_MS", ge=0)
    delay_max_ms: int = Field(3000, alias="DELAY_MAX_MS", ge=0)

    # Client state
    default_selected_key: str = Field("user1", alias="DEFAULT_SELECTED_KEY")
    fetch_policy: Literal["cache-first", "network-only"] = Field(
        "cache-first", alias="FETCH_POLICY"
    )
    client_timeout_seconds: float = Field(10.0, alias="CLIENT_TIMEOUT_SECONDS")
    client_retry_attempts: int = Field(1, alias="CLIENT_RETRY_ATTEMPTS", ge=1)

    # Prefetch
    prefetch_pages: int = Field(10, alias="PREFETCH_PAGES", ge=0)
    prefetch_concurrency: Optional[int] = Field(None, alias="PREFETCH_CONCURRENCY", ge=1)
    prefetch_clear_delay_ms: int = Field(500, alias="PREFETCH_CLEAR_DELAY_MS", ge=0)
    prefetch_cancel_on_close: bool = Field(True, alias="PREFETCH_CANCEL_ON_CLOSE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> "Settings":
        if self.delay_min_ms > self.delay_max_ms:
            raise ValueError(
                f"DELAY_MIN_MS ({self.delay_min_ms}) must not exceed DELAY_MAX_MS ({self.delay_max_ms})"
            )
        return self

    @property
    def graphql_url(self) -> str:
        return f"http://{self.server_host}:{self.server_port}{self.graphql_path}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
