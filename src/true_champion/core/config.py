"""
Configuration management for the True Champion API.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables
    (e.g. ESPN_LEAGUE_ID, ESPN_SEASON, REDIS_URL).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "True Champion API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", description="development, staging, production")
    log_level: str = Field(default="INFO", description="Root log level for CLI and server")

    # ==========================================================================
    # ESPN Fantasy Configuration
    # ==========================================================================
    espn_league_id: str = Field(default="", description="ESPN fantasy league ID")
    espn_season: int = Field(default=2025, ge=2000, le=2100, description="Season year")
    espn_swid: Optional[str] = Field(
        default=None,
        description="SWID cookie for private leagues",
    )
    espn_s2: Optional[str] = Field(
        default=None,
        description="espn_s2 cookie for private leagues",
    )
    espn_base_url: str = "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl"
    espn_requests_per_minute: int = Field(default=120, ge=1)
    espn_timeout: float = Field(default=30.0, gt=0)
    espn_request_delay: float = Field(
        default=0.5,
        ge=0,
        description="Pause between weekly fetches during a full update (seconds)",
    )
    use_mock_data: bool = Field(
        default=False,
        description="Serve a generated 12-team league instead of calling ESPN",
    )

    # ==========================================================================
    # Season Layout
    # ==========================================================================
    default_max_week: int = Field(
        default=18,
        ge=1,
        le=18,
        description="Max week fetched when the current week cannot be detected",
    )
    total_weeks: int = Field(default=18, ge=1, le=18)

    @computed_field
    @property
    def espn_private_league(self) -> bool:
        """Whether both auth cookies are configured."""
        return bool(self.espn_swid and self.espn_s2)

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"

    cors_allow_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins. Set to ['*'] for development.",
    )
    cors_allow_methods: list[str] = ["GET", "POST", "HEAD", "OPTIONS"]
    cors_allow_headers: list[str] = ["Accept", "Accept-Encoding", "Authorization", "Content-Type"]
    cors_expose_headers: list[str] = ["X-Process-Time"]

    cron_secret: Optional[str] = Field(
        default=None,
        description="When set, /cron/update requires 'Authorization: Bearer <secret>'",
    )

    # ==========================================================================
    # Caching Configuration
    # ==========================================================================
    cache_backend: str = Field(
        default="memory",
        description="Cache backend: memory, redis",
    )
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (redis://host:port/db)",
    )
    cache_prefix: str = Field(default="", description="Prefix prepended to every cache key")
    cache_ttl: Optional[int] = Field(
        default=None,
        ge=1,
        description="TTL for cached league data in seconds (None keeps entries until refreshed)",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
