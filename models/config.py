"""Application configuration using Pydantic v2.

Centralized settings for season-streams including:
- Seasonal listing API (Jikan)
- Streaming sources (Kitsu primary, WatchMode fallback)
- Cache settings
- Enrichment strategy and worker bound
- OS-specific data paths

Configuration can be overridden via environment variables:
    SEASON_STREAMS__WATCHMODE__API_KEY=abc123
    SEASON_STREAMS__CACHE__TTL_HOURS=12
    SEASON_STREAMS__ENRICHMENT__MODE=progressive
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.models import Confidence, DeliveryMode


def get_data_path() -> Path:
    """Get OS-specific data directory for season-streams.

    Returns:
        Path: ~/.local/state/season-streams (Linux/macOS) or %LOCALAPPDATA%\\season-streams (Windows)
    """
    if os.name == "nt":
        return Path(os.environ.get("LOCALAPPDATA", Path.home())) / "season-streams"
    return Path.home() / ".local" / "state" / "season-streams"


class JikanSettings(BaseModel):
    """Jikan (MyAnimeList mirror) seasonal listing API."""

    api_url: str = Field(
        "https://api.jikan.moe/v4",
        description="Jikan REST API base URL",
    )
    rate_limit_delay: float = Field(
        1.0,
        ge=0,
        description="Minimum seconds between consecutive Jikan calls",
    )
    timeout: float = Field(10.0, gt=0, description="Request timeout in seconds")
    max_pages: int = Field(
        10,
        ge=1,
        le=50,
        description="Maximum listing pages to follow for one season",
    )


class KitsuSettings(BaseModel):
    """Kitsu streaming-link source (primary)."""

    api_url: str = Field(
        "https://kitsu.io/api/edge",
        description="Kitsu JSON:API base URL",
    )
    rate_limit_delay: float = Field(0.5, ge=0)
    timeout: float = Field(5.0, gt=0)


class WatchModeSettings(BaseModel):
    """WatchMode streaming source (fallback).

    The source is disabled when no API key is configured.
    """

    api_url: str = Field(
        "https://api.watchmode.com/v1",
        description="WatchMode REST API base URL",
    )
    api_key: str | None = Field(None, description="WatchMode API key")
    region: str = Field("US", min_length=2, max_length=2)
    rate_limit_delay: float = Field(1.0, ge=0)
    timeout: float = Field(10.0, gt=0)
    min_confidence: Confidence = Field(
        Confidence.LOW,
        description="Minimum match confidence when picking a WatchMode title",
    )


class CacheSettings(BaseModel):
    """On-disk cache configuration (SQLite via diskcache)."""

    cache_dir: Path = Field(
        default_factory=lambda: get_data_path() / "cache",
        description="Path to cache directory (diskcache)",
    )
    ttl_hours: float = Field(
        48,
        gt=0,
        le=720,
        description="Default entry time-to-live in hours",
    )
    version: str = Field(
        "1.0.0",
        min_length=1,
        description="Cache format version; entries with another version are discarded",
    )
    cleanup_on_start: bool = Field(
        True,
        description="Sweep expired entries once when the CLI starts",
    )


class EnrichmentSettings(BaseModel):
    """Streaming enrichment of seasonal listings."""

    mode: DeliveryMode = Field(DeliveryMode.PROGRESSIVE)
    max_workers: int = Field(
        10,
        ge=1,
        le=64,
        description="Maximum anime resolved concurrently",
    )


class StreamingSettings(BaseModel):
    """Streaming resolver behaviour."""

    expand_search_variations: bool = Field(
        False,
        description="Also search mechanical variations (no year, no 'Season N', ...)",
    )


class AppSettings(BaseSettings):
    """Root application settings with environment variable support.

    Environment variables use the prefix SEASON_STREAMS__ with nested delimiters:
    - SEASON_STREAMS__KITSU__TIMEOUT=8
    - SEASON_STREAMS__WATCHMODE__API_KEY=abc123
    - SEASON_STREAMS__ENRICHMENT__MAX_WORKERS=4

    Can also be configured via .env file in project root.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_prefix="SEASON_STREAMS__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jikan: JikanSettings = Field(default_factory=JikanSettings)
    kitsu: KitsuSettings = Field(default_factory=KitsuSettings)
    watchmode: WatchModeSettings = Field(default_factory=WatchModeSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    enrichment: EnrichmentSettings = Field(default_factory=EnrichmentSettings)
    streaming: StreamingSettings = Field(default_factory=StreamingSettings)


# Singleton instance - import and use throughout the app
settings = AppSettings()
