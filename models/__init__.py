"""Data models and configuration.

Pydantic models and configuration:
- models: Anime, streaming, matching and cache data models
- config: Centralized configuration (Pydantic Settings)
"""

from models.models import (
    AnimeRecord,
    CacheStats,
    Confidence,
    DeliveryMode,
    MatchResult,
    Season,
    StreamingPlatform,
    StreamingResult,
)
from models.config import settings, get_data_path

__all__ = [
    "AnimeRecord",
    "CacheStats",
    "Confidence",
    "DeliveryMode",
    "MatchResult",
    "Season",
    "StreamingPlatform",
    "StreamingResult",
    "settings",
    "get_data_path",
]
