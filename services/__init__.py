"""Business logic services layer.

Core services for season-streams:
- jikan_client: Seasonal anime listings (Jikan / MyAnimeList)
- streaming_sources: Kitsu and WatchMode streaming-link adapters
- streaming_service: Multi-source streaming resolution with fallback
- anime_service: Seasonal listing + streaming enrichment aggregator
"""

from services import anime_service, jikan_client, streaming_service, streaming_sources

__all__ = [
    "anime_service",
    "jikan_client",
    "streaming_service",
    "streaming_sources",
]
