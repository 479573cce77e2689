"""Utilities and helper functions.

Consolidated utilities:
- title_utils: Title variations for streaming searches
- fuzzy_matcher: Title similarity scoring and best-match selection
- platforms: URL to streaming-platform name normalization
- rate_limiter: Thread-safe minimum-interval throttle
- cache_manager: Versioned, TTL-based persistent cache
- seasons: Quarter-season helpers
"""

from utils import (
    cache_manager,
    fuzzy_matcher,
    platforms,
    rate_limiter,
    seasons,
    title_utils,
)
from utils.fuzzy_matcher import calculate_similarity, find_best_match

__all__ = [
    "cache_manager",
    "fuzzy_matcher",
    "platforms",
    "rate_limiter",
    "seasons",
    "title_utils",
    "calculate_similarity",
    "find_best_match",
]
