"""Command handlers for the season-streams CLI.

Each module handles one subcommand:
- season.py: Seasonal listing with streaming platforms
- resolve.py: Streaming lookup for a single title
- cache.py: Cache statistics and maintenance
"""

from commands.cache import manage_cache
from commands.resolve import resolve_title
from commands.season import list_season

__all__ = ["list_season", "manage_cache", "resolve_title"]
