"""Cache administration command handler."""

from ui.components import cache_stats_table, console
from utils.cache_manager import CacheStore, get_cache


def manage_cache(args, cache: CacheStore | None = None) -> int:
    """Handle ``cache stats|clear|cleanup``."""
    cache = cache or get_cache()

    if args.action == "clear":
        cache.clear()
        console.print("[success]✅ Cache cleared[/success]")
    elif args.action == "cleanup":
        removed = cache.cleanup()
        console.print(f"[success]✅ Removed {removed} expired entries[/success]")
    else:
        console.print(cache_stats_table(cache.get_stats()))
    return 0
