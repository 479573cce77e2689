import argparse
from sys import exit

from commands import list_season, manage_cache, resolve_title
from models.config import settings
from models.models import DeliveryMode, Season, SortKey
from ui.components import console
from utils.cache_manager import get_cache
from utils.exceptions import ListingFetchError
from utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="season-streams",
        description="Browse an anime season and where to stream it.",
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Verbose logging on the console")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List a season's anime with streaming platforms")
    list_parser.add_argument("--year", "-y", type=int, help="Season year (default: current)")
    list_parser.add_argument(
        "--season",
        "-s",
        choices=[s.value for s in Season],
        help="Quarter-season (default: current)",
    )
    list_parser.add_argument(
        "--mode",
        "-m",
        choices=[m.value for m in DeliveryMode],
        help="Enrichment delivery mode (default: from settings)",
    )
    list_parser.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortKey.RELEASE_DATE.value,
        help="Sort key (default: release-date)",
    )
    list_parser.add_argument("--desc", action="store_true", help="Sort descending")

    resolve_parser = subparsers.add_parser("resolve", help="Find streaming platforms for one title")
    resolve_parser.add_argument("title", help="Main title to search")
    resolve_parser.add_argument("--english", "-e", help="English title (searched first)")

    cache_parser = subparsers.add_parser("cache", help="Cache maintenance")
    cache_parser.add_argument(
        "action",
        nargs="?",
        default="stats",
        choices=["stats", "clear", "cleanup"],
        help="stats: show usage (default) | clear: drop everything | cleanup: drop expired entries",
    )

    return parser


def cli(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch a subcommand; returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(debug=args.debug)

    if args.command is None:
        parser.print_help()
        return 0

    if settings.cache.cleanup_on_start and not (args.command == "cache" and args.action == "clear"):
        removed = get_cache().cleanup()
        if removed:
            logger.info(f"Startup cleanup removed {removed} expired cache entries")

    try:
        if args.command == "list":
            return list_season(args)
        if args.command == "resolve":
            return resolve_title(args)
        return manage_cache(args)
    except ListingFetchError as e:
        logger.error(f"Listing fetch failed: {e}")
        console.print(f"[error]❌ Could not load the season listing: {e}[/error]")
        console.print("[menu.muted]Check your connection and run the command again to retry.[/menu.muted]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[warning]Interrupted[/warning]")
        return 130


if __name__ == "__main__":
    exit(cli())
