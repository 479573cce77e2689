"""Seasonal listing command handler.

This module handles:
- Resolving the requested season (defaults to the one airing now)
- Fetching the listing and enriching it in the chosen delivery mode
- Rendering the table and progressive per-anime updates
"""

from models.config import settings
from models.models import AnimeID, DeliveryMode, Season, SortKey, SortOrder, StreamingPlatform
from services.anime_service import AnimeDataAggregator, sort_anime
from ui.components import anime_table, console, loading, platform_summary
from utils.seasons import SEASON_EMOJI, get_current_season_info, season_display_name


def list_season(args, aggregator: AnimeDataAggregator | None = None) -> int:
    """Print a season's anime with their streaming platforms.

    Raises:
        ListingFetchError: When the listing cannot be fetched (handled by main)
    """
    current = get_current_season_info()
    season = Season(args.season) if args.season else current.season
    year = args.year or current.year
    mode = DeliveryMode(args.mode) if args.mode else settings.enrichment.mode
    title = f"{SEASON_EMOJI[season]} {season_display_name(season, year)}"

    aggregator = aggregator or AnimeDataAggregator()
    try:
        with loading(f"Fetching {season_display_name(season, year)}..."):
            listing = aggregator.fetch_listing(year, season)
        titles = {anime.id: anime.title_english or anime.title for anime in listing}

        def on_item(anime_id: AnimeID, platforms: list[StreamingPlatform]) -> None:
            console.print(f"  [menu.text]{titles.get(anime_id, anime_id)}[/menu.text]: {platform_summary(platforms)}")

        if mode == DeliveryMode.PROGRESSIVE:
            console.print(f"[info]Resolving streaming for {len(listing)} anime...[/info]")
            result = aggregator.fetch_seasonal_anime(year, season, mode=mode, on_item=on_item, listing=listing).wait()
        elif mode == DeliveryMode.TWO_PHASE:
            season_listing = aggregator.fetch_seasonal_anime(year, season, mode=mode, listing=listing)
            console.print(anime_table(season_listing.anime, title=f"{title} (resolving streaming...)"))
            with loading("Resolving streaming platforms..."):
                result = season_listing.wait()
        else:
            with loading("Resolving streaming platforms..."):
                result = aggregator.fetch_seasonal_anime(year, season, mode=mode, listing=listing).wait()
    finally:
        aggregator.close()

    result = sort_anime(result, key=SortKey(args.sort), order=SortOrder.DESC if args.desc else SortOrder.ASC)
    console.print(anime_table(result, title=title))
    found = sum(1 for anime in result if anime.streaming_platforms)
    console.print(f"[success]{found}[/success] of {len(result)} anime have streaming links")
    return 0
