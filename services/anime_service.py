"""Anime service layer - seasonal listings enriched with streaming platforms.

This module contains the business logic for:
- Fetching a season's listing (with cache)
- De-duplicating and sorting anime
- Enriching anime with streaming platforms (eager, two-phase or progressive)
- Cache administration

Used by: main.py, commands
"""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from models.config import settings
from models.models import (
    AnimeID,
    AnimeRecord,
    CacheStats,
    DeliveryMode,
    Season,
    SortKey,
    SortOrder,
    StreamingPlatform,
)
from services.jikan_client import JikanClient
from services.streaming_service import StreamingResolver
from utils.cache_manager import CacheStore, generate_cache_key, get_cache
from utils.logging import get_logger

logger = get_logger(__name__)

OnItem = Callable[[AnimeID, list[StreamingPlatform]], None]
OnComplete = Callable[[list[AnimeRecord]], None]


def dedupe_anime(anime_list: list[AnimeRecord]) -> list[AnimeRecord]:
    """Remove repeated ids, keeping the first occurrence."""
    seen: set[AnimeID] = set()
    unique = []
    for anime in anime_list:
        if anime.id in seen:
            continue
        seen.add(anime.id)
        unique.append(anime)
    return unique


_SORT_VALUES = {
    SortKey.NAME: lambda a: (a.title_english or a.title).casefold(),
    SortKey.RELEASE_DATE: lambda a: a.aired_from,
    SortKey.RATING: lambda a: a.score,
}


def sort_anime(
    anime_list: list[AnimeRecord],
    key: SortKey = SortKey.RELEASE_DATE,
    order: SortOrder = SortOrder.ASC,
) -> list[AnimeRecord]:
    """Return a new list sorted by ``key``.

    Anime without a value for ``key`` (no air date, no score) go last in
    either order. The sort is stable.
    """
    value_of = _SORT_VALUES[SortKey(key)]
    with_value = [a for a in anime_list if value_of(a) is not None]
    without_value = [a for a in anime_list if value_of(a) is None]
    with_value.sort(key=value_of, reverse=SortOrder(order) == SortOrder.DESC)
    return with_value + without_value


def with_platforms(anime: AnimeRecord, platforms: list[StreamingPlatform]) -> AnimeRecord:
    """Copy of ``anime`` with its streaming platforms replaced."""
    return anime.model_copy(update={"streaming_platforms": list(platforms)})


class SeasonListing:
    """A season's anime plus the state of their streaming enrichment.

    ``anime`` is always de-duplicated and sorted by air date. In eager mode
    it is already enriched; otherwise it is replaced with the enriched list
    once background enrichment finishes.
    """

    def __init__(self, anime: list[AnimeRecord], enrichment: Future | None = None) -> None:
        self.anime = anime
        self.enrichment = enrichment

    @property
    def done(self) -> bool:
        return self.enrichment is None or self.enrichment.done()

    def wait(self, timeout: float | None = None) -> list[AnimeRecord]:
        """Block until enrichment finishes and return the enriched list."""
        if self.enrichment is not None:
            self.anime = self.enrichment.result(timeout=timeout)
        return self.anime

    def __len__(self) -> int:
        return len(self.anime)


class AnimeDataAggregator:
    """Combines seasonal listings with streaming resolution.

    Args:
        client: Seasonal listing client
        resolver: Streaming resolver
        cache: Cache store for listings and per-season platform batches
    """

    def __init__(
        self,
        client: JikanClient | None = None,
        resolver: StreamingResolver | None = None,
        cache: CacheStore | None = None,
    ) -> None:
        self.cache = cache or get_cache()
        self.client = client or JikanClient()
        self.resolver = resolver or StreamingResolver(cache=self.cache)
        self._background = ThreadPoolExecutor(max_workers=1, thread_name_prefix="enrichment")

    # ---- listing -----------------------------------------------------------

    def fetch_listing(self, year: int, season: Season) -> list[AnimeRecord]:
        """Fetch a season's anime without streaming data.

        Raises:
            ListingFetchError: When the listing source fails (not cached)
        """
        key = generate_cache_key("anime-basic", season=Season(season), year=year)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Listing: cache hit for {key}")
            records = [AnimeRecord.model_validate(item) for item in cached]
        else:
            records = self.client.get_seasonal_anime(year, season)
            self.cache.set(key, [r.model_dump(mode="json") for r in records])
        return sort_anime(dedupe_anime(records))

    # ---- enrichment --------------------------------------------------------

    def enrich(self, anime_list: list[AnimeRecord], on_item: OnItem | None = None) -> list[AnimeRecord]:
        """Resolve streaming for every anime and return a new, re-sorted list.

        Args:
            anime_list: Anime to enrich (not modified)
            on_item: Called with (anime_id, platforms) as each anime completes

        Returns:
            Enriched anime sorted by air date
        """
        results = self.resolver.resolve_progressive(anime_list, on_item=on_item)
        enriched = [
            with_platforms(anime, results[anime.id].platforms) if anime.id in results else anime
            for anime in anime_list
        ]
        return sort_anime(enriched)

    def _apply_cached_batch(self, key: str, anime_list: list[AnimeRecord]) -> tuple[list[AnimeRecord], list[AnimeRecord]]:
        """Split into (anime with cached platforms applied, anime still to resolve)."""
        batch = self.cache.get(key) or {}
        ready, pending = [], []
        for anime in anime_list:
            platforms = batch.get(str(anime.id))
            if platforms:
                ready.append(with_platforms(anime, [StreamingPlatform.model_validate(p) for p in platforms]))
            else:
                pending.append(anime)
        return ready, pending

    def _store_batch(self, key: str, anime_list: list[AnimeRecord]) -> None:
        batch = {
            str(anime.id): [p.model_dump(mode="json") for p in anime.streaming_platforms]
            for anime in anime_list
            if anime.streaming_platforms
        }
        if batch:
            self.cache.set(key, batch)

    def fetch_seasonal_anime(
        self,
        year: int,
        season: Season,
        mode: DeliveryMode | None = None,
        on_item: OnItem | None = None,
        on_complete: OnComplete | None = None,
        listing: list[AnimeRecord] | None = None,
    ) -> SeasonListing:
        """Fetch a season and enrich it with streaming platforms.

        Modes:
            eager: resolve everything before returning
            two-phase: return the bare list now, replace it when all anime resolve
            progressive: return the bare list now, call ``on_item`` per anime

        Args:
            year: Season year
            season: Quarter-season
            mode: Delivery mode (default from settings)
            on_item: Progressive per-anime callback (anime_id, platforms)
            on_complete: Called once with the enriched, sorted list
            listing: Season listing already fetched by the caller (skips fetch_listing)

        Returns:
            SeasonListing (call ``wait()`` for the enriched list)

        Raises:
            ListingFetchError: When the listing cannot be fetched
        """
        mode = DeliveryMode(mode or settings.enrichment.mode)
        anime_list = listing if listing is not None else self.fetch_listing(year, season)
        batch_key = generate_cache_key("streaming-batch", season=Season(season), year=year)
        ready, pending = self._apply_cached_batch(batch_key, anime_list)

        if ready:
            logger.info(f"Streaming batch cache: {len(ready)} of {len(anime_list)} anime already resolved")
            if on_item is not None and mode == DeliveryMode.PROGRESSIVE:
                for anime in ready:
                    on_item(anime.id, anime.streaming_platforms)

        def run() -> list[AnimeRecord]:
            enriched = self.enrich(pending, on_item if mode == DeliveryMode.PROGRESSIVE else None)
            full = sort_anime(ready + enriched)
            self._store_batch(batch_key, full)
            if on_complete is not None:
                try:
                    on_complete(full)
                except Exception as e:
                    logger.exception(f"on_complete callback failed: {e}")
            return full

        if mode == DeliveryMode.EAGER or not pending:
            return SeasonListing(run())

        logger.info(f"Enriching {len(pending)} anime in the background ({mode.value})")
        season_listing = SeasonListing(sort_anime(ready + pending))

        def replace_list(future: Future) -> None:
            if not future.cancelled() and future.exception() is None:
                season_listing.anime = future.result()

        season_listing.enrichment = self._background.submit(run)
        season_listing.enrichment.add_done_callback(replace_list)
        return season_listing

    # ---- cache admin ---------------------------------------------------------

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cache_stats(self) -> CacheStats:
        return self.cache.get_stats()

    def close(self) -> None:
        self._background.shutdown(wait=True)
        self.resolver.close()
        self.client.close()
