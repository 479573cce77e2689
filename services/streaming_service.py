"""Streaming-platform resolution for one anime at a time.

For each anime:
1. Build the ordered candidate titles (English first).
2. Ask each source in priority order; within a source, stop at the first
   title that yields a platform.
3. Later sources are only asked when every earlier one came back empty.

Per-source failures are logged and count as "nothing found", so the worst
outcome for an anime is ``success=False`` with no platforms.
"""

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from models.config import settings
from models.models import AnimeID, AnimeRecord, StreamingPlatform, StreamingResult
from services.streaming_sources import StreamingSource, default_sources
from utils.cache_manager import CacheStore, generate_cache_key
from utils.exceptions import SourceError
from utils.logging import get_logger
from utils.title_utils import extract_title_variations, get_all_search_terms

logger = get_logger(__name__)

NO_SOURCE = "none"


class StreamingResolver:
    """Multi-source streaming lookup with ordered fallback.

    Args:
        sources: Adapters in priority order (default: Kitsu, then WatchMode)
        cache: Optional cache for successful results
        expand_search_variations: Also try mechanical title variations
        max_workers: Bound for resolve_many()/resolve_progressive()
    """

    def __init__(
        self,
        sources: list[StreamingSource] | None = None,
        cache: CacheStore | None = None,
        expand_search_variations: bool | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.sources = sources if sources is not None else default_sources()
        self.cache = cache
        self.expand_search_variations = (
            settings.streaming.expand_search_variations
            if expand_search_variations is None
            else expand_search_variations
        )
        self.max_workers = max_workers or settings.enrichment.max_workers

    def search_terms(self, anime: AnimeRecord) -> list[str]:
        if self.expand_search_variations:
            return get_all_search_terms(anime)
        return extract_title_variations(anime)

    def _search_source(self, source: StreamingSource, terms: list[str]) -> list[StreamingPlatform]:
        """Try each term against one source; first non-empty answer wins."""
        for term in terms:
            try:
                platforms = source.search(term)
            except SourceError as e:
                logger.warning(f"{source.name} search failed for '{term}': {e}")
                continue
            if platforms:
                return platforms
        return []

    def resolve(self, anime: AnimeRecord) -> StreamingResult:
        """Find streaming platforms for one anime.

        Never raises for source failures and never mutates ``anime``.

        Args:
            anime: Anime record to look up

        Returns:
            StreamingResult; ``source`` names the adapter that answered or "none"
        """
        cache_key = generate_cache_key("streaming-anime", anime_id=anime.id)
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Streaming: cache hit for {anime.id}")
                return StreamingResult.model_validate(cached)

        terms = self.search_terms(anime)
        logger.info(f"Streaming search: '{terms[0] if terms else anime.title}' ({len(terms)} titles)")

        platforms: list[StreamingPlatform] = []
        answered_by = NO_SOURCE
        for source in self.sources:
            if not source.enabled:
                logger.debug(f"Streaming: skipping disabled source {source.name}")
                continue
            platforms = self._search_source(source, terms)
            if platforms:
                answered_by = source.name
                break

        result = StreamingResult(
            platforms=platforms,
            searched_terms=terms,
            source=answered_by,
            success=bool(platforms),
        )
        if result.success:
            logger.info(f"Streaming: {len(platforms)} platforms for {anime.id} via {answered_by}")
            if self.cache is not None:
                self.cache.set(cache_key, result.model_dump(mode="json"))
        else:
            logger.info(f"Streaming: no platforms for {anime.id} after {len(self.sources)} sources")
        return result

    def _resolve_isolated(self, anime: AnimeRecord) -> StreamingResult:
        """resolve() that turns any unexpected error into an empty result."""
        try:
            return self.resolve(anime)
        except Exception as e:  # per-anime isolation
            logger.exception(f"Streaming: resolution crashed for {anime.id}: {e}")
            return StreamingResult(searched_terms=[], source=NO_SOURCE, success=False)

    def resolve_many(self, anime_list: Iterable[AnimeRecord]) -> dict[AnimeID, StreamingResult]:
        """Resolve a batch concurrently (bounded by ``max_workers``)."""
        return self.resolve_progressive(anime_list)

    def resolve_progressive(
        self,
        anime_list: Iterable[AnimeRecord],
        on_item: Callable[[AnimeID, list[StreamingPlatform]], None] | None = None,
    ) -> dict[AnimeID, StreamingResult]:
        """Resolve a batch concurrently, reporting each anime as soon as it completes.

        Args:
            anime_list: Anime to resolve
            on_item: Called with (anime_id, platforms) per completed anime

        Returns:
            Results keyed by anime id
        """
        anime_list = list(anime_list)
        results: dict[AnimeID, StreamingResult] = {}
        if not anime_list:
            return results

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(anime_list))) as executor:
            futures = {executor.submit(self._resolve_isolated, anime): anime.id for anime in anime_list}
            for future in as_completed(futures):
                anime_id = futures[future]
                result = future.result()
                results[anime_id] = result
                if on_item is not None:
                    try:
                        on_item(anime_id, result.platforms)
                    except Exception as e:
                        logger.exception(f"Streaming: on_item callback failed for {anime_id}: {e}")
        return results

    def close(self) -> None:
        for source in self.sources:
            source.close()
