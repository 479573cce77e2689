"""Streaming-link source adapters.

Each adapter answers one question: ``search(title) -> list[StreamingPlatform]``.
The resolver iterates adapters in priority order, so adding a source means
adding a subclass, not touching the resolver.

Adapters:
- KitsuSource: Kitsu JSON:API, streaming links included with the anime match
- WatchModeSource: WatchMode REST, title search then per-title sources

Adapters raise SourceError for transport and payload failures; they do not
decide whether a failure is fatal.
"""

from abc import ABC, abstractmethod
from typing import Any

import requests

from models.config import KitsuSettings, WatchModeSettings, settings
from models.models import Confidence, StreamingPlatform
from utils.exceptions import SourceError
from utils.fuzzy_matcher import find_best_match
from utils.logging import get_logger
from utils.platforms import UNKNOWN_PLATFORM, lookup_platform, platform_name_from_url
from utils.rate_limiter import RateLimiter

logger = get_logger(__name__)

USER_AGENT = "season-streams/1.0 (+https://github.com/season-streams/season-streams)"


def dedupe_platforms(platforms: list[StreamingPlatform]) -> list[StreamingPlatform]:
    """Drop unknown platforms and repeated names, keeping the first link per name."""
    seen: set[str] = set()
    unique = []
    for platform in platforms:
        if platform.name == UNKNOWN_PLATFORM or platform.name in seen:
            continue
        seen.add(platform.name)
        unique.append(platform)
    return unique


class StreamingSource(ABC):
    """Base class for streaming-link sources.

    Subclasses set ``name``/``confidence`` and implement search().
    The base class handles the HTTP session, timeouts, rate limiting and
    turning transport errors into SourceError.
    """

    name: str = "base"
    confidence: Confidence = Confidence.LOW
    headers: dict[str, str] = {"Accept": "application/json"}

    def __init__(
        self,
        base_url: str,
        timeout: float,
        rate_limiter: RateLimiter,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.rate_limiter = rate_limiter
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    @property
    def enabled(self) -> bool:
        """False when the source is missing required configuration."""
        return True

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Rate-limited GET returning decoded JSON.

        Raises:
            SourceError: On network errors, non-2xx responses or invalid JSON
        """
        self.rate_limiter.acquire()
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise SourceError(self.name, f"request to {path} failed: {e}") from e
        except ValueError as e:
            raise SourceError(self.name, f"invalid JSON from {path}: {e}") from e

    def _platform(self, url: str, fallback_name: str | None = None) -> StreamingPlatform:
        name = platform_name_from_url(url)
        # Prefer the source's own label over a guessed host label
        if name != UNKNOWN_PLATFORM and fallback_name and lookup_platform(url) is None:
            name = fallback_name
        return StreamingPlatform(name=name, url=url, confidence=self.confidence, source=self.name)

    @abstractmethod
    def search(self, title: str) -> list[StreamingPlatform]:
        """Find streaming platforms for one title.

        Returns:
            Normalized, de-duplicated platforms (empty when nothing matched)

        Raises:
            SourceError: When the source cannot be queried
        """

    def close(self) -> None:
        self.session.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}', enabled={self.enabled})>"


class KitsuSource(StreamingSource):
    """Kitsu.io streaming links (primary source).

    One request per title: the best text match plus its ``streamingLinks``
    relationship, included in the same JSON:API document.
    """

    name = "Kitsu"
    confidence = Confidence.HIGH
    headers = {"Accept": "application/vnd.api+json"}

    def __init__(
        self,
        config: KitsuSettings | None = None,
        session: requests.Session | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        config = config or settings.kitsu
        super().__init__(
            base_url=config.api_url,
            timeout=config.timeout,
            rate_limiter=rate_limiter or RateLimiter(config.rate_limit_delay),
            session=session,
        )

    def search(self, title: str) -> list[StreamingPlatform]:
        logger.debug(f"Kitsu: searching for '{title}'")
        payload = self._get(
            "/anime",
            params={
                "filter[text]": title,
                "include": "streamingLinks",
                "page[limit]": 1,
            },
        )
        if not isinstance(payload, dict) or not payload.get("data"):
            logger.debug(f"Kitsu: no match for '{title}'")
            return []

        platforms = []
        for item in payload.get("included") or []:
            if not isinstance(item, dict) or item.get("type") != "streamingLinks":
                continue
            url = (item.get("attributes") or {}).get("url")
            if url:
                platforms.append(self._platform(url))

        platforms = dedupe_platforms(platforms)
        logger.debug(f"Kitsu: {len(platforms)} platforms for '{title}'")
        return platforms


class WatchModeSource(StreamingSource):
    """WatchMode streaming sources (fallback).

    Two requests per title: a name search, then the sources of the best
    matching TV title. Disabled when no API key is configured.
    """

    name = "WatchMode"
    confidence = Confidence.MEDIUM

    def __init__(
        self,
        config: WatchModeSettings | None = None,
        session: requests.Session | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        config = config or settings.watchmode
        super().__init__(
            base_url=config.api_url,
            timeout=config.timeout,
            rate_limiter=rate_limiter or RateLimiter(config.rate_limit_delay),
            session=session,
        )
        self.api_key = config.api_key
        self.region = config.region
        self.min_confidence = config.min_confidence

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def search(self, title: str) -> list[StreamingPlatform]:
        if not self.enabled:
            raise SourceError(self.name, "no API key configured")

        logger.debug(f"WatchMode: searching for '{title}'")
        payload = self._get(
            "/search/",
            params={
                "apiKey": self.api_key,
                "search_field": "name",
                "search_value": title,
                "types": "tv",
            },
        )
        results = payload.get("title_results") if isinstance(payload, dict) else None
        candidates = [r for r in results or [] if isinstance(r, dict) and r.get("name") and r.get("id")]
        if not candidates:
            logger.debug(f"WatchMode: no match for '{title}'")
            return []

        best = find_best_match(title, [c["name"] for c in candidates], min_confidence=self.min_confidence)
        if best is None:
            logger.debug(f"WatchMode: no candidate for '{title}' reached {self.min_confidence.value} confidence")
            return []
        show = next(c for c in candidates if c["name"] == best.title)
        logger.debug(f"WatchMode: matched '{show['name']}' (id {show['id']}, score {best.result.score:.2f})")

        sources = self._get(
            f"/title/{show['id']}/sources/",
            params={"apiKey": self.api_key, "regions": self.region},
        )
        platforms = []
        for source in sources if isinstance(sources, list) else []:
            url = source.get("web_url") if isinstance(source, dict) else None
            if url:
                platforms.append(self._platform(url, fallback_name=source.get("name")))

        platforms = dedupe_platforms(platforms)
        logger.debug(f"WatchMode: {len(platforms)} platforms for '{title}'")
        return platforms


def default_sources(session: requests.Session | None = None) -> list[StreamingSource]:
    """Configured sources in priority order: Kitsu, then WatchMode."""
    return [KitsuSource(session=session), WatchModeSource(session=session)]
