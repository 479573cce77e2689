"""Jikan (MyAnimeList mirror) seasonal listing client.

The listing fetch is the one call that is not resilience-wrapped: any failure
raises ListingFetchError so the caller can show an error and offer a retry.
"""

from typing import Any

import requests

from models.config import JikanSettings, settings
from models.models import AnimeRecord, Season
from utils.exceptions import ListingFetchError
from utils.logging import get_logger
from utils.rate_limiter import RateLimiter

logger = get_logger(__name__)


class JikanClient:
    """REST client for Jikan v4 season endpoints."""

    def __init__(
        self,
        config: JikanSettings | None = None,
        session: requests.Session | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        config = config or settings.jikan
        self.api_url = config.api_url.rstrip("/")
        self.timeout = config.timeout
        self.max_pages = config.max_pages
        self.rate_limiter = rate_limiter or RateLimiter(config.rate_limit_delay)
        self.session = session or requests.Session()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict:
        """Execute a rate-limited GET.

        Raises:
            ListingFetchError: On network errors, non-2xx status or invalid payload
        """
        self.rate_limiter.acquire()
        try:
            response = self.session.get(f"{self.api_url}{path}", params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise ListingFetchError(f"Jikan request to {path} failed: {e}") from e
        except ValueError as e:
            raise ListingFetchError(f"Jikan returned invalid JSON for {path}: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise ListingFetchError(f"Jikan returned an unexpected payload for {path}")
        return payload

    def _parse(self, items: list[dict]) -> list[AnimeRecord]:
        records = []
        for item in items:
            try:
                records.append(AnimeRecord.from_jikan(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Jikan: skipping malformed anime entry: {e}")
        return records

    def get_seasonal_anime(self, year: int, season: Season) -> list[AnimeRecord]:
        """Fetch every page of a season's listing.

        Pages are followed while ``pagination.has_next_page`` is set, up to
        ``max_pages``. Duplicates across pages are left for the caller to remove.

        Args:
            year: Season year
            season: Quarter-season

        Returns:
            Anime records in listing order, streaming platforms empty

        Raises:
            ListingFetchError: If any page cannot be fetched
        """
        season = Season(season)
        path = f"/seasons/{year}/{season.value}"
        records: list[AnimeRecord] = []
        page = 1
        while True:
            payload = self._get(path, params={"page": page})
            records.extend(self._parse(payload["data"]))

            pagination = payload.get("pagination") or {}
            if not pagination.get("has_next_page") or page >= self.max_pages:
                break
            page += 1

        logger.info(f"Jikan: {len(records)} anime for {season.value} {year} ({page} pages)")
        return records

    def get_current_season_anime(self) -> list[AnimeRecord]:
        """First page of the season currently airing."""
        return self._parse(self._get("/seasons/now")["data"])

    def get_upcoming_season_anime(self) -> list[AnimeRecord]:
        """First page of next season's announced anime."""
        return self._parse(self._get("/seasons/upcoming")["data"])

    def close(self) -> None:
        self.session.close()
