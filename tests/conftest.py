"""
Shared test fixtures and configuration for the season-streams test suite.

This module provides:
- Deterministic clocks for cache and rate limiter tests
- Isolated on-disk cache stores
- Sample data fixtures (raw Jikan entries, anime records, API payloads)
- Fake streaming sources (no network)
"""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

from models.models import AnimeRecord, Confidence, StreamingPlatform
from services.streaming_sources import StreamingSource
from utils.cache_manager import CacheStore
from utils.exceptions import SourceError
from utils.rate_limiter import RateLimiter


# ========== Clock Fixtures ==========


class FakeClock:
    """Manually advanced clock; also usable as a sleep function."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Fresh FakeClock."""
    return FakeClock()


# ========== Cache Fixtures ==========


@pytest.fixture
def temp_cache_dir():
    """Temporary cache directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def cache_store(temp_cache_dir, fake_clock):
    """CacheStore in a temp directory driven by fake_clock."""
    store = CacheStore(temp_cache_dir, default_ttl=3600, default_version="1.0.0", clock=fake_clock)
    yield store
    store.close()


# ========== Sample Data Fixtures ==========


def make_raw_anime(mal_id: int, title: str, aired: str | None = None, **extra) -> dict:
    """Raw Jikan v4 anime object with the fields the client reads."""
    raw = {
        "mal_id": mal_id,
        "url": f"https://myanimelist.net/anime/{mal_id}",
        "title": title,
        "title_english": None,
        "title_japanese": None,
        "title_synonyms": [],
        "aired": {"from": aired},
        "score": None,
        "genres": [],
        "season": "winter",
        "year": 2024,
        "synopsis": None,
        "images": {"jpg": {"large_image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}l.jpg"}},
    }
    raw.update(extra)
    return raw


@pytest.fixture
def raw_frieren():
    """Realistic Jikan entry for Frieren."""
    return make_raw_anime(
        52991,
        "Sousou no Frieren",
        aired="2023-09-29T00:00:00+00:00",
        title_english="Frieren: Beyond Journey's End",
        title_japanese="葬送のフリーレン",
        title_synonyms=["Frieren at the Funeral"],
        titles=[
            {"type": "Default", "title": "Sousou no Frieren"},
            {"type": "German", "title": "Frieren - Nach dem Ende der Reise"},
        ],
        score=9.31,
        genres=[
            {"mal_id": 2, "type": "anime", "name": "Adventure"},
            {"mal_id": 8, "type": "anime", "name": "Drama"},
        ],
        season="Fall",
        year=2023,
    )


@pytest.fixture
def winter_2024_raw():
    """Three Winter 2024 entries out of air-date order."""
    return [
        make_raw_anime(1, "Sousou no Frieren", aired="2024-01-10T00:00:00+00:00", score=9.1),
        make_raw_anime(2, "Dungeon Meshi", aired="2024-04-03T00:00:00+00:00", score=8.6),
        make_raw_anime(3, "Ore dake Level Up na Ken", aired="2024-02-01T00:00:00+00:00", score=8.3),
    ]


@pytest.fixture
def sample_anime_attack_on_titan():
    """Anime record with romanized, English and Japanese titles."""
    return AnimeRecord(
        id=16498,
        title="Shingeki no Kyojin",
        title_english="Attack on Titan",
        title_japanese="進撃の巨人",
        synonyms=["AoT", "SnK"],
    )


def crunchyroll(url: str = "https://www.crunchyroll.com/series/GY5P48XEY") -> StreamingPlatform:
    return StreamingPlatform(name="Crunchyroll", url=url, confidence=Confidence.HIGH, source="Kitsu")


# ========== Fake Sources ==========


class FakeSource(StreamingSource):
    """In-memory streaming source.

    Args:
        name: Adapter name
        results: title -> platforms; titles not listed return []
        errors: titles that raise SourceError
        enabled: value for the enabled property
    """

    def __init__(self, name: str, results=None, errors=(), enabled: bool = True):
        super().__init__(
            base_url="https://example.invalid",
            timeout=1,
            rate_limiter=RateLimiter(0),
            session=Mock(),
        )
        self.name = name
        self.results = results or {}
        self.errors = set(errors)
        self._enabled = enabled
        self.calls: list[str] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    def search(self, title: str) -> list[StreamingPlatform]:
        self.calls.append(title)
        if title in self.errors:
            raise SourceError(self.name, f"boom for {title}")
        return list(self.results.get(title, []))


@pytest.fixture
def make_source():
    """Factory for FakeSource instances."""
    return FakeSource


# ========== Mock HTTP Fixtures ==========


def json_response(payload, status: int = 200) -> Mock:
    """Mock requests.Response returning ``payload`` from .json()."""
    response = Mock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_session():
    """Mock requests.Session with a real headers dict."""
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def kitsu_payload():
    """Kitsu JSON:API document with included streaming links."""
    return {
        "data": [{"id": "46474", "type": "anime", "attributes": {"canonicalTitle": "Sousou no Frieren"}}],
        "included": [
            {
                "id": "1",
                "type": "streamingLinks",
                "attributes": {"url": "https://www.crunchyroll.com/series/GG5H5XQX4/frieren"},
            },
            {
                "id": "2",
                "type": "streamingLinks",
                "attributes": {"url": "http://www.crunchyroll.com/frieren-beyond-journeys-end"},
            },
            {"id": "3", "type": "streamers", "attributes": {"siteName": "Crunchyroll"}},
            {
                "id": "4",
                "type": "streamingLinks",
                "attributes": {"url": "https://www.netflix.com/title/81726714"},
            },
        ],
    }
