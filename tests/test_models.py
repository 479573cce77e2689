"""
Tests for models/models.py

Coverage:
- AnimeRecord validation and Jikan parsing
- StreamingPlatform / StreamingResult defaults
- CacheEntry expiry boundary
- Invalid data raises validation errors
"""

from datetime import date

import pytest
from pydantic import ValidationError

from models.models import (
    AnimeRecord,
    CacheEntry,
    CacheStats,
    Confidence,
    MatchResult,
    Season,
    StreamingPlatform,
    StreamingResult,
)


class TestAnimeRecord:
    """Test AnimeRecord model."""

    def test_create_minimal_anime(self):
        """Should create record with only id and title."""
        anime = AnimeRecord(id=1, title="Dandadan")
        assert anime.title == "Dandadan"
        assert anime.synonyms == []
        assert anime.streaming_platforms == []
        assert anime.aired_from is None

    def test_title_empty_string_invalid(self):
        """Should reject empty title."""
        with pytest.raises(ValidationError):
            AnimeRecord(id=1, title="")

    def test_score_out_of_range_invalid(self):
        """Should reject scores above 10."""
        with pytest.raises(ValidationError):
            AnimeRecord(id=1, title="Dandadan", score=11)

    def test_aired_from_accepts_iso_datetime(self):
        """Should keep only the date part of Jikan's ISO datetime."""
        anime = AnimeRecord(id=1, title="Dandadan", aired_from="2024-10-04T00:00:00+00:00")
        assert anime.aired_from == date(2024, 10, 4)

    def test_aired_from_empty_string_is_none(self):
        anime = AnimeRecord(id=1, title="Dandadan", aired_from="")
        assert anime.aired_from is None

    def test_season_is_lowercased(self):
        anime = AnimeRecord(id=1, title="Dandadan", season="Fall")
        assert anime.season == Season.FALL


class TestFromJikan:
    """Test AnimeRecord.from_jikan()."""

    def test_parses_core_fields(self, raw_frieren):
        anime = AnimeRecord.from_jikan(raw_frieren)
        assert anime.id == 52991
        assert anime.title == "Sousou no Frieren"
        assert anime.title_english == "Frieren: Beyond Journey's End"
        assert anime.title_japanese == "葬送のフリーレン"
        assert anime.aired_from == date(2023, 9, 29)
        assert anime.score == 9.31
        assert anime.season == Season.FALL
        assert anime.year == 2023
        assert anime.url == "https://myanimelist.net/anime/52991"
        assert anime.image_url.endswith("52991l.jpg")

    def test_parses_genres(self, raw_frieren):
        anime = AnimeRecord.from_jikan(raw_frieren)
        assert [(g.id, g.name) for g in anime.genres] == [(2, "Adventure"), (8, "Drama")]

    def test_synonyms_merge_titles_array(self, raw_frieren):
        """Should add titles[] entries not already known, after title_synonyms."""
        anime = AnimeRecord.from_jikan(raw_frieren)
        assert anime.synonyms == ["Frieren at the Funeral", "Frieren - Nach dem Ende der Reise"]

    def test_missing_optional_fields(self):
        """Should tolerate a bare entry."""
        anime = AnimeRecord.from_jikan({"mal_id": 5, "title": "Cowboy Bebop"})
        assert anime.aired_from is None
        assert anime.genres == []
        assert anime.image_url is None

    def test_missing_title_raises(self):
        with pytest.raises(ValidationError):
            AnimeRecord.from_jikan({"mal_id": 5, "title": ""})


class TestStreamingModels:
    """Test StreamingPlatform and StreamingResult."""

    def test_platform_optional_fields(self):
        platform = StreamingPlatform(name="Crunchyroll", url="https://www.crunchyroll.com/x")
        assert platform.confidence is None
        assert platform.source is None

    def test_platform_url_required(self):
        with pytest.raises(ValidationError):
            StreamingPlatform(name="Crunchyroll", url="")

    def test_result_defaults(self):
        result = StreamingResult()
        assert result.platforms == []
        assert result.source == "none"
        assert result.success is False

    def test_result_round_trips_through_json_dump(self):
        result = StreamingResult(
            platforms=[StreamingPlatform(name="Hulu", url="https://www.hulu.com/x", confidence=Confidence.MEDIUM)],
            searched_terms=["Frieren"],
            source="WatchMode",
            success=True,
        )
        assert StreamingResult.model_validate(result.model_dump(mode="json")) == result


class TestMatchResult:
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            MatchResult(score=1.5, confidence=Confidence.HIGH, method="exact")


class TestCacheEntry:
    """Test CacheEntry expiry."""

    def test_not_expired_before_ttl(self):
        entry = CacheEntry(key="k", data=1, timestamp=100.0, ttl=10, version="1.0.0")
        assert entry.is_expired(109.9) is False

    def test_expired_exactly_at_ttl(self):
        entry = CacheEntry(key="k", data=1, timestamp=100.0, ttl=10, version="1.0.0")
        assert entry.is_expired(110.0) is True

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError):
            CacheEntry(key="k", data=1, timestamp=0, ttl=0, version="1.0.0")

    def test_stats_defaults(self):
        assert CacheStats() == CacheStats(total_entries=0, expired_entries=0, total_size=0)
