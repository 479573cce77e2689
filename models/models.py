"""Pydantic data models for structured data transfer.

Defines DTOs (Data Transfer Objects) for:
- AnimeRecord: One anime from a seasonal listing, with its streaming platforms
- StreamingPlatform: A named service plus deep link
- MatchResult / BestMatch: Fuzzy title comparison results
- StreamingResult: Outcome of resolving one anime's platforms
- CacheEntry / CacheStats: Cache store records and statistics
- Season / SeasonInfo: Quarter-season identifiers
"""

from datetime import date
from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, Field, field_validator

# Type aliases for common patterns
AnimeID: TypeAlias = int
PlatformName: TypeAlias = str
CacheKey: TypeAlias = str
TimestampSeconds: TypeAlias = float


class Confidence(str, Enum):
    """Coarse bucket summarizing a continuous match score."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Season(str, Enum):
    """Anime quarter-season."""

    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


class DeliveryMode(str, Enum):
    """How streaming enrichment is delivered to the caller."""

    EAGER = "eager"
    TWO_PHASE = "two-phase"
    PROGRESSIVE = "progressive"


class SortKey(str, Enum):
    NAME = "name"
    RELEASE_DATE = "release-date"
    RATING = "rating"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Genre(BaseModel):
    """Genre tag attached to an anime."""

    id: int = Field(..., description="Genre id in the listing source")
    name: str = Field(..., min_length=1, description="Genre name")


class StreamingPlatform(BaseModel):
    """Streaming service where an anime can be watched.

    Attributes:
        name: Canonical platform label (e.g. "Crunchyroll")
        url: Deep link from the source
        confidence: How sure the source is about this link
        source: Name of the adapter that produced it (e.g. "Kitsu")
    """

    name: PlatformName = Field(..., min_length=1, description="Canonical platform name")
    url: str = Field(..., min_length=1, description="Deep link to the title")
    confidence: Confidence | None = Field(None, description="Match confidence tier")
    source: str | None = Field(None, description="Source adapter that found it")


class AnimeRecord(BaseModel):
    """One anime from a seasonal listing.

    Attributes:
        id: Primary source key (MyAnimeList id)
        title: Main (usually romanized) title
        title_english: Optional English title
        title_japanese: Optional Japanese title
        synonyms: Alternate titles
        aired_from: First air date
        score: Community score (0-10)
        genres: Genre tags
        streaming_platforms: Filled in by the streaming resolver
    """

    id: AnimeID = Field(..., description="MyAnimeList id")
    title: str = Field(..., min_length=1, description="Main title")
    title_english: str | None = Field(None, description="English title")
    title_japanese: str | None = Field(None, description="Japanese title")
    synonyms: list[str] = Field(default_factory=list, description="Alternate titles")
    aired_from: date | None = Field(None, description="First air date")
    score: float | None = Field(None, ge=0, le=10, description="Community score")
    genres: list[Genre] = Field(default_factory=list)
    streaming_platforms: list[StreamingPlatform] = Field(default_factory=list)

    season: Season | None = Field(None)
    year: int | None = Field(None, ge=1900, le=2100)
    synopsis: str | None = Field(None)
    image_url: str | None = Field(None)
    url: str | None = Field(None, description="MyAnimeList page")

    @field_validator("aired_from", mode="before")
    @classmethod
    def parse_aired_from(cls, v: Any) -> Any:
        """Accept Jikan's ISO datetime ("2024-01-10T00:00:00+00:00") by keeping the date part."""
        if isinstance(v, str):
            return v[:10] if v else None
        return v

    @field_validator("season", mode="before")
    @classmethod
    def normalize_season(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower() or None
        return v

    @classmethod
    def from_jikan(cls, raw: dict[str, Any]) -> "AnimeRecord":
        """Build a record from a raw Jikan v4 anime object.

        Synonyms come from ``title_synonyms`` plus any entry of the newer
        ``titles`` array not already covered by the main/English/Japanese titles.
        """
        known = {raw.get("title"), raw.get("title_english"), raw.get("title_japanese")}
        synonyms: list[str] = []
        for synonym in raw.get("title_synonyms") or []:
            if synonym and synonym not in synonyms:
                synonyms.append(synonym)
        for entry in raw.get("titles") or []:
            title = entry.get("title") if isinstance(entry, dict) else None
            if title and title not in known and title not in synonyms:
                synonyms.append(title)

        images = (raw.get("images") or {}).get("jpg") or {}

        return cls(
            id=raw["mal_id"],
            title=raw["title"],
            title_english=raw.get("title_english"),
            title_japanese=raw.get("title_japanese"),
            synonyms=synonyms,
            aired_from=(raw.get("aired") or {}).get("from"),
            score=raw.get("score"),
            genres=[
                Genre(id=g["mal_id"], name=g["name"])
                for g in raw.get("genres") or []
                if g.get("name")
            ],
            season=raw.get("season"),
            year=raw.get("year"),
            synopsis=raw.get("synopsis"),
            image_url=images.get("large_image_url") or images.get("image_url"),
            url=raw.get("url"),
        )


class MatchResult(BaseModel):
    """Similarity between two titles.

    Attributes:
        score: Similarity in [0, 1]
        confidence: Tier derived from score (>=0.8 high, >=0.6 medium)
        method: exact, normalized-exact, combined-fuzzy or invalid-input
    """

    score: float = Field(..., ge=0, le=1)
    confidence: Confidence
    method: str


class BestMatch(BaseModel):
    """Winning candidate from find_best_match()."""

    title: str
    result: MatchResult


class StreamingResult(BaseModel):
    """Outcome of resolving one anime's streaming platforms.

    Attributes:
        platforms: Normalized platforms (empty when nothing was found)
        searched_terms: Titles tried, in order
        source: Adapter name that produced the platforms, or "none"
        success: True when at least one platform was found
    """

    platforms: list[StreamingPlatform] = Field(default_factory=list)
    searched_terms: list[str] = Field(default_factory=list)
    source: str = Field("none")
    success: bool = Field(False)


class CacheEntry(BaseModel):
    """Versioned, timestamped cache value.

    Valid only while ``now - timestamp < ttl`` and the version matches the
    version the reader expects.
    """

    key: CacheKey = Field(..., min_length=1)
    data: Any = None
    timestamp: TimestampSeconds = Field(..., description="Creation time (epoch seconds)")
    ttl: float = Field(..., gt=0, description="Seconds until the entry is stale")
    version: str = Field(..., min_length=1)

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp >= self.ttl


class CacheStats(BaseModel):
    """Cache-wide statistics."""

    total_entries: int = Field(0, ge=0)
    expired_entries: int = Field(0, ge=0)
    total_size: int = Field(0, ge=0, description="Sum of serialized entry sizes in bytes")


class SeasonInfo(BaseModel):
    """A (season, year) pair with its display label."""

    season: Season
    year: int = Field(..., ge=1900, le=2100)
    display_name: str
