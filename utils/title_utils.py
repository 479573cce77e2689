"""Anime title extraction and search variations.

Consolidates the title logic used to query streaming sources:
- extract_title_variations(): ordered candidate titles for one anime
- generate_search_variations(): mechanical variants of a single title
- get_all_search_terms(): both combined
"""

import re

from models.models import AnimeRecord

# Word characters, whitespace, Hiragana, Katakana and CJK Unified Ideographs
DISALLOWED_CHARS = re.compile(r"[^\w\s\u3040-\u309f\u30a0-\u30ff\u4e00-\u9faf]")

SEASON_SUFFIX = re.compile(r"\s+(season|part|vol|volume|series)\s+\d+$", re.IGNORECASE)
YEAR_SUFFIX = re.compile(r"\s*\(\d{4}\)$")
LEADING_ARTICLE = re.compile(r"^(the|a|an)\s+", re.IGNORECASE)


def _append_unique(variations: list[str], title: str | None) -> None:
    if title and title.strip() and title not in variations:
        variations.append(title)


def extract_title_variations(anime: AnimeRecord) -> list[str]:
    """Get candidate titles for an anime, most likely to match first.

    Order: English title (best for Western streaming APIs), main title,
    Japanese title, then synonyms. Duplicates and blank titles are dropped.

    Args:
        anime: Anime record

    Returns:
        Ordered, de-duplicated list of non-empty titles

    Examples:
        AnimeRecord(title="Shingeki no Kyojin", title_english="Attack on Titan")
            -> ["Attack on Titan", "Shingeki no Kyojin"]
    """
    variations: list[str] = []
    _append_unique(variations, anime.title_english)
    _append_unique(variations, anime.title)
    _append_unique(variations, anime.title_japanese)
    for synonym in anime.synonyms:
        _append_unique(variations, synonym)
    return variations


def generate_search_variations(title: str) -> list[str]:
    """Generate related search strings for one title.

    Each transform is applied to the original title independently (they are
    not chained). The original title is always first.

    Args:
        title: Title to derive variations from

    Returns:
        List of unique, non-empty variations

    Examples:
        "Attack on Titan (2013)" -> ["Attack on Titan (2013)", "Attack on Titan", ...]
        "The Rising of the Shield Hero Season 2"
            -> [..., "The Rising of the Shield Hero", ..., "Rising of the Shield Hero Season 2"]
    """
    transformations = [
        SEASON_SUFFIX.sub("", title).strip(),
        YEAR_SUFFIX.sub("", title).strip(),
        re.sub(r"\s+", " ", DISALLOWED_CHARS.sub(" ", title)).strip(),
        title.replace(":", ""),
        title.replace("!", ""),
        title.replace("?", ""),
        LEADING_ARTICLE.sub("", title).strip(),
    ]

    variations: list[str] = []
    _append_unique(variations, title)
    for variation in transformations:
        _append_unique(variations, variation)
    return variations


def get_all_search_terms(anime: AnimeRecord) -> list[str]:
    """Expand every candidate title with its search variations.

    Args:
        anime: Anime record

    Returns:
        Ordered, de-duplicated search terms
    """
    terms: list[str] = []
    for title in extract_title_variations(anime):
        for variation in generate_search_variations(title):
            _append_unique(terms, variation)
    return terms
