"""Fuzzy title matching for anime titles across APIs with inconsistent naming.

Scores are a weighted blend of:
- Levenshtein similarity (edit distance via the Levenshtein C extension)
- Word-set Jaccard similarity
- Containment similarity (substring, else shared-word fraction)

Usage:
    result = calculate_similarity("Attack on Titan", "Attack on Titan Season 2")
    best = find_best_match("Frieren", candidates, min_confidence=Confidence.MEDIUM)
"""

import re

import Levenshtein

from models.models import BestMatch, Confidence, MatchResult
from utils.title_utils import DISALLOWED_CHARS

HIGH_CONFIDENCE_THRESHOLD = 0.8
MEDIUM_CONFIDENCE_THRESHOLD = 0.6

LEVENSHTEIN_WEIGHT = 0.4
WORD_WEIGHT = 0.4
CONTAINMENT_WEIGHT = 0.2


def normalize_title(title: str) -> str:
    """Lowercase, drop punctuation, collapse whitespace."""
    title = DISALLOWED_CHARS.sub("", title.lower())
    return re.sub(r"\s+", " ", title).strip()


def extract_words(title: str) -> set[str]:
    """Word set of the normalized title, ignoring single-character tokens."""
    return {word for word in normalize_title(title).split() if len(word) > 1}


def levenshtein_similarity(a: str, b: str) -> float:
    """1 - distance / longest length; 1.0 when both strings are empty."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - Levenshtein.distance(a, b) / longest


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    union = a | b
    if not union:
        return 1.0
    return len(a & b) / len(union)


def word_similarity(title1: str, title2: str) -> float:
    return jaccard_similarity(extract_words(title1), extract_words(title2))


def containment_similarity(title1: str, title2: str) -> float:
    """How much of the shorter title is found in the longer one.

    Substring containment scores by length ratio; otherwise the fraction of the
    smaller word set present in the larger one.
    """
    norm1 = normalize_title(title1)
    norm2 = normalize_title(title2)
    shorter, longer = (norm1, norm2) if len(norm1) < len(norm2) else (norm2, norm1)

    if not shorter:
        return 0.0
    if shorter in longer:
        return len(shorter) / len(longer)

    words1 = extract_words(title1)
    words2 = extract_words(title2)
    shorter_words, longer_words = (words1, words2) if len(words1) < len(words2) else (words2, words1)

    if not shorter_words:
        return 0.0
    return len(shorter_words & longer_words) / len(shorter_words)


def confidence_for(score: float) -> Confidence:
    if score >= HIGH_CONFIDENCE_THRESHOLD:
        return Confidence.HIGH
    if score >= MEDIUM_CONFIDENCE_THRESHOLD:
        return Confidence.MEDIUM
    return Confidence.LOW


def _meets(confidence: Confidence, minimum: Confidence) -> bool:
    if minimum == Confidence.HIGH:
        return confidence == Confidence.HIGH
    if minimum == Confidence.MEDIUM:
        return confidence != Confidence.LOW
    return True


def calculate_similarity(title1: str, title2: str) -> MatchResult:
    """Score how likely two titles name the same anime.

    Rules, in priority order:
        1. Case-insensitive exact match -> 1.0 ("exact")
        2. Equal after normalization -> 0.95 ("normalized-exact")
        3. Weighted blend 0.4 Levenshtein + 0.4 word Jaccard + 0.2 containment
           ("combined-fuzzy")

    A single empty title never matches ("invalid-input", score 0).

    Args:
        title1: First title
        title2: Second title

    Returns:
        MatchResult with score, confidence tier and method
    """
    if title1.lower() == title2.lower():
        return MatchResult(score=1.0, confidence=Confidence.HIGH, method="exact")

    if not title1 or not title2:
        return MatchResult(score=0.0, confidence=Confidence.LOW, method="invalid-input")

    norm1 = normalize_title(title1)
    norm2 = normalize_title(title2)
    if norm1 == norm2:
        return MatchResult(score=0.95, confidence=Confidence.HIGH, method="normalized-exact")

    combined = (
        levenshtein_similarity(norm1, norm2) * LEVENSHTEIN_WEIGHT
        + word_similarity(title1, title2) * WORD_WEIGHT
        + containment_similarity(title1, title2) * CONTAINMENT_WEIGHT
    )
    # Guard float drift outside [0, 1]
    combined = min(max(combined, 0.0), 1.0)

    return MatchResult(score=combined, confidence=confidence_for(combined), method="combined-fuzzy")


def find_best_match(
    query: str,
    candidates: list[str],
    min_confidence: Confidence = Confidence.MEDIUM,
) -> BestMatch | None:
    """Pick the highest scoring candidate that meets ``min_confidence``.

    Ties keep the first candidate encountered.

    Args:
        query: Title being looked up
        candidates: Titles to compare against
        min_confidence: high -> only high; medium -> high or medium; low -> all

    Returns:
        BestMatch, or None when there are no candidates or none qualify
    """
    if not query or not candidates:
        return None

    best: BestMatch | None = None
    for candidate in candidates:
        result = calculate_similarity(query, candidate)
        if not _meets(result.confidence, min_confidence):
            continue
        if best is None or result.score > best.result.score:
            best = BestMatch(title=candidate, result=result)
    return best


def are_titles_similar(
    title1: str,
    title2: str,
    min_confidence: Confidence = Confidence.MEDIUM,
) -> bool:
    """True when the two titles match at ``min_confidence`` or better."""
    return _meets(calculate_similarity(title1, title2).confidence, min_confidence)
