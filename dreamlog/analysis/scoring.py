"""Clarity, lucidity and quality scoring."""

from typing import List, Optional, Sequence

from .catalogue import Catalogue, default_catalogue
from .signs import normalize

MIN_CLARITY = 1
MAX_CLARITY = 10
MAX_LUCIDITY = 10
WORDS_PER_CLARITY_POINT = 20
POINTS_PER_HIT = 2


def count_hits(text: str, phrases: Sequence[str]) -> int:
    """Number of distinct phrases present in text; repeats count once."""
    return sum(1 for phrase in phrases if phrase in text)


def analyze_clarity(transcription: Optional[str], catalogue: Optional[Catalogue] = None) -> int:
    """Score descriptive richness from 1 to 10.

    Longer descriptions and the presence of detail words (color, texture,
    ...) both raise the score.
    """
    catalogue = catalogue or default_catalogue()
    text = normalize(transcription)
    word_count = len(text.split())
    detail_hits = count_hits(text, catalogue.detail_words)

    clarity = min(MAX_CLARITY, int(word_count / WORDS_PER_CLARITY_POINT + detail_hits * POINTS_PER_HIT))
    return max(MIN_CLARITY, clarity)


def detect_lucidity(transcription: Optional[str], catalogue: Optional[Catalogue] = None) -> int:
    """Score self-awareness in the dream: two points per lucidity indicator, capped at 10."""
    catalogue = catalogue or default_catalogue()
    hits = count_hits(normalize(transcription), catalogue.lucidity_indicators)
    return min(MAX_LUCIDITY, hits * POINTS_PER_HIT)


def quality_tags(confidence: float, clarity: int) -> List[str]:
    """One recognition-confidence tag (or none) followed by one clarity tag."""
    tags: List[str] = []

    if confidence >= 0.9:
        tags.append("high-confidence")
    elif confidence >= 0.7:
        tags.append("medium-confidence")
    elif confidence > 0:
        tags.append("low-confidence")

    if clarity >= 8:
        tags.append("very-vivid")
    elif clarity >= 6:
        tags.append("vivid")
    elif clarity >= 4:
        tags.append("moderate-detail")
    else:
        tags.append("brief")

    return tags
