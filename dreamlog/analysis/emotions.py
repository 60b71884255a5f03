"""Keyword-based emotion tagging."""

from typing import List, Optional

from .catalogue import Catalogue, default_catalogue
from .signs import normalize


def detect_emotions(transcription: Optional[str], catalogue: Optional[Catalogue] = None) -> List[str]:
    """Return every emotion category with at least one keyword in the transcript."""
    catalogue = catalogue or default_catalogue()
    text = normalize(transcription)
    return [
        emotion
        for emotion, keywords in catalogue.emotions
        if any(keyword in text for keyword in keywords)
    ]
