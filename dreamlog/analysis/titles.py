"""Title generation for dream entries."""

import re
from typing import Optional

from .catalogue import Catalogue, default_catalogue

MAX_TITLE_LENGTH = 50
TRUNCATED_LENGTH = 47
FALLBACK_WORDS = 8
UNTITLED = "Untitled Dream"

_SENTENCE_END = re.compile(r"[.!?]")


def _truncate(text: str) -> str:
    if len(text) > MAX_TITLE_LENGTH:
        return text[:TRUNCATED_LENGTH] + "..."
    return text


def generate_title(transcription: Optional[str], catalogue: Optional[Catalogue] = None) -> str:
    """Derive a short title from a transcript.

    A first sentence of at most 50 characters is used verbatim. Otherwise the
    first title keyword found anywhere in the transcript gives
    "Dream about <keyword>", and failing that the first sentence or first
    eight words are truncated to fit.
    """
    catalogue = catalogue or default_catalogue()
    transcription = transcription or ""

    first_sentence = _SENTENCE_END.split(transcription, maxsplit=1)[0].strip()
    if 0 < len(first_sentence) <= MAX_TITLE_LENGTH:
        return first_sentence

    lowered = transcription.lower()
    for keyword in catalogue.title_keywords:
        if keyword in lowered:
            return f"Dream about {keyword}"

    if len(first_sentence) > MAX_TITLE_LENGTH:
        return _truncate(first_sentence)

    words = " ".join(transcription.split()[:FALLBACK_WORDS])
    return _truncate(words) or UNTITLED
