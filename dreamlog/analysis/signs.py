"""Dream-sign detection and reality-check suggestions."""

from typing import List, Optional, Sequence

from .catalogue import Catalogue, default_catalogue


def normalize(transcription: Optional[str]) -> str:
    """Lower-case a transcript for matching; None counts as empty."""
    return (transcription or "").lower()


def detect_dream_signs(transcription: Optional[str], catalogue: Optional[Catalogue] = None) -> List[str]:
    """Return the catalogue dream signs contained in the transcript.

    Matching is literal substring containment on the lower-cased text, with
    no stemming, and results follow catalogue order.
    """
    catalogue = catalogue or default_catalogue()
    text = normalize(transcription)
    return [sign for sign in catalogue.dream_signs if sign in text]


def suggest_reality_checks(dream_signs: Sequence[str], catalogue: Optional[Catalogue] = None) -> List[str]:
    """Map detected dream signs to at most ``max_reality_checks`` suggestions.

    Each table keyword is matched against the sign itself (not the
    transcript). Falls back to the default checks when nothing matches.
    """
    catalogue = catalogue or default_catalogue()
    suggestions: List[str] = []

    for sign in dream_signs:
        sign = sign.lower()
        for keyword, suggestion in catalogue.reality_checks:
            if keyword in sign and suggestion not in suggestions:
                suggestions.append(suggestion)

    if not suggestions:
        suggestions.extend(catalogue.default_reality_checks)

    return suggestions[:catalogue.max_reality_checks]
