"""Dream analysis engine: one call from transcript to dream metadata."""

import logging
from typing import Optional

from ..models.analysis import DreamAnalysis
from .catalogue import Catalogue, default_catalogue, load_catalogue
from .emotions import detect_emotions
from .scoring import analyze_clarity, detect_lucidity, quality_tags
from .signs import detect_dream_signs, suggest_reality_checks
from .titles import generate_title

logger = logging.getLogger(__name__)


class DreamAnalysisEngine:
    """Runs every analyzer over a transcript using one keyword catalogue.

    The engine holds no mutable state, so a single instance can be shared
    and `analyze` can be called again whenever a transcript is edited.
    """

    def __init__(self, catalogue: Optional[Catalogue] = None):
        self.catalogue = catalogue or default_catalogue()

    @classmethod
    def from_catalogue_path(cls, path: Optional[str]) -> "DreamAnalysisEngine":
        return cls(load_catalogue(path))

    def analyze(self, transcription: Optional[str], confidence: float = 0.0) -> DreamAnalysis:
        """Analyze a transcript. Never raises; empty input yields floor values."""
        transcription = transcription or ""
        dream_signs = detect_dream_signs(transcription, self.catalogue)
        clarity = analyze_clarity(transcription, self.catalogue)

        analysis = DreamAnalysis(
            title=generate_title(transcription, self.catalogue),
            dream_signs=dream_signs,
            reality_checks=suggest_reality_checks(dream_signs, self.catalogue),
            clarity=clarity,
            lucidity=detect_lucidity(transcription, self.catalogue),
            emotions=detect_emotions(transcription, self.catalogue),
            quality_tags=quality_tags(confidence, clarity),
        )
        logger.debug(f"Analyzed transcript ({len(transcription)} chars): "
                     f"{len(analysis.dream_signs)} dream signs, clarity={analysis.clarity}, "
                     f"lucidity={analysis.lucidity}")
        return analysis


def analyze(transcription: Optional[str], confidence: float = 0.0) -> DreamAnalysis:
    """Analyze a transcript with the packaged catalogue."""
    return DreamAnalysisEngine().analyze(transcription, confidence)
