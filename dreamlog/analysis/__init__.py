"""Dream transcript analysis."""

from .catalogue import Catalogue, default_catalogue, load_catalogue
from .emotions import detect_emotions
from .engine import DreamAnalysisEngine, analyze
from .scoring import analyze_clarity, detect_lucidity, quality_tags
from .signs import detect_dream_signs, suggest_reality_checks
from .titles import generate_title

__all__ = [
    "Catalogue",
    "default_catalogue",
    "load_catalogue",
    "detect_emotions",
    "DreamAnalysisEngine",
    "analyze",
    "analyze_clarity",
    "detect_lucidity",
    "quality_tags",
    "detect_dream_signs",
    "suggest_reality_checks",
    "generate_title",
]
