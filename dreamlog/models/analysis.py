"""Dream analysis result model."""

from dataclasses import dataclass, field
from typing import List


def merge_tags(*groups: List[str]) -> List[str]:
    """Concatenate tag lists, keeping the first occurrence of each tag."""
    merged: List[str] = []
    for group in groups:
        for tag in group:
            if tag not in merged:
                merged.append(tag)
    return merged


@dataclass(frozen=True)
class DreamAnalysis:
    """Everything derived from a single transcript."""
    title: str
    dream_signs: List[str] = field(default_factory=list)
    reality_checks: List[str] = field(default_factory=list)
    clarity: int = 1
    lucidity: int = 0
    emotions: List[str] = field(default_factory=list)
    quality_tags: List[str] = field(default_factory=list)

    @property
    def tags(self) -> List[str]:
        """Dream signs, quality tags and emotions, in that order."""
        return merge_tags(self.dream_signs, self.quality_tags, self.emotions)
