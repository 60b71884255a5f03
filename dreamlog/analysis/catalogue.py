"""Keyword catalogue loader for dream transcript analysis.

The keyword tables live in ``catalogue.yaml`` next to this module so they can
be reviewed, versioned and eventually localized without touching the
analyzers. The packaged catalogue is parsed once and cached; an alternative
file can be loaded with :func:`load_catalogue`.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

CATALOGUE_RESOURCE = "catalogue.yaml"
SUPPORTED_VERSIONS = (1,)


@dataclass(frozen=True)
class Catalogue:
    """Immutable, ordered keyword tables."""
    version: int
    dream_signs: Tuple[str, ...]
    reality_checks: Tuple[Tuple[str, str], ...]  # (keyword, suggestion) pairs
    default_reality_checks: Tuple[str, ...]
    max_reality_checks: int
    detail_words: Tuple[str, ...]
    lucidity_indicators: Tuple[str, ...]
    emotions: Tuple[Tuple[str, Tuple[str, ...]], ...]  # (category, keywords) pairs
    title_keywords: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Catalogue":
        """Build a catalogue from parsed YAML, validating its shape."""
        if not isinstance(data, dict):
            raise ValueError("Catalogue must be a mapping")

        version = data.get('version')
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(f"Unsupported catalogue version: {version}")

        max_checks = data.get('max_reality_checks', 3)
        if not isinstance(max_checks, int) or max_checks < 1:
            raise ValueError(f"max_reality_checks must be a positive integer, got {max_checks!r}")

        return cls(
            version=version,
            dream_signs=_phrases(data, 'dream_signs'),
            reality_checks=tuple(
                (key.lower(), suggestion) for key, suggestion in _mapping(data, 'reality_checks').items()
            ),
            default_reality_checks=_strings(data, 'default_reality_checks'),
            max_reality_checks=max_checks,
            detail_words=_phrases(data, 'detail_words'),
            lucidity_indicators=_phrases(data, 'lucidity_indicators'),
            emotions=tuple(
                (category, _phrase_list(keywords, f"emotions.{category}"))
                for category, keywords in _mapping(data, 'emotions').items()
            ),
            title_keywords=_phrases(data, 'title_keywords'),
        )


def _mapping(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict) or not value:
        raise ValueError(f"Catalogue section '{key}' must be a non-empty mapping")
    return {str(k): v for k, v in value.items()}


def _strings(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list) or not value:
        raise ValueError(f"Catalogue section '{key}' must be a non-empty list")
    return tuple(str(item) for item in value)


def _phrase_list(value: Any, key: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not value:
        raise ValueError(f"Catalogue section '{key}' must be a non-empty list")
    phrases: List[str] = []
    for item in value:
        phrase = str(item).lower()
        if not phrase:
            raise ValueError(f"Catalogue section '{key}' contains an empty phrase")
        phrases.append(phrase)
    return tuple(phrases)


def _phrases(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    """Lower-cased phrase list; matching is always against lower-cased text."""
    return _phrase_list(data.get(key), key)


def load_catalogue(path: Optional[str] = None) -> Catalogue:
    """Load a catalogue from a YAML file, or the packaged one if path is None."""
    if path is None:
        return default_catalogue()

    catalogue_file = Path(path)
    logger.info(f"Loading analysis catalogue from: {catalogue_file}")
    try:
        with open(catalogue_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in catalogue file: {e}")
    return Catalogue.from_dict(data)


@lru_cache(maxsize=None)
def default_catalogue() -> Catalogue:
    """The packaged catalogue, parsed once per process."""
    text = resources.files(__package__).joinpath(CATALOGUE_RESOURCE).read_text(encoding='utf-8')
    catalogue = Catalogue.from_dict(yaml.safe_load(text))
    logger.debug(f"Loaded packaged catalogue v{catalogue.version}: "
                 f"{len(catalogue.dream_signs)} dream signs, {len(catalogue.emotions)} emotions")
    return catalogue
