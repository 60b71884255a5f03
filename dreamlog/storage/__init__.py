"""Dream storage backends."""

from .file_manager import JsonDreamRepository
from .repository import DreamRepository, InMemoryDreamRepository, generate_dream_id

__all__ = [
    "DreamRepository",
    "InMemoryDreamRepository",
    "JsonDreamRepository",
    "generate_dream_id",
]
