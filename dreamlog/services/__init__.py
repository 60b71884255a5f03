"""Services layer for Dreamlog application logic."""

from .dream_store import DreamStore
from .recording_session import RecordingSessionController

__all__ = [
    "DreamStore",
    "RecordingSessionController",
]
