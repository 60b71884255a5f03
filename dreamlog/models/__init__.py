"""Data models for the Dreamlog application."""

from .analysis import DreamAnalysis
from .dream import DreamEntry, DreamRecording
from .events import CaptureEvent, CaptureEventKind
from .session import RecordingSession, RecordingState, SessionStatus

__all__ = [
    "DreamAnalysis",
    "DreamEntry",
    "DreamRecording",
    "CaptureEvent",
    "CaptureEventKind",
    "RecordingSession",
    "RecordingState",
    "SessionStatus",
]
