"""Speech capture capabilities and capture event plumbing."""

from .base import AbstractSpeechCapture
from .publisher import CaptureEventPublisher
from .replay import TranscriptReplayCapture
from .timer import RepeatingTimer

__all__ = [
    "AbstractSpeechCapture",
    "CaptureEventPublisher",
    "TranscriptReplayCapture",
    "RepeatingTimer",
]
