"""Exception types and capture error kinds for Dreamlog."""

from enum import Enum
from typing import Optional, Union


class CaptureErrorKind(Enum):
    """Kinds of speech capture failure a session can end in."""
    PERMISSION_DENIED = "permission_denied"
    START_FAILED = "start_failed"
    NO_SPEECH = "no_speech"
    TIMEOUT = "timeout"
    BUSY = "busy"
    AUDIO = "audio"
    UNKNOWN = "unknown"

    @property
    def recoverable(self) -> bool:
        """True if the caller may simply start a new session."""
        return self is not CaptureErrorKind.PERMISSION_DENIED

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]

    @classmethod
    def from_code(cls, code: Union["CaptureErrorKind", str, int, None]) -> "CaptureErrorKind":
        """Map a recognizer error code to a kind.

        Accepts a kind, its value or name, or one of the numeric codes
        reported by platform speech recognizers.
        """
        if isinstance(code, cls):
            return code
        if code is None:
            return cls.UNKNOWN

        raw = str(code).strip()
        if raw in _NUMERIC_CODES:
            return _NUMERIC_CODES[raw]

        lowered = raw.lower()
        for kind in cls:
            if lowered in (kind.value, kind.name.lower()):
                return kind
        return cls.UNKNOWN


# Android-style SpeechRecognizer codes
_NUMERIC_CODES = {
    "3": CaptureErrorKind.AUDIO,
    "6": CaptureErrorKind.TIMEOUT,
    "7": CaptureErrorKind.NO_SPEECH,
    "8": CaptureErrorKind.BUSY,
    "9": CaptureErrorKind.PERMISSION_DENIED,
}

ERROR_MESSAGES = {
    CaptureErrorKind.PERMISSION_DENIED: "Microphone permission required for dream recording",
    CaptureErrorKind.START_FAILED: "Failed to start recording. Please try again.",
    CaptureErrorKind.NO_SPEECH: "No speech detected. Please try recording again.",
    CaptureErrorKind.TIMEOUT: "Speech recognition timed out. Please try again.",
    CaptureErrorKind.BUSY: "Speech recognizer is busy. Please try again in a moment.",
    CaptureErrorKind.AUDIO: "Audio capture problem. Check your microphone and try again.",
    CaptureErrorKind.UNKNOWN: "Speech recognition failed. Please try recording again.",
}


class DreamlogError(Exception):
    """Base class for all Dreamlog errors."""


class CaptureError(DreamlogError):
    """Raised by speech capture implementations."""

    kind = CaptureErrorKind.UNKNOWN

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.kind.message)


class PermissionDeniedError(CaptureError):
    """Microphone access has not been granted."""

    kind = CaptureErrorKind.PERMISSION_DENIED


class CaptureStartError(CaptureError):
    """The speech capability failed to start."""

    kind = CaptureErrorKind.START_FAILED


class CaptureRuntimeError(CaptureError):
    """The speech capability failed while a session was running."""

    def __init__(self, kind: CaptureErrorKind = CaptureErrorKind.UNKNOWN, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message)


class EmptyTranscriptError(DreamlogError, ValueError):
    """Raised when saving a dream whose transcript is blank."""

    def __init__(self, message: str = "Cannot save empty dream transcription"):
        super().__init__(message)


class DreamNotFoundError(DreamlogError, KeyError):
    """Raised when a dream id is not in the store."""

    def __init__(self, dream_id: str):
        self.dream_id = dream_id
        super().__init__(dream_id)

    def __str__(self) -> str:
        return f"Dream not found: {self.dream_id}"
