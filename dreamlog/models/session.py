"""Recording session data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..errors import CaptureErrorKind


class SessionStatus(Enum):
    """Lifecycle states of a recording session."""
    IDLE = "idle"
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"
    COMPLETED = "completed"
    FAILED = "failed"


STATUS_MESSAGES = {
    SessionStatus.IDLE: "Ready to record your dream",
    SessionStatus.RECORDING: "Recording your dream...",
    SessionStatus.TRANSCRIBING: "Converting speech to text...",
    SessionStatus.COMPLETED: "Dream captured successfully",
}


@dataclass
class RecordingSession:
    """One attempt to capture and transcribe a spoken dream.

    `final_text` is only ever non-empty while `status` is COMPLETED, and
    `partial_text` is cleared whenever the session leaves RECORDING.
    """
    status: SessionStatus = SessionStatus.IDLE
    started_at: Optional[float] = None  # Monotonic clock reading
    recorded_at: Optional[datetime] = None
    elapsed_seconds: int = 0
    partial_text: str = ""
    final_text: str = ""
    confidence: float = 0.0
    error_kind: Optional[CaptureErrorKind] = None
    error_message: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status in (SessionStatus.RECORDING, SessionStatus.TRANSCRIBING)


@dataclass(frozen=True)
class RecordingState:
    """Snapshot of the current session as shown to the UI layer."""
    status: SessionStatus
    is_recording: bool
    is_transcribing: bool
    transcript: str
    partial_transcript: str
    duration: int
    error: Optional[str]
    confidence: float
    error_kind: Optional[CaptureErrorKind] = None
    recorded_at: Optional[datetime] = None

    @classmethod
    def from_session(cls, session: RecordingSession) -> "RecordingState":
        return cls(
            status=session.status,
            is_recording=session.status is SessionStatus.RECORDING,
            is_transcribing=session.status is SessionStatus.TRANSCRIBING,
            transcript=session.final_text,
            partial_transcript=session.partial_text,
            duration=session.elapsed_seconds,
            error=session.error_message,
            confidence=session.confidence,
            error_kind=session.error_kind,
            recorded_at=session.recorded_at,
        )

    @property
    def status_message(self) -> str:
        if self.status is SessionStatus.FAILED:
            return self.error or CaptureErrorKind.UNKNOWN.message
        return STATUS_MESSAGES[self.status]
