"""Speech capture that replays a known transcript.

Stands in for a real recognizer during development and demos: the
transcript is "heard" one word at a time as partial results, followed by
end-of-speech and a final result.
"""

import logging
import threading
from typing import List, Optional

from ..errors import CaptureErrorKind, CaptureStartError
from .base import AbstractSpeechCapture

logger = logging.getLogger(__name__)


class TranscriptReplayCapture(AbstractSpeechCapture):
    """Replays a transcript word by word on a background thread."""

    def __init__(self,
                 transcript: str,
                 confidence: float = 0.9,
                 word_delay: float = 0.05,
                 permission_granted: bool = True,
                 topic: Optional[str] = None):
        """Initialize replay capture.

        Args:
            transcript: Text to replay
            confidence: Confidence reported with the final result
            word_delay: Seconds between partial results
            permission_granted: Result of request_permission()
            topic: Optional pub/sub topic name
        """
        super().__init__(topic)
        self.transcript = transcript
        self.confidence = confidence
        self.word_delay = word_delay
        self.permission_granted = permission_granted

        self._words: List[str] = transcript.split()
        self._heard = 0
        self._stop_event = threading.Event()
        self._cancelled = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_listening(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def request_permission(self) -> bool:
        return self.permission_granted

    def start(self, locale: str) -> None:
        if self.is_listening:
            raise CaptureStartError("Replay already in progress")

        logger.info(f"Starting transcript replay ({len(self._words)} words, locale={locale})")
        self._heard = 0
        self._cancelled = False
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._replay, daemon=True)
        self._thread.name = "TranscriptReplayThread"
        self._thread.start()

    def stop(self) -> None:
        logger.info("Stopping transcript replay")
        self._stop_event.set()

    def cancel(self) -> None:
        logger.info("Cancelling transcript replay")
        self._cancelled = True
        self._stop_event.set()

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the replay thread has delivered its last event."""
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    def _replay(self) -> None:
        self.emit_start()
        for word_count in range(1, len(self._words) + 1):
            if self._stop_event.wait(self.word_delay):
                break
            self._heard = word_count
            self.emit_partial(" ".join(self._words[:word_count]))

        if self._cancelled:
            logger.debug("Replay cancelled, no result delivered")
            return

        self.emit_end()
        if self._heard == 0:
            self.emit_error(CaptureErrorKind.NO_SPEECH.value, "No words replayed before stop")
            return
        self.emit_final([" ".join(self._words[:self._heard])], self.confidence)
