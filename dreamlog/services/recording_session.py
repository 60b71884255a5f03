"""Recording session controller: one committed transcript per session."""

import logging
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..capture.base import AbstractSpeechCapture
from ..capture.timer import RepeatingTimer
from ..config import DreamlogConfig
from ..errors import CaptureError, CaptureErrorKind, PermissionDeniedError
from ..models.events import CaptureEvent, CaptureEventKind
from ..models.session import RecordingSession, RecordingState, SessionStatus

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], RepeatingTimer]
StateCallback = Callable[[RecordingState], None]


class RecordingSessionController:
    """Coordinates a speech capture capability through a session's lifecycle.

    States: IDLE -> RECORDING -> TRANSCRIBING -> COMPLETED, with FAILED
    reachable from any active state and IDLE reachable from anywhere via
    ``clear_recording()``. Capture errors never escape the public methods;
    they are stored on the session with a human-readable message.

    Capture events may arrive on any thread. Every transition happens under
    one lock, so at most one session is ever active.
    """

    def __init__(self,
                 capture: AbstractSpeechCapture,
                 locale: str = "en-US",
                 tick_interval: float = 1.0,
                 clock: Callable[[], float] = time.monotonic,
                 timer_factory: TimerFactory = RepeatingTimer,
                 on_state_change: Optional[StateCallback] = None):
        """Initialize recording session controller.

        Args:
            capture: Speech capture capability
            locale: Locale passed to the capability on start
            tick_interval: Seconds between duration updates
            clock: Monotonic clock used for duration measurement
            timer_factory: Builds the repeating duration timer
            on_state_change: Called with a state snapshot after every transition
        """
        self.capture = capture
        self.locale = locale
        self.tick_interval = tick_interval
        self._clock = clock
        self._timer_factory = timer_factory
        self._on_state_change = on_state_change

        self._lock = threading.RLock()
        self._session = RecordingSession()
        self._timer: Optional[RepeatingTimer] = None

        self.capture.subscribe(self._on_capture_event)
        logger.info(f"RecordingSessionController ready (topic={capture.topic}, locale={locale})")

    @classmethod
    def from_config(cls, capture: AbstractSpeechCapture, config: DreamlogConfig, **kwargs) -> "RecordingSessionController":
        return cls(capture,
                   locale=config.get_locale(),
                   tick_interval=config.get_tick_interval(),
                   **kwargs)

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def state(self) -> RecordingState:
        """Snapshot of the current session."""
        with self._lock:
            return RecordingState.from_session(self._session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start_recording(self) -> Dict[str, Any]:
        """Start a new session.

        Starting while a session is recording or transcribing is rejected
        without touching the capability. A completed or failed session is
        cleared first.

        Returns:
            Result dictionary with success status and details
        """
        with self._lock:
            if self._session.is_active:
                logger.warning("Recording already in progress")
                return {
                    "success": False,
                    "error": "Already recording",
                    "status": self._session.status.value
                }

            if self._session.status is not SessionStatus.IDLE:
                self._clear()

            if not self._has_permission():
                self._fail(CaptureErrorKind.PERMISSION_DENIED)
                return {"success": False, "error": self._session.error_message}

            try:
                # Clock is read before the capability starts
                started_at = self._clock()
                self.capture.start(self.locale)
            except Exception as e:
                kind = CaptureErrorKind.PERMISSION_DENIED if isinstance(e, PermissionDeniedError) \
                    else CaptureErrorKind.START_FAILED
                logger.error(f"Failed to start speech capture: {e}")
                self._fail(kind)
                return {"success": False, "error": self._session.error_message}

            self._session.started_at = started_at
            self._session.elapsed_seconds = 0
            self._transition(SessionStatus.RECORDING)
            self._start_timer()

            logger.info("Started dream recording")
            return {
                "success": True,
                "started_at": datetime.now().isoformat()
            }

    def stop_recording(self) -> Dict[str, Any]:
        """Stop listening and wait for the final transcript.

        Returns:
            Result dictionary with success status and recorded duration
        """
        with self._lock:
            if self._session.status is not SessionStatus.RECORDING:
                logger.warning("No recording in progress")
                return {
                    "success": False,
                    "error": "Not recording",
                    "status": self._session.status.value
                }

            self._begin_transcribing()
            try:
                self.capture.stop()
            except Exception as e:
                logger.error(f"Error stopping speech capture: {e}")
                self._fail(e.kind if isinstance(e, CaptureError) else CaptureErrorKind.UNKNOWN)
                return {"success": False, "error": self._session.error_message}

            return {
                "success": True,
                "status": self._session.status.value,
                "duration_seconds": self._session.elapsed_seconds
            }

    def cancel_recording(self) -> bool:
        """Abort an active session without producing a transcript.

        Returns:
            True if a session was cancelled
        """
        with self._lock:
            if not self._session.is_active:
                logger.debug(f"Nothing to cancel (status={self._session.status.value})")
                return False

            logger.info("Cancelling dream recording")
            self._cancel_timer()
            self._safe_cancel_capture()
            self._reset()
            return True

    def clear_recording(self) -> None:
        """Return to IDLE from any state, discarding the session. Never raises."""
        with self._lock:
            try:
                self._clear()
            except Exception as e:
                logger.error(f"Error while clearing recording: {e}")
                self._session = RecordingSession()

    def play_recording(self) -> bool:
        """Playback is unsupported for capability-based capture.

        Returns:
            Always False
        """
        logger.info("Playback is not supported for capability-based capture")
        return False

    def close(self) -> None:
        """Cancel any active session and stop listening to the capability."""
        self.cancel_recording()
        self.capture.unsubscribe(self._on_capture_event)

    # ------------------------------------------------------------------
    # Capture events
    # ------------------------------------------------------------------

    def _on_capture_event(self, event: CaptureEvent) -> None:
        with self._lock:
            status = self._session.status
            kind = event.kind

            if kind is CaptureEventKind.START:
                logger.debug("Speech capture started")
            elif kind is CaptureEventKind.PARTIAL:
                if status is SessionStatus.RECORDING:
                    self._session.partial_text = event.text
                    self._notify()
                else:
                    logger.debug(f"Ignoring partial result while {status.value}")
            elif kind is CaptureEventKind.END:
                if status is SessionStatus.RECORDING:
                    logger.info("End of speech detected")
                    self._begin_transcribing()
            elif kind is CaptureEventKind.FINAL:
                if self._session.is_active:
                    if status is SessionStatus.RECORDING:
                        self._begin_transcribing()
                    self._complete(event.best_text, event.confidence)
                else:
                    logger.debug(f"Ignoring final result while {status.value}")
            elif kind is CaptureEventKind.ERROR:
                if self._session.is_active:
                    logger.warning(f"Speech capture error (code={event.code}): {event.message}")
                    self._fail(CaptureErrorKind.from_code(event.code))
                else:
                    logger.debug(f"Ignoring capture error while {status.value}: {event.code}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _begin_transcribing(self) -> None:
        self._cancel_timer()
        self._refresh_elapsed()
        self._session.partial_text = ""
        self._transition(SessionStatus.TRANSCRIBING)

    def _complete(self, text: str, confidence: float) -> None:
        text = (text or "").strip()
        if not text:
            self._fail(CaptureErrorKind.NO_SPEECH)
            return

        self._session.final_text = text
        self._session.confidence = max(0.0, min(1.0, float(confidence or 0.0)))
        self._session.recorded_at = datetime.now()
        self._session.partial_text = ""
        self._transition(SessionStatus.COMPLETED)
        logger.info(f"Dream transcript committed: {len(text)} chars, "
                    f"{self._session.elapsed_seconds}s, confidence {self._session.confidence:.2f}")

    def _fail(self, kind: CaptureErrorKind) -> None:
        was_active = self._session.is_active
        self._cancel_timer()
        if was_active:
            self._safe_cancel_capture()

        self._session.partial_text = ""
        self._session.final_text = ""
        self._session.error_kind = kind
        self._session.error_message = kind.message
        self._transition(SessionStatus.FAILED)
        logger.warning(f"Recording session failed: {kind.value} "
                       f"({'recoverable' if kind.recoverable else 'fatal'})")

    def _clear(self) -> None:
        if self._session.is_active:
            self._cancel_timer()
            self._safe_cancel_capture()
        self._delete_audio_artifact()
        self._reset()

    def _reset(self) -> None:
        previous = self._session.status
        self._session = RecordingSession()
        if previous is not SessionStatus.IDLE:
            logger.info(f"Recording session: {previous.value} -> idle")
            self._notify()

    def _transition(self, to_status: SessionStatus) -> None:
        from_status = self._session.status
        if from_status is to_status:
            return
        self._session.status = to_status
        logger.info(f"Recording session: {from_status.value} -> {to_status.value}")
        self._notify()

    def _notify(self) -> None:
        if not self._on_state_change:
            return
        try:
            self._on_state_change(RecordingState.from_session(self._session))
        except Exception as e:
            logger.error(f"State change callback failed: {e}")

    # ------------------------------------------------------------------
    # Duration timer
    # ------------------------------------------------------------------

    def _start_timer(self) -> None:
        self._cancel_timer()
        self._timer = self._timer_factory(self.tick_interval, self._on_tick)
        self._timer.start()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_tick(self) -> None:
        with self._lock:
            if self._session.status is not SessionStatus.RECORDING:
                return
            if not self._refresh_elapsed():
                self._cancel_timer()
                return
            self._notify()

    def _refresh_elapsed(self) -> bool:
        """Recompute elapsed seconds; on failure keep the last good value."""
        if self._session.started_at is None:
            return False
        try:
            elapsed = int(self._clock() - self._session.started_at)
        except Exception as e:
            logger.error(f"Duration update failed, keeping {self._session.elapsed_seconds}s: {e}")
            return False
        self._session.elapsed_seconds = max(self._session.elapsed_seconds, elapsed)
        return True

    # ------------------------------------------------------------------
    # Capability cleanup
    # ------------------------------------------------------------------

    def _has_permission(self) -> bool:
        try:
            return bool(self.capture.request_permission())
        except Exception as e:
            logger.error(f"Failed to request microphone permission: {e}")
            return False

    def _safe_cancel_capture(self) -> None:
        try:
            self.capture.cancel()
        except Exception as e:
            logger.warning(f"Error cancelling speech capture: {e}")

    def _delete_audio_artifact(self) -> None:
        try:
            audio_path = self.capture.audio_path
            if audio_path:
                Path(audio_path).unlink(missing_ok=True)
                logger.info(f"Deleted audio file: {audio_path}")
        except Exception as e:
            logger.warning(f"Could not delete audio file: {e}")
