"""Abstract base class for speech capture capabilities."""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ..models.events import CaptureEvent, CaptureEventKind
from .publisher import CaptureEventPublisher

logger = logging.getLogger(__name__)

_topic_ids = itertools.count(1)


class AbstractSpeechCapture(ABC):
    """A speech-to-text capability that reports progress through events.

    Implementations report START, PARTIAL, FINAL, ERROR and END events with
    the ``emit_*`` helpers; listeners registered with :meth:`subscribe`
    receive them on whatever thread the implementation emits from.
    """

    def __init__(self, topic: Optional[str] = None):
        self.publisher = CaptureEventPublisher(topic or f"speech_capture_{next(_topic_ids)}")

    @property
    def topic(self) -> str:
        return self.publisher.topic

    @property
    def audio_path(self) -> Optional[str]:
        """Path of a locally recorded audio file, if this capability keeps one."""
        return None

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask for microphone access.

        Returns:
            True if recording is permitted
        """
        pass

    @abstractmethod
    def start(self, locale: str) -> None:
        """Begin listening. Raises CaptureStartError if the capability cannot start."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop listening and deliver a final result."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Abort listening without delivering a result."""
        pass

    def subscribe(self, listener: Callable[[CaptureEvent], None]) -> None:
        self.publisher.subscribe(listener)

    def unsubscribe(self, listener: Callable[[CaptureEvent], None]) -> None:
        self.publisher.unsubscribe(listener)

    def emit_start(self) -> None:
        self.publisher.publish(CaptureEvent(kind=CaptureEventKind.START))

    def emit_partial(self, text: str) -> None:
        self.publisher.publish(CaptureEvent(kind=CaptureEventKind.PARTIAL, text=text))

    def emit_final(self, alternatives: List[str], confidence: float) -> None:
        self.publisher.publish(CaptureEvent(
            kind=CaptureEventKind.FINAL,
            alternatives=list(alternatives),
            confidence=confidence,
        ))

    def emit_error(self, code: Optional[str], message: str = "") -> None:
        self.publisher.publish(CaptureEvent(kind=CaptureEventKind.ERROR, code=code, message=message))

    def emit_end(self) -> None:
        self.publisher.publish(CaptureEvent(kind=CaptureEventKind.END))
