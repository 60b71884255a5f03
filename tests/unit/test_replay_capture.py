"""Tests for the transcript replay capture and its event publisher."""

import pytest

from dreamlog.capture.publisher import CaptureEventPublisher
from dreamlog.capture.replay import TranscriptReplayCapture
from dreamlog.errors import CaptureStartError
from dreamlog.models.events import CaptureEvent, CaptureEventKind


class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    @property
    def kinds(self):
        return [e.kind for e in self.events]


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.mark.unit
class TestCaptureEventPublisher:

    def test_publish_reaches_subscriber(self, recorder):
        publisher = CaptureEventPublisher("test_capture_publisher")
        publisher.subscribe(recorder)

        publisher.publish(CaptureEvent(kind=CaptureEventKind.PARTIAL, text="hello"))

        assert recorder.events[0].text == "hello"
        publisher.unsubscribe(recorder)

    def test_unsubscribe_stops_delivery(self, recorder):
        publisher = CaptureEventPublisher("test_capture_unsubscribe")
        publisher.subscribe(recorder)
        publisher.unsubscribe(recorder)

        publisher.publish(CaptureEvent(kind=CaptureEventKind.END))

        assert recorder.events == []

    def test_best_text_prefers_first_alternative(self):
        event = CaptureEvent(kind=CaptureEventKind.FINAL, text="fallback", alternatives=["", "best"])
        assert event.best_text == "best"
        assert CaptureEvent(kind=CaptureEventKind.FINAL, text="fallback").best_text == "fallback"


@pytest.mark.unit
class TestTranscriptReplayCapture:

    def test_topics_are_unique(self):
        assert TranscriptReplayCapture("a").topic != TranscriptReplayCapture("a").topic

    def test_full_replay(self, recorder):
        capture = TranscriptReplayCapture("I was flying", confidence=0.8, word_delay=0.001)
        capture.subscribe(recorder)

        capture.start("en-US")
        capture.wait(timeout=5.0)

        assert recorder.kinds == [
            CaptureEventKind.START,
            CaptureEventKind.PARTIAL,
            CaptureEventKind.PARTIAL,
            CaptureEventKind.PARTIAL,
            CaptureEventKind.END,
            CaptureEventKind.FINAL,
        ]
        assert [e.text for e in recorder.events[1:4]] == ["I", "I was", "I was flying"]
        assert recorder.events[-1].best_text == "I was flying"
        assert recorder.events[-1].confidence == 0.8
        assert not capture.is_listening

    def test_stop_before_first_word_reports_no_speech(self, recorder):
        capture = TranscriptReplayCapture("I was flying", word_delay=1.0)
        capture.subscribe(recorder)

        capture.start("en-US")
        capture.stop()
        capture.wait(timeout=5.0)

        assert recorder.kinds == [CaptureEventKind.START, CaptureEventKind.END, CaptureEventKind.ERROR]
        assert recorder.events[-1].code == "no_speech"

    def test_cancel_delivers_no_result(self, recorder):
        capture = TranscriptReplayCapture("I was flying", word_delay=1.0)
        capture.subscribe(recorder)

        capture.start("en-US")
        capture.cancel()
        capture.wait(timeout=5.0)

        assert recorder.kinds == [CaptureEventKind.START]

    def test_start_while_listening_raises(self):
        capture = TranscriptReplayCapture("I was flying", word_delay=1.0)
        capture.start("en-US")
        try:
            with pytest.raises(CaptureStartError):
                capture.start("en-US")
        finally:
            capture.cancel()
            capture.wait(timeout=5.0)

    def test_permission(self):
        assert TranscriptReplayCapture("x").request_permission() is True
        assert TranscriptReplayCapture("x", permission_granted=False).request_permission() is False
