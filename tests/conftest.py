"""Pytest configuration and fixtures for Dreamlog tests."""

import pytest
import tempfile
import logging
from pathlib import Path
from typing import Callable, List, Optional

from dreamlog.capture.base import AbstractSpeechCapture
from dreamlog.services.dream_store import DreamStore
from dreamlog.services.recording_session import RecordingSessionController
from dreamlog.storage.repository import InMemoryDreamRepository


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FakeSpeechCapture(AbstractSpeechCapture):
    """Scripted speech capability: tests emit events explicitly."""

    def __init__(self, permission: bool = True, start_error: Optional[Exception] = None):
        super().__init__()
        self.permission = permission
        self.start_error = start_error
        self.start_calls = 0
        self.stop_calls = 0
        self.cancel_calls = 0
        self.locales: List[str] = []
        self.artifact: Optional[str] = None

    @property
    def audio_path(self) -> Optional[str]:
        return self.artifact

    def request_permission(self) -> bool:
        return self.permission

    def start(self, locale: str) -> None:
        self.start_calls += 1
        self.locales.append(locale)
        if self.start_error is not None:
            raise self.start_error

    def stop(self) -> None:
        self.stop_calls += 1

    def cancel(self) -> None:
        self.cancel_calls += 1


class ManualTimer:
    """Repeating timer double that only ticks when told to."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def tick(self) -> None:
        if self.started and not self.cancelled:
            self.callback()


class FakeClock:
    """Monotonic clock double."""

    def __init__(self, now: float = 1000.0):
        self.now = now
        self.error: Optional[Exception] = None

    def __call__(self) -> float:
        if self.error is not None:
            raise self.error
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def fake_capture():
    return FakeSpeechCapture()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def timers():
    """Every ManualTimer created by the controller fixture, in order."""
    return []


@pytest.fixture
def timer_factory(timers):
    def factory(interval, callback):
        timer = ManualTimer(interval, callback)
        timers.append(timer)
        return timer
    return factory


@pytest.fixture
def state_changes():
    return []


@pytest.fixture
def controller(fake_capture, fake_clock, timer_factory, state_changes):
    """Controller wired to the scripted capture, fake clock and manual timers."""
    controller = RecordingSessionController(
        fake_capture,
        locale="en-US",
        clock=fake_clock,
        timer_factory=timer_factory,
        on_state_change=state_changes.append,
    )
    yield controller
    controller.close()


@pytest.fixture
def store():
    return DreamStore(InMemoryDreamRepository())


@pytest.fixture
def config_file(tmp_path):
    """Write a config file into a temporary directory and return its path."""
    def write(content: str) -> Path:
        path = tmp_path / "dreamlog.yaml"
        path.write_text(content, encoding="utf-8")
        return path
    return write
