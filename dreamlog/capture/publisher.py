"""Capture event publisher for pub/sub event delivery."""

import logging
from typing import Callable

from pubsub import pub

from ..models.events import CaptureEvent

logger = logging.getLogger(__name__)


class CaptureEventPublisher:
    """Publishes speech capture events using pubsub.pub."""

    def __init__(self, topic: str):
        """Initialize capture event publisher.

        Args:
            topic: Pub/sub topic name for capture events
        """
        self.topic = topic
        logger.debug(f"CaptureEventPublisher initialized with topic: {topic}")

    def publish(self, event: CaptureEvent) -> None:
        """Publish a capture event to the pub/sub topic.

        Args:
            event: CaptureEvent to publish
        """
        pub.sendMessage(self.topic, event=event)
        logger.debug(f"Published capture event: {event.kind.value} on {self.topic}")

    def subscribe(self, listener: Callable[[CaptureEvent], None]) -> None:
        """Subscribe a listener taking a single ``event`` argument."""
        pub.subscribe(listener, self.topic)

    def unsubscribe(self, listener: Callable[[CaptureEvent], None]) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
        try:
            pub.unsubscribe(listener, self.topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe from {self.topic}: {e}")
