"""Event models published by speech capture implementations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class CaptureEventKind(Enum):
    """Kinds of events a speech capability emits."""
    START = "start"
    PARTIAL = "partial"
    FINAL = "final"
    ERROR = "error"
    END = "end"


@dataclass
class CaptureEvent:
    """A single speech capture event."""
    kind: CaptureEventKind
    text: str = ""
    alternatives: List[str] = field(default_factory=list)  # Final results, best first
    confidence: float = 0.0
    code: Optional[str] = None  # Recognizer error code
    message: str = ""

    @property
    def best_text(self) -> str:
        """Best transcript for this event: first alternative, else `text`."""
        for alternative in self.alternatives:
            if alternative:
                return alternative
        return self.text
