"""Dream journal data models."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional, Dict, Any


@dataclass
class DreamRecording:
    """A committed voice recording of a dream."""
    id: str
    transcription: str
    recorded_at: datetime
    duration: int
    confidence: float
    audio_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['recorded_at'] = self.recorded_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DreamRecording":
        data = dict(data)
        data['recorded_at'] = datetime.fromisoformat(data['recorded_at'])
        return cls(**data)


@dataclass
class DreamEntry:
    """A journal entry: transcript plus everything derived from it."""
    id: str
    title: str
    transcription: str
    recorded_at: datetime
    duration: int = 0
    confidence: float = 0.0
    dream_signs: List[str] = field(default_factory=list)  # For lucid dreaming pattern detection
    reality_checks: List[str] = field(default_factory=list)
    clarity: int = 1      # 1-10 dream vividness rating
    lucidity: int = 0     # 0-10 awareness level during dream
    emotions: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    recording: Optional[DreamRecording] = None
    edited_transcription: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data['recorded_at'] = self.recorded_at.isoformat()
        data['recording'] = self.recording.to_dict() if self.recording else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DreamEntry":
        data = dict(data)
        data['recorded_at'] = datetime.fromisoformat(data['recorded_at'])
        if data.get('recording'):
            data['recording'] = DreamRecording.from_dict(data['recording'])
        return cls(**data)
