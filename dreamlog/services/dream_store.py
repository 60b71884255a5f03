"""Dream store: turns committed transcripts into analysed journal entries."""

import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from dataclasses import replace
from datetime import datetime
from typing import Any, List, Optional

from ..analysis.engine import DreamAnalysisEngine
from ..errors import DreamNotFoundError, EmptyTranscriptError
from ..models.analysis import DreamAnalysis
from ..models.dream import DreamEntry, DreamRecording
from ..models.session import RecordingState, SessionStatus
from ..storage.repository import DreamRepository, InMemoryDreamRepository, generate_dream_id

logger = logging.getLogger(__name__)

# Fields computed from the transcription; callers cannot set them directly.
DERIVED_FIELDS = frozenset(
    ["title", "dream_signs", "reality_checks", "clarity", "lucidity", "emotions", "tags"]
)
EDITABLE_FIELDS = frozenset(["transcription", "recorded_at", "duration", "confidence"])

MOST_COMMON_SIGNS_LIMIT = 10


class DreamStore:
    """Creates, edits and queries dream entries in a repository.

    Every entry's analysis fields come from a single
    :class:`DreamAnalysisEngine` run over its transcription, so editing the
    transcription replaces all of them at once.
    """

    def __init__(self,
                 repository: Optional[DreamRepository] = None,
                 engine: Optional[DreamAnalysisEngine] = None):
        """Initialize dream store.

        Args:
            repository: Where entries are kept (in-memory if None)
            engine: Analysis engine (packaged catalogue if None)
        """
        self.repository = repository if repository is not None else InMemoryDreamRepository()
        self.engine = engine or DreamAnalysisEngine()

    # ------------------------------------------------------------------
    # Creating dreams
    # ------------------------------------------------------------------

    def add_dream(self, recording: DreamRecording) -> str:
        """Analyse a recording and store it as a new dream.

        Returns:
            New dream ID
        """
        self._require_text(recording.transcription)
        analysis = self.engine.analyze(recording.transcription, recording.confidence)
        entry = self._build_entry(
            dream_id=generate_dream_id(),
            transcription=recording.transcription,
            recorded_at=recording.recorded_at,
            duration=recording.duration,
            confidence=recording.confidence,
            analysis=analysis,
            recording=recording,
        )
        self.repository.add(entry)

        logger.info(f"Dream saved: \"{entry.title}\" with {len(entry.dream_signs)} dream signs "
                    f"and {len(entry.emotions)} emotions")
        return entry.id

    def add_dream_from_voice(self, transcription: str, confidence: float, duration: int) -> str:
        """Store a dream from a voice transcript.

        Raises:
            EmptyTranscriptError: if the transcript is empty or whitespace

        Returns:
            New dream ID
        """
        self._require_text(transcription)
        recording = DreamRecording(
            id=generate_dream_id("recording"),
            transcription=transcription,
            recorded_at=datetime.now(),
            duration=duration,
            confidence=confidence,
        )
        return self.add_dream(recording)

    def save_session(self, state: RecordingState) -> str:
        """Store the transcript of a completed recording session.

        Raises:
            ValueError: if the session has not completed
            EmptyTranscriptError: if the transcript is blank

        Returns:
            New dream ID
        """
        if state.status is not SessionStatus.COMPLETED:
            raise ValueError(f"Cannot save a dream from a {state.status.value} session")
        self._require_text(state.transcript)

        recording = DreamRecording(
            id=generate_dream_id("recording"),
            transcription=state.transcript,
            recorded_at=state.recorded_at or datetime.now(),
            duration=state.duration,
            confidence=state.confidence,
        )
        return self.add_dream(recording)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def get_dream(self, dream_id: str) -> Optional[DreamEntry]:
        return self.repository.get(dream_id)

    def update_dream(self, dream_id: str, **updates: Any) -> DreamEntry:
        """Apply field updates to a dream.

        A changed transcription (or confidence) re-runs the whole analysis and
        replaces every derived field in one write.

        Raises:
            DreamNotFoundError: if no dream has this id
            ValueError: for unknown or derived fields, or a blank transcription
        """
        dream = self.repository.get(dream_id)
        if dream is None:
            raise DreamNotFoundError(dream_id)

        derived = DERIVED_FIELDS.intersection(updates)
        if derived:
            raise ValueError(f"Derived fields cannot be set directly: {', '.join(sorted(derived))}")
        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown dream fields: {', '.join(sorted(unknown))}")

        transcription = updates.get("transcription", dream.transcription)
        self._require_text(transcription)

        updated = replace(dream, **updates)
        if transcription != dream.transcription:
            updated = replace(updated, edited_transcription=transcription)
        if transcription != dream.transcription or updated.confidence != dream.confidence:
            analysis = self.engine.analyze(updated.transcription, updated.confidence)
            updated = self._apply_analysis(updated, analysis)

        self.repository.replace(updated)
        logger.info(f"Dream updated: {dream_id} ({', '.join(sorted(updates)) or 'no changes'})")
        return updated

    def edit_transcription(self, dream_id: str, transcription: str) -> DreamEntry:
        return self.update_dream(dream_id, transcription=transcription)

    def delete_dream(self, dream_id: str) -> bool:
        deleted = self.repository.delete(dream_id)
        if deleted:
            logger.info(f"Dream deleted: {dream_id}")
        return deleted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_dreams(self) -> List[DreamEntry]:
        return self.repository.list()

    def get_dreams_by_date_range(self, start_date: datetime, end_date: datetime) -> List[DreamEntry]:
        return [d for d in self.repository.list() if start_date <= d.recorded_at <= end_date]

    def get_recent_dreams(self, count: int) -> List[DreamEntry]:
        return self.repository.list()[:max(0, count)]

    def get_total_dreams(self) -> int:
        return len(self.repository.list())

    def get_average_lucidity(self) -> float:
        return self._average([d.lucidity for d in self.repository.list()])

    def get_average_clarity(self) -> float:
        return self._average([d.clarity for d in self.repository.list()])

    def get_most_common_dream_signs(self) -> List[str]:
        """Up to ten dream signs, most frequent first (first seen wins ties)."""
        counts = Counter()
        for dream in self.repository.list():
            counts.update(dream.dream_signs)
        return [sign for sign, _ in counts.most_common(MOST_COMMON_SIGNS_LIMIT)]

    def get_dreams_by_tag(self, tag: str) -> List[DreamEntry]:
        return [
            d for d in self.repository.list()
            if tag in d.tags or tag in d.dream_signs or tag in d.emotions
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_text(transcription: Optional[str]) -> None:
        if not transcription or not transcription.strip():
            raise EmptyTranscriptError()

    @staticmethod
    def _average(values: List[int]) -> float:
        if not values:
            return 0.0
        average = Decimal(sum(values)) / Decimal(len(values))
        return float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def _apply_analysis(dream: DreamEntry, analysis: DreamAnalysis) -> DreamEntry:
        return replace(
            dream,
            title=analysis.title,
            dream_signs=analysis.dream_signs,
            reality_checks=analysis.reality_checks,
            clarity=analysis.clarity,
            lucidity=analysis.lucidity,
            emotions=analysis.emotions,
            tags=analysis.tags,
        )

    @classmethod
    def _build_entry(cls, dream_id: str, transcription: str, recorded_at: datetime, duration: int,
                     confidence: float, analysis: DreamAnalysis,
                     recording: Optional[DreamRecording]) -> DreamEntry:
        entry = DreamEntry(
            id=dream_id,
            title=analysis.title,
            transcription=transcription,
            recorded_at=recorded_at,
            duration=duration,
            confidence=confidence,
            recording=recording,
        )
        return cls._apply_analysis(entry, analysis)
