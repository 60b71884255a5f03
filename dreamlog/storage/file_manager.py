"""File-backed dream repository."""

import os
import json
import logging
from pathlib import Path
from typing import Optional, List

from ..models.dream import DreamEntry
from .repository import DreamRepository

logger = logging.getLogger(__name__)


class JsonDreamRepository(DreamRepository):
    """Stores each dream as ``dreams/<id>.json`` under a data directory.

    An audio file referenced by an entry's recording is removed together
    with the entry.
    """

    def __init__(self, data_dir: str = "./data"):
        """Initialize repository with data directory.

        Args:
            data_dir: Base directory for storing all data
        """
        self.data_dir = Path(data_dir)
        self.dreams_dir = self.data_dir / "dreams"

        # Create directory structure
        self._ensure_directories()

        logger.info(f"JsonDreamRepository initialized with data_dir: {self.data_dir}")

    def _ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in [self.data_dir, self.dreams_dir]:
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory exists: {directory}")

    def _entry_path(self, dream_id: str) -> Path:
        if not dream_id or os.sep in dream_id or (os.altsep and os.altsep in dream_id) or dream_id.startswith('.'):
            raise ValueError(f"Invalid dream id: {dream_id!r}")
        return self.dreams_dir / f"{dream_id}.json"

    def add(self, entry: DreamEntry) -> None:
        path = self._entry_path(entry.id)
        if path.exists():
            raise ValueError(f"Dream already exists: {entry.id}")
        self._write(path, entry)
        logger.info(f"Dream saved: {path}")

    def get(self, dream_id: str) -> Optional[DreamEntry]:
        path = self._entry_path(dream_id)
        if not path.exists():
            logger.debug(f"Dream file not found: {path}")
            return None
        return self._read(path)

    def replace(self, entry: DreamEntry) -> None:
        path = self._entry_path(entry.id)
        if not path.exists():
            raise KeyError(entry.id)
        self._write(path, entry)
        logger.info(f"Dream updated: {path}")

    def delete(self, dream_id: str) -> bool:
        path = self._entry_path(dream_id)
        if not path.exists():
            return False

        entry = self._read(path)
        path.unlink()
        if entry and entry.recording and entry.recording.audio_path:
            self._delete_audio(entry.recording.audio_path)
        logger.info(f"Dream deleted: {dream_id}")
        return True

    def list(self) -> List[DreamEntry]:
        """All readable entries, newest recording first. Unreadable files are skipped."""
        entries = []
        for path in self.dreams_dir.glob("*.json"):
            entry = self._read(path)
            if entry is not None:
                entries.append(entry)

        entries.sort(key=lambda e: (e.recorded_at, e.id), reverse=True)
        logger.debug(f"Found {len(entries)} dreams")
        return entries

    def _write(self, path: Path, entry: DreamEntry) -> None:
        tmp_path = path.with_suffix('.json.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(entry.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)

    def _read(self, path: Path) -> Optional[DreamEntry]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return DreamEntry.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.error(f"Error loading dream file {path}: {e}")
            return None

    def _delete_audio(self, audio_path: str) -> None:
        try:
            Path(audio_path).unlink(missing_ok=True)
            logger.info(f"Deleted audio file: {audio_path}")
        except OSError as e:
            logger.warning(f"Could not delete audio file {audio_path}: {e}")
