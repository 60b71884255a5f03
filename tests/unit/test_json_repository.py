"""Unit tests for the file-backed dream repository."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from dreamlog.models.dream import DreamEntry, DreamRecording
from dreamlog.services.dream_store import DreamStore
from dreamlog.storage.file_manager import JsonDreamRepository


def make_entry(dream_id: str, recorded_at: datetime, audio_path: str = "") -> DreamEntry:
    recording = DreamRecording(id=f"recording_{dream_id}", transcription="flying over water",
                               recorded_at=recorded_at, duration=12, confidence=0.8, audio_path=audio_path)
    return DreamEntry(
        id=dream_id,
        title="flying over water",
        transcription="flying over water",
        recorded_at=recorded_at,
        duration=12,
        confidence=0.8,
        dream_signs=["flying", "water"],
        reality_checks=["Try to fly by jumping up"],
        clarity=1,
        tags=["flying", "water", "medium-confidence", "brief"],
        recording=recording,
    )


@pytest.mark.unit
class TestJsonDreamRepository:
    """Test cases for JsonDreamRepository."""

    def test_initialization_creates_directories(self, temp_data_dir):
        repository = JsonDreamRepository(temp_data_dir)

        data_path = Path(temp_data_dir)
        assert [p.name for p in data_path.iterdir()] == ["dreams"]
        assert len(repository) == 0

    def test_add_and_get_round_trip(self, temp_data_dir):
        repository = JsonDreamRepository(temp_data_dir)
        entry = make_entry("dream_1", datetime(2026, 10, 18, 6, 30))

        repository.add(entry)

        assert repository.get("dream_1") == entry
        stored = json.loads((Path(temp_data_dir) / "dreams" / "dream_1.json").read_text(encoding="utf-8"))
        assert stored["recorded_at"] == "2026-10-18T06:30:00"
        assert stored["recording"]["id"] == "recording_dream_1"

    def test_add_duplicate_rejected(self, temp_data_dir):
        repository = JsonDreamRepository(temp_data_dir)
        entry = make_entry("dream_1", datetime(2026, 10, 18))
        repository.add(entry)

        with pytest.raises(ValueError):
            repository.add(entry)

    def test_get_missing(self, temp_data_dir):
        assert JsonDreamRepository(temp_data_dir).get("dream_missing") is None

    @pytest.mark.parametrize("dream_id", ["", "../escape", ".hidden", "a/b"])
    def test_invalid_ids_rejected(self, temp_data_dir, dream_id):
        with pytest.raises(ValueError):
            JsonDreamRepository(temp_data_dir).get(dream_id)

    def test_replace(self, temp_data_dir):
        repository = JsonDreamRepository(temp_data_dir)
        entry = make_entry("dream_1", datetime(2026, 10, 18))
        repository.add(entry)

        entry.title = "A new title"
        repository.replace(entry)

        assert repository.get("dream_1").title == "A new title"
        assert not list((Path(temp_data_dir) / "dreams").glob("*.tmp"))

    def test_replace_missing(self, temp_data_dir):
        with pytest.raises(KeyError):
            JsonDreamRepository(temp_data_dir).replace(make_entry("dream_1", datetime(2026, 10, 18)))

    def test_list_newest_first_and_skips_corrupt_files(self, temp_data_dir):
        repository = JsonDreamRepository(temp_data_dir)
        repository.add(make_entry("dream_old", datetime(2026, 10, 1)))
        repository.add(make_entry("dream_new", datetime(2026, 10, 17)))
        (Path(temp_data_dir) / "dreams" / "dream_bad.json").write_text("{not json", encoding="utf-8")

        assert [d.id for d in repository.list()] == ["dream_new", "dream_old"]

    def test_delete_removes_referenced_audio(self, temp_data_dir, tmp_path):
        repository = JsonDreamRepository(temp_data_dir)
        audio_path = str(tmp_path / "dream_1.wav")
        Path(audio_path).write_bytes(b"RIFF0000")
        repository.add(make_entry("dream_1", datetime(2026, 10, 18), audio_path=audio_path))

        assert repository.delete("dream_1") is True
        assert not Path(audio_path).exists()
        assert repository.get("dream_1") is None
        assert repository.delete("dream_1") is False

    def test_store_persists_across_instances(self, temp_data_dir):
        dream_id = DreamStore(JsonDreamRepository(temp_data_dir)).add_dream_from_voice(
            "I was flying over the ocean", 0.9, 20)

        reopened = DreamStore(JsonDreamRepository(temp_data_dir))
        updated = reopened.edit_transcription(dream_id, "I was falling into the ocean")

        assert reopened.get_total_dreams() == 1
        assert updated.dream_signs == ["falling"]
        assert JsonDreamRepository(temp_data_dir).get(dream_id).edited_transcription == \
            "I was falling into the ocean"
